"""Entity to response DTO mapping shared by invoicing use cases"""

from datetime import date
from typing import List, Optional
from src.domain.car import Car
from src.domain.company import Company
from src.domain.customer import Customer
from src.domain.invoice import Invoice
from src.domain.invoice_lifecycle import effective_status
from src.domain.line_item import LineItem
from src.domain.service_visit import ServiceVisit
from src.domain.totals import line_total
from .dtos import (
    CarResponseDTO,
    CompanyResponseDTO,
    CustomerResponseDTO,
    InvoiceResponseDTO,
    InvoiceSummaryDTO,
    LineItemDTO,
    ServiceVisitResponseDTO,
)


def to_line_item_dto(line: LineItem) -> LineItemDTO:
    return LineItemDTO(
        id=line.id,
        name=line.name,
        quantity=line.quantity,
        unit_price=line.unit_price,
        taxable=line.taxable,
        line_total=line_total(line),
        sort_order=line.sort_order,
    )


def _invoice_fields(invoice: Invoice, today: date) -> dict:
    return dict(
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
        visit_id=invoice.visit_id,
        status=effective_status(invoice, today).value,
        stored_status=invoice.status.value,
        subtotal=invoice.subtotal,
        tax_rate=invoice.tax_rate,
        tax_total=invoice.tax_total,
        total=invoice.total,
        due_date=invoice.due_date,
        paid_date=invoice.paid_date,
        payment_method=invoice.payment_method.value if invoice.payment_method else None,
        notes=invoice.notes,
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


def to_invoice_summary_dto(invoice: Invoice, today: date) -> InvoiceSummaryDTO:
    return InvoiceSummaryDTO(**_invoice_fields(invoice, today))


def to_invoice_dto(invoice: Invoice, lines: List[LineItem], today: date) -> InvoiceResponseDTO:
    return InvoiceResponseDTO(
        **_invoice_fields(invoice, today),
        line_items=[to_line_item_dto(line) for line in lines],
    )


def to_visit_dto(visit: ServiceVisit) -> ServiceVisitResponseDTO:
    return ServiceVisitResponseDTO(
        visit_id=visit.id,
        car_id=visit.car_id,
        visit_date=visit.visit_date,
        odometer_km=visit.odometer_km,
        reminder_weeks=visit.reminder_weeks,
        next_service_due_date=visit.next_service_due_date,
        notes=visit.notes,
    )


def to_company_dto(company: Company) -> CompanyResponseDTO:
    return CompanyResponseDTO(
        company_id=company.id,
        name=company.name,
        primary_phone=company.primary_phone,
        primary_email=company.primary_email,
        billing_address=company.billing_address,
        notes=company.notes,
        created_at=company.created_at,
    )


def to_customer_dto(customer: Customer, company: Optional[Company] = None) -> CustomerResponseDTO:
    return CustomerResponseDTO(
        customer_id=customer.id,
        full_name=customer.full_name,
        phone=customer.phone,
        email=customer.email,
        company_id=customer.company_id,
        company_name=company.name if company else None,
        created_at=customer.created_at,
    )


def car_fields(
    car: Car, customer: Optional[Customer] = None, company: Optional[Company] = None
) -> dict:
    return dict(
        car_id=car.id,
        rego_plate=car.rego_plate,
        make=car.make,
        model=car.model,
        year=car.year,
        customer_id=car.customer_id,
        customer_name=customer.full_name if customer else None,
        company_id=car.company_id,
        company_name=company.name if company else None,
        created_at=car.created_at,
    )


def to_car_dto(
    car: Car, customer: Optional[Customer] = None, company: Optional[Company] = None
) -> CarResponseDTO:
    return CarResponseDTO(**car_fields(car, customer, company))
