"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union
from pydantic import BaseModel, Field

from src.domain.invoice import PaymentMethod


class LineItemInputDTO(BaseModel):
    """
    Line item as entered on a service or invoice form

    Numeric fields are kept lenient (str/number/None) so the totals
    preview can apply its zero-fallback; use cases validate before writing.
    """

    name: str = Field(
        default="",
        description="Line item description"
    )

    quantity: Optional[Union[Decimal, float, int, str]] = Field(
        default=1,
        description="Quantity (fractional allowed)"
    )

    unit_price: Optional[Union[Decimal, float, int, str]] = Field(
        default=None,
        description="Price per unit"
    )

    taxable: Optional[bool] = Field(
        default=True,
        description="Whether the line contributes to the taxable base"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Oil Change",
                "quantity": "1",
                "unit_price": "89.00",
                "taxable": True
            }
        }


class EstimateTotalsCommandDTO(BaseModel):
    """
    Command DTO for previewing invoice totals

    Used as input to EstimateTotals use case.
    """

    line_items: List[LineItemInputDTO] = Field(
        default_factory=list,
        description="Line items to total"
    )

    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Tax rate percentage (defaults to the shop tax rate)"
    )


class TotalsResponseDTO(BaseModel):
    """
    Response DTO for totals computation

    Returned by EstimateTotals.
    """

    subtotal: Decimal = Field(..., description="Sum of line totals")
    taxable_base: Decimal = Field(..., description="Sum of taxable line totals")
    tax_rate: Decimal = Field(..., description="Tax rate percentage applied")
    tax_total: Decimal = Field(..., description="Tax rounded to cents")
    total: Decimal = Field(..., description="subtotal + tax_total rounded to cents")

    class Config:
        json_schema_extra = {
            "example": {
                "subtotal": "279.00",
                "taxable_base": "279.00",
                "tax_rate": "10",
                "tax_total": "27.90",
                "total": "306.90"
            }
        }


class CreateCompanyCommandDTO(BaseModel):
    """Command DTO for creating a company"""

    name: str = Field(..., min_length=1)
    primary_phone: Optional[str] = None
    primary_email: Optional[str] = None
    billing_address: Optional[str] = None
    notes: Optional[str] = None


class CompanyResponseDTO(BaseModel):
    company_id: int
    name: str
    primary_phone: Optional[str] = None
    primary_email: Optional[str] = None
    billing_address: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime


class ListCompaniesResponseDTO(BaseModel):
    companies: List[CompanyResponseDTO]


class CreateCustomerCommandDTO(BaseModel):
    """Command DTO for creating a customer"""

    full_name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    company_id: Optional[int] = Field(default=None, description="Employing company")
    notes: Optional[str] = None


class CustomerResponseDTO(BaseModel):
    customer_id: int
    full_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    company_id: Optional[int] = None
    company_name: Optional[str] = None
    created_at: datetime


class ListCustomersResponseDTO(BaseModel):
    customers: List[CustomerResponseDTO]


class RegisterCarCommandDTO(BaseModel):
    """Command DTO for registering a car"""

    rego_plate: str = Field(..., min_length=1, description="Registration plate")
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    vin: Optional[str] = None
    customer_id: Optional[int] = Field(default=None, description="Owning customer")
    company_id: Optional[int] = Field(default=None, description="Owning company")
    notes: Optional[str] = None


class CarResponseDTO(BaseModel):
    car_id: int
    rego_plate: str
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    company_id: Optional[int] = None
    company_name: Optional[str] = None
    created_at: datetime


class ListCarsResponseDTO(BaseModel):
    cars: List[CarResponseDTO]


class RecordServiceVisitCommandDTO(BaseModel):
    """
    Command DTO for recording a service visit

    Creates the visit, its line items and its invoice together.
    """

    car_id: int = Field(..., description="Car serviced")

    visit_date: date = Field(..., description="Calendar date of the visit")

    odometer_km: Optional[int] = Field(
        default=None,
        ge=0,
        description="Odometer reading in km"
    )

    reminder_weeks: Optional[int] = Field(
        default=None,
        ge=0,
        description="Weeks until next service (defaults to the shop setting)"
    )

    line_items: List[LineItemInputDTO] = Field(
        default_factory=list,
        description="Billable work and parts"
    )

    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Tax rate percentage (defaults to the shop tax rate)"
    )

    notes: Optional[str] = None

    mark_paid: bool = Field(
        default=False,
        description="Create the invoice already paid (paid on visit_date)"
    )

    payment_method: Optional[PaymentMethod] = Field(
        default=None,
        description="Required when mark_paid is set, unless the shop has a default"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "car_id": 1,
                "visit_date": "2024-01-01",
                "odometer_km": 85000,
                "reminder_weeks": 8,
                "line_items": [
                    {"name": "Oil Change", "quantity": "1", "unit_price": "89.00", "taxable": True},
                    {"name": "Labour (per hour)", "quantity": "2", "unit_price": "95.00", "taxable": True}
                ],
                "mark_paid": False
            }
        }


class ServiceVisitResponseDTO(BaseModel):
    visit_id: int
    car_id: int
    visit_date: date
    odometer_km: Optional[int] = None
    reminder_weeks: int
    next_service_due_date: date
    notes: Optional[str] = None


class LineItemDTO(BaseModel):
    """Line item in invoice responses"""

    id: int
    name: str
    quantity: Decimal
    unit_price: Decimal
    taxable: bool
    line_total: Decimal
    sort_order: int


class InvoiceSummaryDTO(BaseModel):
    """
    Invoice header as shown in invoice lists

    status is the effective status (Overdue derived at read time);
    stored_status is what is persisted.
    """

    invoice_id: int
    invoice_number: str
    visit_id: int
    status: str
    stored_status: str
    subtotal: Decimal
    tax_rate: Decimal
    tax_total: Decimal
    total: Decimal
    due_date: date
    paid_date: Optional[date] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class InvoiceResponseDTO(InvoiceSummaryDTO):
    """Response DTO for single-invoice operations, with its line items"""

    line_items: List[LineItemDTO] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": 1,
                "invoice_number": "INV-2024-000001",
                "visit_id": 1,
                "status": "Draft",
                "stored_status": "Draft",
                "subtotal": "279.00",
                "tax_rate": "10",
                "tax_total": "27.90",
                "total": "306.90",
                "due_date": "2024-01-15",
                "paid_date": None,
                "payment_method": None,
                "line_items": [],
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z"
            }
        }


class CarServiceVisitDTO(ServiceVisitResponseDTO):
    """A visit in a car's service history with its invoice header"""

    invoice: Optional[InvoiceSummaryDTO] = None


class CarDetailResponseDTO(CarResponseDTO):
    """
    Response DTO for GetCar

    Car, its owners and its service history, most recent visit first.
    """

    vin: Optional[str] = None
    notes: Optional[str] = None
    service_visits: List[CarServiceVisitDTO] = Field(default_factory=list)


class ServiceVisitRecordedResponseDTO(BaseModel):
    """Response DTO for RecordServiceVisit"""

    visit: ServiceVisitResponseDTO
    invoice: InvoiceResponseDTO


class ListInvoicesResponseDTO(BaseModel):
    invoices: List[InvoiceSummaryDTO]
    limit: int
    offset: int


class ReplaceLineItemsCommandDTO(BaseModel):
    """Command DTO for replacing all line items of a draft invoice"""

    invoice_id: int
    line_items: List[LineItemInputDTO] = Field(default_factory=list)
    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="New tax rate (defaults to the invoice's current rate)"
    )


class MarkInvoicePaidCommandDTO(BaseModel):
    """Command DTO for marking an invoice as paid"""

    invoice_id: int
    payment_method: Optional[PaymentMethod] = Field(
        default=None,
        description="Payment method (defaults to the shop setting if configured)"
    )
    paid_date: Optional[date] = Field(
        default=None,
        description="Date paid (defaults to today)"
    )


class UnpaidInvoiceDTO(BaseModel):
    invoice_id: int
    invoice_number: str
    visit_id: int
    total: Decimal
    status: str
    visit_date: date
    due_date: date
    rego_plate: str
    customer_name: Optional[str] = None
    company_name: Optional[str] = None
    days_overdue: int


class ListUnpaidInvoicesResponseDTO(BaseModel):
    invoices: List[UnpaidInvoiceDTO]
    total_outstanding: Decimal
    overdue_count: int


class UpcomingServiceDTO(BaseModel):
    visit_id: int
    car_id: int
    rego_plate: str
    make: Optional[str] = None
    model: Optional[str] = None
    next_service_due_date: date
    days_until_due: int
    customer_name: Optional[str] = None


class ListUpcomingServicesResponseDTO(BaseModel):
    services: List[UpcomingServiceDTO]
    horizon: date


class RevenueStatsResponseDTO(BaseModel):
    today_revenue: Decimal
    week_revenue: Decimal
    month_revenue: Decimal
    all_time_revenue: Decimal
    as_of: date


class DueDigestResultDTO(BaseModel):
    """Summary produced by the due digest worker"""

    unpaid_invoices: int
    overdue_invoices: int
    total_outstanding: Decimal
    upcoming_services: int
    execution_time_ms: int
