"""
List Unpaid Invoices Use Case

Collects every invoice not yet paid, with outstanding and overdue figures.
"""
from datetime import date
from decimal import Decimal
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_lifecycle import days_overdue, effective_status
from src.domain.totals import round_currency
from .dtos import ListUnpaidInvoicesResponseDTO, UnpaidInvoiceDTO


class ListUnpaidInvoices:
    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self, today: Optional[date] = None
    ) -> Result[ListUnpaidInvoicesResponseDTO]:
        """
        List unpaid invoices ordered by due date.

        Args:
            today: Reference date for the Overdue classification (default: today)

        Returns:
            Result[ListUnpaidInvoicesResponseDTO]: Invoices, total outstanding and overdue count
        """
        today = today or date.today()
        rows = await self.invoice_repo.list_unpaid_with_context()

        invoices = []
        total_outstanding = Decimal("0")
        overdue_count = 0
        for invoice, visit, car, customer, company in rows:
            status = effective_status(invoice, today)
            overdue = status == InvoiceStatus.OVERDUE
            if overdue:
                overdue_count += 1
            total_outstanding += invoice.total

            invoices.append(
                UnpaidInvoiceDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    visit_id=visit.id,
                    total=invoice.total,
                    status=status.value,
                    visit_date=visit.visit_date,
                    due_date=invoice.due_date,
                    rego_plate=car.rego_plate,
                    customer_name=customer.full_name if customer else None,
                    company_name=company.name if company else None,
                    days_overdue=days_overdue(invoice, today) if overdue else 0,
                )
            )

        return Return.ok(
            ListUnpaidInvoicesResponseDTO(
                invoices=invoices,
                total_outstanding=round_currency(total_outstanding),
                overdue_count=overdue_count,
            )
        )
