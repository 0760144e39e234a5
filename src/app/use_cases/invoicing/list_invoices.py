"""
List Invoices Use Case

Retrieves invoices with pagination, optionally filtered by effective status.
"""
from datetime import date
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .dtos import ListInvoicesResponseDTO
from .mappers import to_invoice_summary_dto


class ListInvoices:
    """
    Use case: List invoices

    Invoices are ordered by created_at DESC (most recent first). Filtering by
    Sent or Overdue uses the effective status as of today.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
        today: Optional[date] = None,
    ) -> Result[ListInvoicesResponseDTO]:
        today = today or date.today()
        invoices = await self.invoice_repo.list_invoices(
            status=status,
            as_of=today,
            limit=limit,
            offset=offset,
        )

        return Return.ok(
            ListInvoicesResponseDTO(
                invoices=[to_invoice_summary_dto(invoice, today) for invoice in invoices],
                limit=limit,
                offset=offset,
            )
        )
