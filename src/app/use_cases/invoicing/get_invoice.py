"""
Get Invoice Use Case

Retrieves an invoice with its line items and effective status.
"""
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from .dtos import InvoiceResponseDTO
from .mappers import to_invoice_dto


class GetInvoice:
    def __init__(self, invoice_repo: InvoiceRepository, line_item_repo: LineItemRepository):
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo

    async def execute(
        self, invoice_id: int, today: Optional[date] = None
    ) -> Result[InvoiceResponseDTO]:
        """
        Retrieve invoice details.

        Args:
            invoice_id: Invoice ID
            today: Reference date for the Overdue classification (default: today)

        Returns:
            Result[InvoiceResponseDTO]: Invoice with line items
        """
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {invoice_id} not found",
                    reason="Invoice does not exist",
                )
            )

        lines = await self.line_item_repo.get_by_invoice_id(invoice_id)
        return Return.ok(to_invoice_dto(invoice, lines, today or date.today()))
