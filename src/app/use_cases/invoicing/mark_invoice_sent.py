"""MarkInvoiceSent Use Case

Moves a draft invoice to Sent.
"""

import logging
from datetime import date
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.errors import DomainError
from src.domain.invoice_lifecycle import mark_sent
from .dtos import InvoiceResponseDTO
from .mappers import to_invoice_dto

logger = logging.getLogger(__name__)


class MarkInvoiceSent:
    """
    Use Case: Mark invoice as sent

    Business Rules:
    1. Invoice must exist
    2. Only Draft invoices can be sent
    3. Totals and line items are untouched
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo

    async def execute(self, invoice_id: int) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            mark_sent(invoice)
            invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(f"Invoice {invoice.invoice_number} marked as sent")

            lines = await self.line_item_repo.get_by_invoice_id(invoice_id)
            return Return.ok(to_invoice_dto(invoice, lines, date.today()))

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to mark invoice {invoice_id} as sent: {e}")
            return Return.err(
                Error(
                    code="MARK_INVOICE_SENT_FAILED",
                    message="Failed to mark invoice as sent",
                    reason=str(e),
                )
            )
