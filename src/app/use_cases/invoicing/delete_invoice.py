"""DeleteInvoice Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete an invoice together with its line items

    The service visit stays on record.
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, invoice_id: int) -> Result[None]:
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

            invoice_number = invoice.invoice_number
            await self.invoice_repo.delete(invoice)
            await self.uow.commit()

            logger.info(f"Invoice {invoice_number} deleted")
            return Return.ok(None)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to delete invoice {invoice_id}: {e}")
            return Return.err(
                Error(
                    code="DELETE_INVOICE_FAILED",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )
