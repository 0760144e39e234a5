"""MarkInvoicePaid Use Case

Records payment of an invoice.
"""

import logging
from datetime import date
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.errors import DomainError
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_lifecycle import mark_paid
from src.domain.shop_settings import ShopSettings
from .dtos import InvoiceResponseDTO, MarkInvoicePaidCommandDTO
from .mappers import to_invoice_dto

logger = logging.getLogger(__name__)


class MarkInvoicePaid:
    """
    Use Case: Mark invoice as paid

    Business Rules:
    1. Invoice must exist
    2. Allowed from Draft, Sent and Overdue
    3. Re-paying a Paid invoice overwrites payment method and date
    4. Payment method comes from the command, else the shop default;
       with neither, the request is rejected (PAYMENT_METHOD_REQUIRED)
    5. Paid date defaults to today
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        settings: ShopSettings,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.settings = settings

    async def execute(self, command: MarkInvoicePaidCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute payment recording

        Args:
            command: MarkInvoicePaidCommandDTO with invoice id, method and date

        Returns:
            Result[InvoiceResponseDTO]: Paid invoice or error
        """
        try:
            invoice = await self.invoice_repo.get_by_id(command.invoice_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {command.invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            previous_status = invoice.status
            mark_paid(
                invoice,
                command.payment_method or self.settings.default_payment_method,
                command.paid_date or date.today(),
            )
            invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            if previous_status == InvoiceStatus.PAID:
                logger.info(f"Invoice {invoice.invoice_number} payment details updated")
            else:
                logger.info(
                    f"Invoice {invoice.invoice_number} marked as paid "
                    f"({invoice.payment_method.value}, {invoice.paid_date})"
                )

            lines = await self.line_item_repo.get_by_invoice_id(command.invoice_id)
            return Return.ok(to_invoice_dto(invoice, lines, date.today()))

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to mark invoice {command.invoice_id} as paid: {e}")
            return Return.err(
                Error(
                    code="MARK_INVOICE_PAID_FAILED",
                    message="Failed to mark invoice as paid",
                    reason=str(e),
                )
            )
