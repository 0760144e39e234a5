"""ReplaceInvoiceLines Use Case

Replaces every line item of a draft invoice and recomputes its totals.
"""

import logging
from datetime import date
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.errors import DomainError
from src.domain.invoice_lifecycle import (
    apply_totals,
    build_line_items,
    drop_blank_rows,
    ensure_editable,
    validate_line_items,
)
from src.domain.totals import compute_totals
from .dtos import InvoiceResponseDTO, ReplaceLineItemsCommandDTO
from .mappers import to_invoice_dto

logger = logging.getLogger(__name__)


class ReplaceInvoiceLines:
    """
    Use Case: Replace the line items of a draft invoice

    Business Rules:
    1. Invoice must exist and be a Draft
    2. New line items must pass validation
    3. Tax rate defaults to the rate already on the invoice
    4. Old lines are removed and new lines written in input order
    5. subtotal, tax_total and total are recomputed from the new lines
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

    async def execute(self, command: ReplaceLineItemsCommandDTO) -> Result[InvoiceResponseDTO]:
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

            ensure_editable(invoice)
            items = validate_line_items(drop_blank_rows(command.line_items))

            tax_rate = command.tax_rate if command.tax_rate is not None else invoice.tax_rate
            apply_totals(invoice, compute_totals(items, tax_rate))

            await self.line_item_repo.delete_by_invoice_id(invoice.id)
            lines = await self.line_item_repo.create_many(build_line_items(invoice.id, items))
            invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(
                f"Invoice {invoice.invoice_number} line items replaced "
                f"({len(lines)} lines, total={invoice.total})"
            )

            return Return.ok(to_invoice_dto(invoice, lines, date.today()))

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to replace line items of invoice {command.invoice_id}: {e}")
            return Return.err(
                Error(
                    code="REPLACE_INVOICE_LINES_FAILED",
                    message="Failed to replace invoice line items",
                    reason=str(e),
                )
            )
