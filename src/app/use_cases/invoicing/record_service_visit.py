"""RecordServiceVisit Use Case

Records a workshop visit together with its line items and invoice.
"""

import logging
from datetime import date, timedelta
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.car_repository import CarRepository
from src.app.repositories.service_visit_repository import ServiceVisitRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.errors import DomainError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_lifecycle import (
    apply_totals,
    build_line_items,
    drop_blank_rows,
    mark_paid,
    validate_line_items,
)
from src.domain.reminder import next_service_due_date
from src.domain.service_visit import ServiceVisit
from src.domain.shop_settings import ShopSettings
from src.domain.totals import compute_totals, ZERO
from .dtos import (
    RecordServiceVisitCommandDTO,
    ServiceVisitRecordedResponseDTO,
)
from .mappers import to_invoice_dto, to_visit_dto

logger = logging.getLogger(__name__)


class RecordServiceVisit:
    """
    Use Case: Record a service visit and raise its invoice

    Business Rules:
    1. Car must exist
    2. At least one valid line item (name, quantity > 0, unit price >= 0)
    3. next_service_due_date = visit_date + reminder_weeks weeks
    4. Invoice totals come from the line items and the tax rate
    5. Invoice is Draft, or Paid on the visit date when mark_paid is set
       (a payment method is then required unless the shop has a default)
    6. Visit, invoice and line items are written in one unit of work

    Flow:
    1. Validate car, line items and payment details
    2. Create service visit
    3. Create invoice with computed totals
    4. Create line items with line_total snapshots
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        car_repo: CarRepository,
        visit_repo: ServiceVisitRepository,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        settings: ShopSettings,
    ):
        self.uow = uow
        self.car_repo = car_repo
        self.visit_repo = visit_repo
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.settings = settings

    async def execute(
        self, command: RecordServiceVisitCommandDTO
    ) -> Result[ServiceVisitRecordedResponseDTO]:
        """
        Execute service visit recording

        Args:
            command: RecordServiceVisitCommandDTO with visit details and line items

        Returns:
            Result[ServiceVisitRecordedResponseDTO]: Visit and invoice or error
        """
        try:
            # Step 1: Validate inputs before any write
            car = await self.car_repo.get_by_id(command.car_id)
            if not car:
                return Return.err(
                    Error(
                        code="CAR_NOT_FOUND",
                        message=f"Car with ID {command.car_id} not found",
                        reason="Car does not exist",
                    )
                )

            items = validate_line_items(drop_blank_rows(command.line_items))

            reminder_weeks = (
                command.reminder_weeks
                if command.reminder_weeks is not None
                else self.settings.default_reminder_weeks
            )
            tax_rate = (
                command.tax_rate
                if command.tax_rate is not None
                else self.settings.default_tax_rate
            )
            totals = compute_totals(items, tax_rate)

            invoice = Invoice(
                invoice_number="",
                status=InvoiceStatus.DRAFT,
                subtotal=ZERO,
                tax_rate=ZERO,
                tax_total=ZERO,
                total=ZERO,
                due_date=command.visit_date + timedelta(days=self.settings.payment_terms_days),
            )
            apply_totals(invoice, totals)

            if command.mark_paid:
                mark_paid(
                    invoice,
                    command.payment_method or self.settings.default_payment_method,
                    command.visit_date,
                )

            # Step 2: Create service visit
            visit = await self.visit_repo.create(
                ServiceVisit(
                    car_id=car.id,
                    visit_date=command.visit_date,
                    odometer_km=command.odometer_km,
                    reminder_weeks=reminder_weeks,
                    next_service_due_date=next_service_due_date(command.visit_date, reminder_weeks),
                    notes=command.notes,
                )
            )

            # Step 3: Create invoice
            invoice.visit_id = visit.id
            invoice.invoice_number = await self.invoice_repo.generate_invoice_number()
            invoice = await self.invoice_repo.create(invoice)

            # Step 4: Create line items
            lines = await self.line_item_repo.create_many(build_line_items(invoice.id, items))

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Recorded visit {visit.id} for car {car.rego_plate}: "
                f"invoice {invoice.invoice_number} {invoice.status.value} total={invoice.total}"
            )

            return Return.ok(
                ServiceVisitRecordedResponseDTO(
                    visit=to_visit_dto(visit),
                    invoice=to_invoice_dto(invoice, lines, date.today()),
                )
            )

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to record service visit for car {command.car_id}: {e}")
            return Return.err(
                Error(
                    code="RECORD_SERVICE_VISIT_FAILED",
                    message="Failed to record service visit",
                    reason=str(e),
                )
            )
