"""Unit tests for RecordServiceVisit use case

Tests cover:
- Visit, invoice and line items created together
- Reminder date and invoice due date
- Paid-at-counter visits
- Validation failures leave nothing written
"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.record_service_visit import RecordServiceVisit
from src.app.use_cases.invoicing.dtos import LineItemInputDTO, RecordServiceVisitCommandDTO
from src.domain.car import Car
from src.domain.invoice import InvoiceStatus, PaymentMethod
from src.domain.shop_settings import ShopSettings


@pytest.fixture
def mock_repos():
    car_repo = MagicMock()
    visit_repo = MagicMock()
    invoice_repo = MagicMock()
    line_item_repo = MagicMock()

    car_repo.get_by_id = AsyncMock(return_value=Car(id=1, rego_plate="ABC123"))

    async def create_visit(visit):
        visit.id = 10
        return visit

    async def create_invoice(invoice):
        invoice.id = 20
        invoice.created_at = datetime(2024, 1, 1)
        invoice.updated_at = datetime(2024, 1, 1)
        return invoice

    async def create_lines(lines):
        for index, line in enumerate(lines, start=1):
            line.id = index
        return lines

    visit_repo.create = AsyncMock(side_effect=create_visit)
    invoice_repo.generate_invoice_number = AsyncMock(return_value="INV-2024-000001")
    invoice_repo.create = AsyncMock(side_effect=create_invoice)
    line_item_repo.create_many = AsyncMock(side_effect=create_lines)

    return car_repo, visit_repo, invoice_repo, line_item_repo


@pytest.fixture
def use_case(mock_uow, mock_repos, shop_settings):
    car_repo, visit_repo, invoice_repo, line_item_repo = mock_repos
    return RecordServiceVisit(
        uow=mock_uow,
        car_repo=car_repo,
        visit_repo=visit_repo,
        invoice_repo=invoice_repo,
        line_item_repo=line_item_repo,
        settings=shop_settings,
    )


def make_command(**overrides):
    data = dict(
        car_id=1,
        visit_date=date(2024, 1, 1),
        odometer_km=85000,
        line_items=[
            LineItemInputDTO(name="Oil Change", quantity="1", unit_price="89.00"),
            LineItemInputDTO(name="Labour", quantity="2", unit_price="95.00"),
        ],
    )
    data.update(overrides)
    return RecordServiceVisitCommandDTO(**data)


@pytest.mark.asyncio
class TestRecordServiceVisitSuccess:
    async def test_creates_visit_invoice_and_lines(self, use_case, mock_repos, mock_uow):
        """
        Given: A known car and two taxable lines
        When: The visit is recorded with default settings
        Then: A draft invoice for 306.90 is raised and the next service is 8 weeks out
        """
        _, visit_repo, invoice_repo, line_item_repo = mock_repos

        result = await use_case.execute(make_command())

        assert result.is_ok()
        visit = result.value.visit
        invoice = result.value.invoice
        assert visit.visit_id == 10
        assert visit.reminder_weeks == 8
        assert visit.next_service_due_date == date(2024, 2, 26)
        assert invoice.invoice_id == 20
        assert invoice.visit_id == 10
        assert invoice.invoice_number == "INV-2024-000001"
        assert invoice.stored_status == "Draft"
        assert invoice.subtotal == Decimal("279.00")
        assert invoice.tax_total == Decimal("27.90")
        assert invoice.total == Decimal("306.90")
        assert invoice.due_date == date(2024, 1, 15)
        assert [line.name for line in invoice.line_items] == ["Oil Change", "Labour"]

        created_lines = line_item_repo.create_many.call_args[0][0]
        assert all(line.invoice_id == 20 for line in created_lines)
        mock_uow.commit.assert_called_once()

    async def test_custom_reminder_and_tax(self, use_case):
        result = await use_case.execute(make_command(reminder_weeks=12, tax_rate=Decimal("0")))

        assert result.value.visit.next_service_due_date == date(2024, 3, 25)
        assert result.value.invoice.tax_total == Decimal("0.00")
        assert result.value.invoice.total == Decimal("279.00")

    async def test_blank_rows_are_ignored(self, use_case, mock_repos):
        _, _, _, line_item_repo = mock_repos

        result = await use_case.execute(
            make_command(
                line_items=[
                    LineItemInputDTO(name="Oil Change", quantity="1", unit_price="89.00"),
                    LineItemInputDTO(),
                ]
            )
        )

        assert result.is_ok()
        assert len(line_item_repo.create_many.call_args[0][0]) == 1

    async def test_paid_at_counter(self, use_case):
        result = await use_case.execute(
            make_command(mark_paid=True, payment_method=PaymentMethod.CARD)
        )

        invoice = result.value.invoice
        assert invoice.status == "Paid"
        assert invoice.payment_method == "Card"
        assert invoice.paid_date == date(2024, 1, 1)

    async def test_paid_at_counter_uses_shop_default_method(self, mock_uow, mock_repos):
        car_repo, visit_repo, invoice_repo, line_item_repo = mock_repos
        use_case = RecordServiceVisit(
            mock_uow, car_repo, visit_repo, invoice_repo, line_item_repo,
            ShopSettings(default_payment_method=PaymentMethod.CASH),
        )

        result = await use_case.execute(make_command(mark_paid=True))

        assert result.value.invoice.payment_method == "Cash"


@pytest.mark.asyncio
class TestRecordServiceVisitFailures:
    async def test_unknown_car(self, use_case, mock_repos, mock_uow):
        car_repo, visit_repo, _, _ = mock_repos
        car_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute(make_command(car_id=99))

        assert result.is_err()
        assert result.error.code == "CAR_NOT_FOUND"
        visit_repo.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_no_line_items(self, use_case, mock_repos, mock_uow):
        _, visit_repo, _, _ = mock_repos

        result = await use_case.execute(make_command(line_items=[LineItemInputDTO()]))

        assert result.is_err()
        assert result.error.code == "EMPTY_LINE_ITEMS"
        visit_repo.create.assert_not_called()
        mock_uow.rollback.assert_called_once()

    async def test_non_positive_quantity(self, use_case, mock_repos):
        _, visit_repo, _, _ = mock_repos

        result = await use_case.execute(
            make_command(line_items=[LineItemInputDTO(name="Labour", quantity="0", unit_price="95")])
        )

        assert result.error.code == "INVALID_LINE_ITEM"
        visit_repo.create.assert_not_called()

    async def test_paid_without_method(self, use_case, mock_repos):
        _, visit_repo, _, _ = mock_repos

        result = await use_case.execute(make_command(mark_paid=True))

        assert result.is_err()
        assert result.error.code == "PAYMENT_METHOD_REQUIRED"
        visit_repo.create.assert_not_called()

    async def test_repository_failure_rolls_back(self, use_case, mock_repos, mock_uow):
        _, _, invoice_repo, _ = mock_repos
        invoice_repo.create = AsyncMock(side_effect=Exception("constraint violated"))

        result = await use_case.execute(make_command())

        assert result.is_err()
        assert result.error.code == "RECORD_SERVICE_VISIT_FAILED"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
