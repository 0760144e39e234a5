"""Unit tests for invoice lifecycle use cases

Covers GetInvoice, MarkInvoiceSent, MarkInvoicePaid, ReplaceInvoiceLines
and DeleteInvoice.
"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.delete_invoice import DeleteInvoice
from src.app.use_cases.invoicing.get_invoice import GetInvoice
from src.app.use_cases.invoicing.mark_invoice_paid import MarkInvoicePaid
from src.app.use_cases.invoicing.mark_invoice_sent import MarkInvoiceSent
from src.app.use_cases.invoicing.replace_invoice_lines import ReplaceInvoiceLines
from src.app.use_cases.invoicing.dtos import (
    LineItemInputDTO,
    MarkInvoicePaidCommandDTO,
    ReplaceLineItemsCommandDTO,
)
from src.domain.invoice import Invoice, InvoiceStatus, PaymentMethod
from src.domain.line_item import LineItem
from src.domain.shop_settings import ShopSettings


def make_invoice(status=InvoiceStatus.DRAFT, due_date=None):
    return Invoice(
        id=1,
        visit_id=1,
        invoice_number="INV-2024-000001",
        status=status,
        subtotal=Decimal("279.00"),
        tax_rate=Decimal("10"),
        tax_total=Decimal("27.90"),
        total=Decimal("306.90"),
        due_date=due_date or date.today() + timedelta(days=14),
        created_at=datetime(2024, 1, 1),
        updated_at=datetime(2024, 1, 1),
    )


def make_lines():
    return [
        LineItem(id=1, invoice_id=1, name="Oil Change", quantity=Decimal("1"),
                 unit_price=Decimal("89.00"), taxable=True, sort_order=0),
        LineItem(id=2, invoice_id=1, name="Labour", quantity=Decimal("2"),
                 unit_price=Decimal("95.00"), taxable=True, sort_order=1),
    ]


async def passthrough(entity):
    return entity


async def assign_ids(lines):
    for index, line in enumerate(lines, start=1):
        line.id = index
    return lines


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=passthrough)
    return repo


@pytest.fixture
def mock_line_item_repo():
    repo = MagicMock()
    repo.get_by_invoice_id = AsyncMock(return_value=make_lines())
    return repo


@pytest.mark.asyncio
class TestGetInvoice:
    async def test_returns_invoice_with_lines(self, mock_invoice_repo, mock_line_item_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())

        result = await GetInvoice(mock_invoice_repo, mock_line_item_repo).execute(1)

        assert result.is_ok()
        assert result.value.total == Decimal("306.90")
        assert [line.line_total for line in result.value.line_items] == [
            Decimal("89.00"), Decimal("190.00")
        ]

    async def test_sent_past_due_reported_overdue(self, mock_invoice_repo, mock_line_item_repo):
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.SENT, due_date=date(2024, 1, 15))
        )

        result = await GetInvoice(mock_invoice_repo, mock_line_item_repo).execute(
            1, today=date(2024, 2, 1)
        )

        assert result.value.status == "Overdue"
        assert result.value.stored_status == "Sent"

    async def test_not_found(self, mock_invoice_repo, mock_line_item_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await GetInvoice(mock_invoice_repo, mock_line_item_repo).execute(404)

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"


@pytest.mark.asyncio
class TestMarkInvoiceSent:
    async def test_draft_to_sent(self, mock_uow, mock_invoice_repo, mock_line_item_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())

        result = await MarkInvoiceSent(mock_uow, mock_invoice_repo, mock_line_item_repo).execute(1)

        assert result.is_ok()
        assert result.value.status == "Sent"
        mock_uow.commit.assert_called_once()

    async def test_paid_cannot_be_sent(self, mock_uow, mock_invoice_repo, mock_line_item_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(status=InvoiceStatus.PAID))

        result = await MarkInvoiceSent(mock_uow, mock_invoice_repo, mock_line_item_repo).execute(1)

        assert result.is_err()
        assert result.error.code == "INVALID_INVOICE_STATUS"
        mock_invoice_repo.update.assert_not_called()
        mock_uow.rollback.assert_called_once()

    async def test_not_found(self, mock_uow, mock_invoice_repo, mock_line_item_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await MarkInvoiceSent(mock_uow, mock_invoice_repo, mock_line_item_repo).execute(9)

        assert result.error.code == "INVOICE_NOT_FOUND"


@pytest.mark.asyncio
class TestMarkInvoicePaid:
    @pytest.mark.parametrize("status", [InvoiceStatus.DRAFT, InvoiceStatus.SENT])
    async def test_paid_from_draft_or_sent(
        self, status, mock_uow, mock_invoice_repo, mock_line_item_repo, shop_settings
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(status=status))
        use_case = MarkInvoicePaid(mock_uow, mock_invoice_repo, mock_line_item_repo, shop_settings)

        result = await use_case.execute(
            MarkInvoicePaidCommandDTO(
                invoice_id=1, payment_method=PaymentMethod.CHEQUE, paid_date=date(2024, 1, 20)
            )
        )

        assert result.is_ok()
        assert result.value.status == "Paid"
        assert result.value.payment_method == "Cheque"
        assert result.value.paid_date == date(2024, 1, 20)
        mock_uow.commit.assert_called_once()

    async def test_paid_date_defaults_to_today(
        self, mock_uow, mock_invoice_repo, mock_line_item_repo, shop_settings
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        use_case = MarkInvoicePaid(mock_uow, mock_invoice_repo, mock_line_item_repo, shop_settings)

        result = await use_case.execute(
            MarkInvoicePaidCommandDTO(invoice_id=1, payment_method=PaymentMethod.CASH)
        )

        assert result.value.paid_date == date.today()

    async def test_method_required_without_shop_default(
        self, mock_uow, mock_invoice_repo, mock_line_item_repo, shop_settings
    ):
        invoice = make_invoice()
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        use_case = MarkInvoicePaid(mock_uow, mock_invoice_repo, mock_line_item_repo, shop_settings)

        result = await use_case.execute(MarkInvoicePaidCommandDTO(invoice_id=1))

        assert result.is_err()
        assert result.error.code == "PAYMENT_METHOD_REQUIRED"
        assert invoice.status == InvoiceStatus.DRAFT
        mock_invoice_repo.update.assert_not_called()

    async def test_shop_default_method_applies(
        self, mock_uow, mock_invoice_repo, mock_line_item_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        settings = ShopSettings(default_payment_method=PaymentMethod.CASH)
        use_case = MarkInvoicePaid(mock_uow, mock_invoice_repo, mock_line_item_repo, settings)

        result = await use_case.execute(MarkInvoicePaidCommandDTO(invoice_id=1))

        assert result.value.payment_method == "Cash"

    async def test_repaying_overwrites_details(
        self, mock_uow, mock_invoice_repo, mock_line_item_repo, shop_settings
    ):
        invoice = make_invoice(status=InvoiceStatus.PAID)
        invoice.payment_method = PaymentMethod.CASH
        invoice.paid_date = date(2024, 1, 2)
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        use_case = MarkInvoicePaid(mock_uow, mock_invoice_repo, mock_line_item_repo, shop_settings)

        result = await use_case.execute(
            MarkInvoicePaidCommandDTO(
                invoice_id=1, payment_method=PaymentMethod.CARD, paid_date=date(2024, 1, 3)
            )
        )

        assert result.value.payment_method == "Card"
        assert result.value.paid_date == date(2024, 1, 3)


@pytest.mark.asyncio
class TestReplaceInvoiceLines:
    async def test_replaces_lines_and_recomputes(
        self, mock_uow, mock_invoice_repo, mock_line_item_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_line_item_repo.delete_by_invoice_id = AsyncMock()
        mock_line_item_repo.create_many = AsyncMock(side_effect=assign_ids)

        result = await ReplaceInvoiceLines(mock_uow, mock_invoice_repo, mock_line_item_repo).execute(
            ReplaceLineItemsCommandDTO(
                invoice_id=1,
                line_items=[
                    LineItemInputDTO(name="Brake Pads", quantity=1, unit_price="120.00"),
                    LineItemInputDTO(name="Disposal Fee", quantity=1, unit_price="15.00", taxable=False),
                ],
            )
        )

        assert result.is_ok()
        assert result.value.subtotal == Decimal("135.00")
        assert result.value.tax_rate == Decimal("10")
        assert result.value.tax_total == Decimal("12.00")
        assert result.value.total == Decimal("147.00")
        mock_line_item_repo.delete_by_invoice_id.assert_called_once_with(1)
        mock_uow.commit.assert_called_once()

    async def test_sent_invoice_is_locked(self, mock_uow, mock_invoice_repo, mock_line_item_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(status=InvoiceStatus.SENT))
        mock_line_item_repo.delete_by_invoice_id = AsyncMock()

        result = await ReplaceInvoiceLines(mock_uow, mock_invoice_repo, mock_line_item_repo).execute(
            ReplaceLineItemsCommandDTO(
                invoice_id=1,
                line_items=[LineItemInputDTO(name="Brake Pads", quantity=1, unit_price="120.00")],
            )
        )

        assert result.error.code == "INVALID_INVOICE_STATUS"
        mock_line_item_repo.delete_by_invoice_id.assert_not_called()

    async def test_empty_replacement_rejected(
        self, mock_uow, mock_invoice_repo, mock_line_item_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_line_item_repo.delete_by_invoice_id = AsyncMock()

        result = await ReplaceInvoiceLines(mock_uow, mock_invoice_repo, mock_line_item_repo).execute(
            ReplaceLineItemsCommandDTO(invoice_id=1, line_items=[])
        )

        assert result.error.code == "EMPTY_LINE_ITEMS"
        mock_line_item_repo.delete_by_invoice_id.assert_not_called()


@pytest.mark.asyncio
class TestDeleteInvoice:
    async def test_deletes_invoice(self, mock_uow, mock_invoice_repo):
        invoice = make_invoice(status=InvoiceStatus.PAID)
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        mock_invoice_repo.delete = AsyncMock()

        result = await DeleteInvoice(mock_uow, mock_invoice_repo).execute(1)

        assert result.is_ok()
        mock_invoice_repo.delete.assert_called_once_with(invoice)
        mock_uow.commit.assert_called_once()

    async def test_not_found(self, mock_uow, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)
        mock_invoice_repo.delete = AsyncMock()

        result = await DeleteInvoice(mock_uow, mock_invoice_repo).execute(1)

        assert result.error.code == "INVOICE_NOT_FOUND"
        mock_invoice_repo.delete.assert_not_called()
