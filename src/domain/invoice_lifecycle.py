"""Invoice status machine

Guarded transitions over the Invoice entity:

    Draft --mark_sent--> Sent
    Draft|Sent|Overdue --mark_paid--> Paid
    Paid --mark_paid--> Paid   (overwrites method and date)

Overdue is never written here; effective_status derives it from due_date.
Line items may only be replaced while the invoice is a Draft.
"""

from datetime import date, datetime
from typing import Any, Iterable, List, Optional
from src.domain.errors import InvoiceTransitionError, InvoiceValidationError
from src.domain.invoice import Invoice, InvoiceStatus, PaymentMethod
from src.domain.line_item import LineItem
from src.domain.totals import InvoiceTotals, coerce_numeric, line_total


def drop_blank_rows(items: Iterable[Any]) -> List[Any]:
    """Remove untouched form rows (no name and no price)"""
    return [
        item for item in items
        if (item.name or "").strip() or item.unit_price not in (None, "")
    ]


def validate_line_items(items: Iterable[Any]) -> List[Any]:
    """Reject empty lists, blank names, non-positive quantities and negative prices"""
    items = list(items)
    if not items:
        raise InvoiceValidationError(
            "At least one line item is required", code="EMPTY_LINE_ITEMS"
        )

    for position, item in enumerate(items, start=1):
        if not (item.name or "").strip():
            raise InvoiceValidationError(
                f"Line item {position} has no name", code="INVALID_LINE_ITEM"
            )
        if coerce_numeric(item.quantity) <= 0:
            raise InvoiceValidationError(
                f"Line item {position} ({item.name}) must have a positive quantity",
                code="INVALID_LINE_ITEM",
            )
        if coerce_numeric(item.unit_price) < 0:
            raise InvoiceValidationError(
                f"Line item {position} ({item.name}) has a negative unit price",
                code="INVALID_LINE_ITEM",
            )
    return items


def build_line_items(invoice_id: int, items: Iterable[Any]) -> List[LineItem]:
    """Create LineItem entities in input order with line_total snapshots"""
    return [
        LineItem(
            invoice_id=invoice_id,
            name=item.name.strip(),
            quantity=coerce_numeric(item.quantity),
            unit_price=coerce_numeric(item.unit_price),
            taxable=True if item.taxable is None else bool(item.taxable),
            line_total=line_total(item),
            sort_order=index,
        )
        for index, item in enumerate(items)
    ]


def apply_totals(invoice: Invoice, totals: InvoiceTotals) -> Invoice:
    invoice.subtotal = totals.subtotal
    invoice.tax_rate = totals.tax_rate
    invoice.tax_total = totals.tax_total
    invoice.total = totals.total
    return invoice


def ensure_editable(invoice: Invoice) -> None:
    if invoice.status != InvoiceStatus.DRAFT:
        raise InvoiceTransitionError(
            f"Line items can only be changed on draft invoices. "
            f"Current status: {invoice.status.value}"
        )


def mark_sent(invoice: Invoice) -> Invoice:
    if invoice.status != InvoiceStatus.DRAFT:
        raise InvoiceTransitionError(
            f"Only draft invoices can be marked as sent. "
            f"Current status: {invoice.status.value}"
        )
    invoice.status = InvoiceStatus.SENT
    return invoice


def mark_paid(
    invoice: Invoice,
    payment_method: Optional[PaymentMethod],
    paid_date: Optional[date],
) -> Invoice:
    if payment_method is None:
        raise InvoiceValidationError(
            "A payment method is required to mark an invoice as paid",
            code="PAYMENT_METHOD_REQUIRED",
        )
    if paid_date is None:
        raise InvoiceValidationError("A paid date is required to mark an invoice as paid")

    invoice.status = InvoiceStatus.PAID
    invoice.payment_method = PaymentMethod(payment_method)
    invoice.paid_date = paid_date.date() if isinstance(paid_date, datetime) else paid_date
    return invoice


def days_overdue(invoice: Invoice, today: date) -> int:
    if invoice.status == InvoiceStatus.PAID or invoice.due_date is None:
        return 0
    return max((today - invoice.due_date).days, 0)


def effective_status(invoice: Invoice, today: date) -> InvoiceStatus:
    """Stored status, except sent invoices past their due date read as Overdue"""
    if invoice.status == InvoiceStatus.SENT:
        if invoice.due_date is not None and today > invoice.due_date:
            return InvoiceStatus.OVERDUE
    return invoice.status
