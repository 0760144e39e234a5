"""Invoice totals computation

Pure functions computing subtotal, tax and total for a set of line items.
Per-line products are summed unrounded; rounding to cents happens only when
producing tax_total and total.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any, Iterable
from pydantic import BaseModel

ZERO = Decimal("0")
CENT = Decimal("0.01")
# Largest power of ten accepted as an amount; anything beyond is unreadable
MAX_EXPONENT = 99


class InvoiceTotals(BaseModel):
    """Result of compute_totals"""

    subtotal: Decimal
    taxable_base: Decimal
    tax_rate: Decimal
    tax_total: Decimal
    total: Decimal


def coerce_numeric(value: Any) -> Decimal:
    """
    Best-effort conversion of a form or stored value to Decimal.

    None, blank or unparsable strings, NaN, infinities and magnitudes above
    10**MAX_EXPONENT become zero.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        number = value
    else:
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not number.is_finite() or number.adjusted() > MAX_EXPONENT:
        return ZERO
    return number


def round_currency(amount: Decimal) -> Decimal:
    # quantize needs a precision covering every integer digit plus the cents
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def line_total(item: Any) -> Decimal:
    """quantity * unit_price, unrounded; a non-positive quantity or price counts as zero"""
    quantity = coerce_numeric(_field(item, "quantity"))
    unit_price = coerce_numeric(_field(item, "unit_price"))
    if quantity <= 0 or unit_price <= 0:
        return ZERO
    return quantity * unit_price


def compute_totals(items: Iterable[Any], tax_rate_percent: Any) -> InvoiceTotals:
    """
    Compute invoice totals for line items.

    Items may be entities, DTOs or dicts exposing quantity, unit_price and
    taxable. A missing taxable flag means the line is taxable.
    """
    tax_rate = coerce_numeric(tax_rate_percent)
    subtotal = ZERO
    taxable_base = ZERO

    for item in items:
        amount = line_total(item)
        subtotal += amount
        taxable = _field(item, "taxable")
        if taxable is None or taxable:
            taxable_base += amount

    tax_total = round_currency(taxable_base * tax_rate / Decimal(100))
    total = round_currency(subtotal + tax_total)

    return InvoiceTotals(
        subtotal=subtotal,
        taxable_base=taxable_base,
        tax_rate=tax_rate,
        tax_total=tax_total,
        total=total,
    )
