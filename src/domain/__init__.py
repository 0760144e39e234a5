from .base import BaseModel, BigIntId
from .company import Company
from .customer import Customer
from .car import Car
from .service_visit import ServiceVisit
from .line_item import LineItem
from .invoice import Invoice, InvoiceStatus, PaymentMethod
from .errors import DomainError, InvoiceValidationError, InvoiceTransitionError
from .shop_settings import ShopSettings
from .totals import InvoiceTotals, compute_totals, coerce_numeric, line_total
from .reminder import next_service_due_date

__all__ = [
    "BaseModel",
    "BigIntId",
    "Company",
    "Customer",
    "Car",
    "ServiceVisit",
    "LineItem",
    "Invoice",
    "InvoiceStatus",
    "PaymentMethod",
    "DomainError",
    "InvoiceValidationError",
    "InvoiceTransitionError",
    "ShopSettings",
    "InvoiceTotals",
    "compute_totals",
    "coerce_numeric",
    "line_total",
    "next_service_due_date",
]
