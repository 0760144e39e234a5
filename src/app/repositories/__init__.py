from .customer_repository import CustomerRepository
from .car_repository import CarRepository
from .service_visit_repository import ServiceVisitRepository
from .line_item_repository import LineItemRepository
from .invoice_repository import InvoiceRepository

__all__ = [
    "CustomerRepository",
    "CarRepository",
    "ServiceVisitRepository",
    "LineItemRepository",
    "InvoiceRepository",
]
