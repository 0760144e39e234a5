from .customer_repository import SqlAlchemyCustomerRepository
from .car_repository import SqlAlchemyCarRepository
from .service_visit_repository import SqlAlchemyServiceVisitRepository
from .line_item_repository import SqlAlchemyLineItemRepository
from .invoice_repository import SqlAlchemyInvoiceRepository

__all__ = [
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyCarRepository",
    "SqlAlchemyServiceVisitRepository",
    "SqlAlchemyLineItemRepository",
    "SqlAlchemyInvoiceRepository",
]
