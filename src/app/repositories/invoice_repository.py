"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple
from src.domain.car import Car
from src.domain.company import Company
from src.domain.customer import Customer
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.service_visit import ServiceVisit


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Provides access to invoice data for invoicing and dashboard operations.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_visit_ids(self, visit_ids: List[int]) -> List[Invoice]:
        """
        Retrieve the invoices raised for the given visits

        Args:
            visit_ids: ServiceVisit IDs

        Returns:
            List of invoices (visits without an invoice are skipped)
        """
        pass

    @abstractmethod
    async def list_invoices(
        self,
        status: Optional[InvoiceStatus] = None,
        as_of: Optional[date] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        Retrieve invoices, newest first

        Args:
            status: Optional status filter
            as_of: When given, Sent and Overdue filter by effective status on this date
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        """
        Delete an invoice and its line items

        Args:
            invoice: Invoice entity to delete
        """
        pass

    @abstractmethod
    async def generate_invoice_number(self) -> str:
        """
        Generate a unique invoice number

        Format: INV-YYYY-NNNNNN (e.g., INV-2024-000001)

        Returns:
            Unique invoice number string
        """
        pass

    @abstractmethod
    async def list_unpaid_with_context(
        self,
    ) -> List[Tuple[Invoice, ServiceVisit, Car, Optional[Customer], Optional[Company]]]:
        """
        Retrieve every invoice not yet paid with its visit, car and car owners

        Returns:
            List of (invoice, visit, car, customer, company) ordered by due date
        """
        pass

    @abstractmethod
    async def sum_paid_between(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> Decimal:
        """
        Sum totals of paid invoices by paid_date

        Args:
            start: First paid_date to include (None = unbounded)
            end: Last paid_date to include (None = unbounded)

        Returns:
            Sum of invoice totals
        """
        pass
