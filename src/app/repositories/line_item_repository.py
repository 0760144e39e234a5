"""Line Item Repository Interface

Defines the contract for line item persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.line_item import LineItem


class LineItemRepository(ABC):
    """
    Repository interface for LineItem persistence

    Provides access to invoice line items.
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[LineItem]:
        """
        Retrieve all line items for an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            List of LineItem ordered by sort_order
        """
        pass

    @abstractmethod
    async def create_many(self, line_items: List[LineItem]) -> List[LineItem]:
        """
        Persist line items

        Args:
            line_items: LineItem entities to persist

        Returns:
            Created LineItems with generated IDs
        """
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: int) -> int:
        """
        Delete all line items of an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            Number of deleted rows
        """
        pass
