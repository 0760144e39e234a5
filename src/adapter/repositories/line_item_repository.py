"""SQLAlchemy Line Item Repository Implementation

Implements line item persistence using SQLAlchemy async session.
"""

from typing import List
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.line_item import LineItem


class SqlAlchemyLineItemRepository(LineItemRepository):
    """
    SQLAlchemy implementation of LineItemRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: int) -> List[LineItem]:
        """
        Retrieve all line items for an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            List of LineItem ordered by sort_order
        """
        statement = (
            select(LineItem)
            .where(LineItem.invoice_id == invoice_id)
            .order_by(LineItem.sort_order, LineItem.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create_many(self, line_items: List[LineItem]) -> List[LineItem]:
        """
        Persist line items

        Args:
            line_items: LineItem entities to persist

        Returns:
            Created LineItems with generated IDs
        """
        self.session.add_all(line_items)
        await self.session.flush()
        for line_item in line_items:
            await self.session.refresh(line_item)
        return line_items

    async def delete_by_invoice_id(self, invoice_id: int) -> int:
        statement = delete(LineItem).where(LineItem.invoice_id == invoice_id)
        result = await self.session.execute(statement)
        return result.rowcount or 0
