"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Tuple
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy import and_, delete, or_
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.car import Car
from src.domain.company import Company
from src.domain.customer import Customer
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.line_item import LineItem
from src.domain.service_visit import ServiceVisit
from src.domain.totals import round_currency


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.id == invoice_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_by_visit_ids(self, visit_ids: List[int]) -> List[Invoice]:
        if not visit_ids:
            return []
        statement = select(Invoice).where(Invoice.visit_id.in_(visit_ids))
        result = await self.session.execute(statement)
        return list(result.scalars().all())

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
        statement = select(Invoice)

        if status == InvoiceStatus.OVERDUE and as_of is not None:
            statement = statement.where(
                or_(
                    Invoice.status == InvoiceStatus.OVERDUE,
                    and_(Invoice.status == InvoiceStatus.SENT, Invoice.due_date < as_of),
                )
            )
        elif status == InvoiceStatus.SENT and as_of is not None:
            statement = statement.where(Invoice.status == InvoiceStatus.SENT, Invoice.due_date >= as_of)
        elif status:
            statement = statement.where(Invoice.status == status)

        statement = statement.order_by(Invoice.created_at.desc(), Invoice.id.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        """
        Delete an invoice and its line items

        Line items are removed explicitly so the cascade holds on databases
        that do not enforce foreign keys (e.g., SQLite without the pragma).

        Args:
            invoice: Invoice entity to delete
        """
        await self.session.execute(delete(LineItem).where(LineItem.invoice_id == invoice.id))
        await self.session.delete(invoice)
        await self.session.flush()

    async def generate_invoice_number(self) -> str:
        """
        Generate a unique invoice number

        Format: INV-YYYY-NNNNNN (e.g., INV-2024-000001)

        Returns:
            Unique invoice number string
        """
        year = datetime.utcnow().year
        prefix = f"INV-{year}-"

        # Get the highest invoice number for this year
        statement = (
            select(func.max(Invoice.invoice_number))
            .where(Invoice.invoice_number.like(f"{prefix}%"))
        )
        result = await self.session.execute(statement)
        max_number = result.scalar_one_or_none()

        if max_number:
            # Extract the sequence number and increment
            sequence = int(max_number.split("-")[-1]) + 1
        else:
            sequence = 1

        return f"{prefix}{sequence:06d}"

    async def list_unpaid_with_context(
        self,
    ) -> List[Tuple[Invoice, ServiceVisit, Car, Optional[Customer], Optional[Company]]]:
        """
        Retrieve every invoice not yet paid with its visit, car and car owners

        Returns:
            List of (invoice, visit, car, customer, company) ordered by due date
        """
        statement = (
            select(Invoice, ServiceVisit, Car, Customer, Company)
            .join(ServiceVisit, ServiceVisit.id == Invoice.visit_id)
            .join(Car, Car.id == ServiceVisit.car_id)
            .outerjoin(Customer, Customer.id == Car.customer_id)
            .outerjoin(Company, Company.id == Car.company_id)
            .where(Invoice.status != InvoiceStatus.PAID)
            .order_by(Invoice.due_date, Invoice.id)
        )
        result = await self.session.execute(statement)
        return [tuple(row) for row in result.all()]

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
        statement = (
            select(func.coalesce(func.sum(Invoice.total), 0))
            .where(Invoice.status == InvoiceStatus.PAID)
        )
        if start is not None:
            statement = statement.where(Invoice.paid_date >= start)
        if end is not None:
            statement = statement.where(Invoice.paid_date <= end)

        result = await self.session.execute(statement)
        return round_currency(Decimal(str(result.scalar_one())))
