"""SQLAlchemy Customer Repository Implementation"""

from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.company import Company
from src.domain.customer import Customer


class SqlAlchemyCustomerRepository(CustomerRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, customer: Customer) -> Customer:
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        statement = select(Customer).where(Customer.id == customer_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_customers(
        self, search: Optional[str] = None
    ) -> List[Tuple[Customer, Optional[Company]]]:
        statement = select(Customer, Company).outerjoin(
            Company, Company.id == Customer.company_id
        )

        if search:
            pattern = f"%{search.strip()}%"
            statement = statement.where(
                or_(
                    Customer.full_name.ilike(pattern),
                    Customer.phone.ilike(pattern),
                    Customer.email.ilike(pattern),
                    Company.name.ilike(pattern),
                )
            )

        statement = statement.order_by(Customer.full_name, Customer.id)
        result = await self.session.execute(statement)
        return [(customer, company) for customer, company in result.all()]
