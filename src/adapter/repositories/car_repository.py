"""SQLAlchemy Car Repository Implementation

Implements car persistence using SQLAlchemy async session.
"""

from typing import List, Optional, Tuple
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.car_repository import CarRepository
from src.domain.car import Car
from src.domain.company import Company
from src.domain.customer import Customer


class SqlAlchemyCarRepository(CarRepository):
    """
    SQLAlchemy implementation of CarRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, car: Car) -> Car:
        self.session.add(car)
        await self.session.flush()
        await self.session.refresh(car)
        return car

    async def get_by_id(self, car_id: int) -> Optional[Car]:
        statement = select(Car).where(Car.id == car_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_rego_plate(self, rego_plate: str) -> Optional[Car]:
        statement = select(Car).where(Car.rego_plate == rego_plate)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_cars(
        self,
        customer_id: Optional[int] = None,
        company_id: Optional[int] = None,
    ) -> List[Tuple[Car, Optional[Customer], Optional[Company]]]:
        statement = (
            select(Car, Customer, Company)
            .outerjoin(Customer, Customer.id == Car.customer_id)
            .outerjoin(Company, Company.id == Car.company_id)
        )

        if customer_id is not None:
            statement = statement.where(Car.customer_id == customer_id)
        if company_id is not None:
            statement = statement.where(Car.company_id == company_id)

        statement = statement.order_by(Car.created_at.desc(), Car.id.desc())
        result = await self.session.execute(statement)
        return [(car, customer, company) for car, customer, company in result.all()]
