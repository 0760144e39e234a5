"""SQLAlchemy Service Visit Repository Implementation

Implements service visit persistence using SQLAlchemy async session.
"""

from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.service_visit_repository import ServiceVisitRepository
from src.domain.car import Car
from src.domain.customer import Customer
from src.domain.service_visit import ServiceVisit


class SqlAlchemyServiceVisitRepository(ServiceVisitRepository):
    """
    SQLAlchemy implementation of ServiceVisitRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, visit: ServiceVisit) -> ServiceVisit:
        """
        Create a new service visit

        Args:
            visit: ServiceVisit entity to persist

        Returns:
            Created ServiceVisit with generated ID
        """
        self.session.add(visit)
        await self.session.flush()
        await self.session.refresh(visit)
        return visit

    async def list_by_car_id(self, car_id: int) -> List[ServiceVisit]:
        statement = (
            select(ServiceVisit)
            .where(ServiceVisit.car_id == car_id)
            .order_by(ServiceVisit.visit_date.desc(), ServiceVisit.id.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_services_due_by(
        self, horizon: date
    ) -> List[Tuple[ServiceVisit, Car, Optional[Customer]]]:
        """
        Retrieve each car's latest visit whose next service is due on or before horizon

        Args:
            horizon: Last due date to include

        Returns:
            List of (visit, car, customer) ordered by next_service_due_date
        """
        # One row per car: the latest visit date, later id breaking same-day ties
        ranked = (
            select(
                ServiceVisit.id.label("visit_id"),
                func.row_number()
                .over(
                    partition_by=ServiceVisit.car_id,
                    order_by=(ServiceVisit.visit_date.desc(), ServiceVisit.id.desc()),
                )
                .label("visit_rank"),
            )
            .subquery()
        )

        statement = (
            select(ServiceVisit, Car, Customer)
            .join(ranked, ranked.c.visit_id == ServiceVisit.id)
            .join(Car, Car.id == ServiceVisit.car_id)
            .outerjoin(Customer, Customer.id == Car.customer_id)
            .where(ranked.c.visit_rank == 1, ServiceVisit.next_service_due_date <= horizon)
            .order_by(ServiceVisit.next_service_due_date, ServiceVisit.id)
        )

        result = await self.session.execute(statement)
        return [(visit, car, customer) for visit, car, customer in result.all()]
