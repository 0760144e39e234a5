"""List Cars Use Case"""
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.car_repository import CarRepository
from .dtos import ListCarsResponseDTO
from .mappers import to_car_dto


class ListCars:
    """
    Use case: List cars

    Cars are ordered by registration time, newest first. Filtering by owner
    lets an invoice form offer only the cars of the chosen customer or company.
    """

    def __init__(self, car_repo: CarRepository):
        self.car_repo = car_repo

    async def execute(
        self,
        customer_id: Optional[int] = None,
        company_id: Optional[int] = None,
    ) -> Result[ListCarsResponseDTO]:
        rows = await self.car_repo.list_cars(customer_id=customer_id, company_id=company_id)
        return Return.ok(
            ListCarsResponseDTO(
                cars=[to_car_dto(car, customer, company) for car, customer, company in rows]
            )
        )
