"""
List Upcoming Services Use Case

Finds cars whose next service falls due within the reminder horizon.
"""
from datetime import date, timedelta
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.service_visit_repository import ServiceVisitRepository
from src.domain.shop_settings import ShopSettings
from .dtos import ListUpcomingServicesResponseDTO, UpcomingServiceDTO


class ListUpcomingServices:
    """
    Use case: List upcoming services

    Only each car's latest visit counts. Services already past due are
    included with a negative days_until_due.
    """

    def __init__(self, visit_repo: ServiceVisitRepository, settings: ShopSettings):
        self.visit_repo = visit_repo
        self.settings = settings

    async def execute(
        self, today: Optional[date] = None, days: Optional[int] = None
    ) -> Result[ListUpcomingServicesResponseDTO]:
        today = today or date.today()
        window = days if days is not None else self.settings.upcoming_service_days
        horizon = today + timedelta(days=window)

        rows = await self.visit_repo.list_services_due_by(horizon)

        return Return.ok(
            ListUpcomingServicesResponseDTO(
                services=[
                    UpcomingServiceDTO(
                        visit_id=visit.id,
                        car_id=car.id,
                        rego_plate=car.rego_plate,
                        make=car.make,
                        model=car.model,
                        next_service_due_date=visit.next_service_due_date,
                        days_until_due=(visit.next_service_due_date - today).days,
                        customer_name=customer.full_name if customer else None,
                    )
                    for visit, car, customer in rows
                ],
                horizon=horizon,
            )
        )
