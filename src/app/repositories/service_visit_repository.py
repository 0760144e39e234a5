"""Service Visit Repository Interface

Defines the contract for service visit persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Tuple
from src.domain.car import Car
from src.domain.customer import Customer
from src.domain.service_visit import ServiceVisit


class ServiceVisitRepository(ABC):
    """
    Repository interface for ServiceVisit persistence
    """

    @abstractmethod
    async def create(self, visit: ServiceVisit) -> ServiceVisit:
        """
        Create a new service visit

        Args:
            visit: ServiceVisit entity to persist

        Returns:
            Created ServiceVisit with generated ID
        """
        pass

    @abstractmethod
    async def list_by_car_id(self, car_id: int) -> List[ServiceVisit]:
        """
        Retrieve a car's service history, most recent visit first

        Args:
            car_id: Car ID

        Returns:
            List of ServiceVisit
        """
        pass

    @abstractmethod
    async def list_services_due_by(
        self, horizon: date
    ) -> List[Tuple[ServiceVisit, Car, Optional[Customer]]]:
        """
        Retrieve each car's latest visit whose next service is due on or before horizon

        Already overdue services are included.

        Args:
            horizon: Last due date to include

        Returns:
            List of (visit, car, customer) ordered by next_service_due_date
        """
        pass
