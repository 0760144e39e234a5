"""Car Repository Interface

Defines the contract for car persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain.car import Car
from src.domain.company import Company
from src.domain.customer import Customer


class CarRepository(ABC):
    """
    Repository interface for Car persistence
    """

    @abstractmethod
    async def create(self, car: Car) -> Car:
        """
        Create a new car

        Args:
            car: Car entity to persist

        Returns:
            Created Car with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, car_id: int) -> Optional[Car]:
        """
        Retrieve car by ID

        Args:
            car_id: Car ID

        Returns:
            Car if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_rego_plate(self, rego_plate: str) -> Optional[Car]:
        """
        Retrieve car by its normalised rego plate

        Args:
            rego_plate: Upper-case plate without whitespace

        Returns:
            Car if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_cars(
        self,
        customer_id: Optional[int] = None,
        company_id: Optional[int] = None,
    ) -> List[Tuple[Car, Optional[Customer], Optional[Company]]]:
        """
        Retrieve cars with their owners, most recently registered first

        Args:
            customer_id: Only cars owned by this customer
            company_id: Only cars owned by this company

        Returns:
            List of (car, customer, company)
        """
        pass
