"""Customer Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain.company import Company
from src.domain.customer import Customer


class CustomerRepository(ABC):
    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        """
        Create a new customer

        Args:
            customer: Customer entity to persist

        Returns:
            Created Customer with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        pass

    @abstractmethod
    async def list_customers(
        self, search: Optional[str] = None
    ) -> List[Tuple[Customer, Optional[Company]]]:
        """
        Retrieve customers with their company, ordered by full name

        Args:
            search: Case-insensitive fragment matched against name, phone,
                email and company name

        Returns:
            List of (customer, company)
        """
        pass
