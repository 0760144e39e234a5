"""Company Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.company import Company


class CompanyRepository(ABC):
    @abstractmethod
    async def create(self, company: Company) -> Company:
        """
        Create a new company

        Args:
            company: Company entity to persist

        Returns:
            Created Company with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, company_id: int) -> Optional[Company]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Company]:
        """Retrieve every company ordered by name"""
        pass
