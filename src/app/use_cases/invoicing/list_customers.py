"""
List Customers Use Case

Retrieves customers ordered by name, optionally narrowed by a search term.
"""
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.customer_repository import CustomerRepository
from .dtos import ListCustomersResponseDTO
from .mappers import to_customer_dto


class ListCustomers:
    def __init__(self, customer_repo: CustomerRepository):
        self.customer_repo = customer_repo

    async def execute(self, search: Optional[str] = None) -> Result[ListCustomersResponseDTO]:
        """
        List customers.

        Args:
            search: Matches name, phone, email or company name (case-insensitive);
                blank means no filter

        Returns:
            Result[ListCustomersResponseDTO]: Customers with their company name
        """
        search = search.strip() if search else None
        rows = await self.customer_repo.list_customers(search=search or None)
        return Return.ok(
            ListCustomersResponseDTO(
                customers=[to_customer_dto(customer, company) for customer, company in rows]
            )
        )
