"""CreateCustomer Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.company_repository import CompanyRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.customer import Customer
from .dtos import CreateCustomerCommandDTO, CustomerResponseDTO
from .mappers import to_customer_dto

logger = logging.getLogger(__name__)


class CreateCustomer:
    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        company_repo: CompanyRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.company_repo = company_repo

    async def execute(self, command: CreateCustomerCommandDTO) -> Result[CustomerResponseDTO]:
        try:
            company = None
            if command.company_id is not None:
                company = await self.company_repo.get_by_id(command.company_id)
                if not company:
                    return Return.err(
                        Error(
                            code="COMPANY_NOT_FOUND",
                            message=f"Company with ID {command.company_id} not found",
                        )
                    )

            customer = await self.customer_repo.create(
                Customer(
                    full_name=command.full_name.strip(),
                    phone=command.phone,
                    email=command.email,
                    company_id=command.company_id,
                    notes=command.notes,
                )
            )
            await self.uow.commit()

            logger.info(f"Created customer {customer.id}")

            return Return.ok(to_customer_dto(customer, company))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create customer: {e}")
            return Return.err(
                Error(
                    code="CREATE_CUSTOMER_FAILED",
                    message="Failed to create customer",
                    reason=str(e),
                )
            )
