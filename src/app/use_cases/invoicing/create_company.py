"""CreateCompany Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.company_repository import CompanyRepository
from src.domain.company import Company
from .dtos import CreateCompanyCommandDTO, CompanyResponseDTO
from .mappers import to_company_dto

logger = logging.getLogger(__name__)


class CreateCompany:
    def __init__(self, uow: UnitOfWork, company_repo: CompanyRepository):
        self.uow = uow
        self.company_repo = company_repo

    async def execute(self, command: CreateCompanyCommandDTO) -> Result[CompanyResponseDTO]:
        try:
            company = await self.company_repo.create(
                Company(
                    name=command.name.strip(),
                    primary_phone=command.primary_phone,
                    primary_email=command.primary_email,
                    billing_address=command.billing_address,
                    notes=command.notes,
                )
            )
            await self.uow.commit()

            logger.info(f"Created company {company.id} ({company.name})")

            return Return.ok(to_company_dto(company))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create company: {e}")
            return Return.err(
                Error(
                    code="CREATE_COMPANY_FAILED",
                    message="Failed to create company",
                    reason=str(e),
                )
            )
