"""RegisterCar Use Case

Registers a vehicle with the workshop.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.car_repository import CarRepository
from src.app.repositories.company_repository import CompanyRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.car import Car
from .dtos import RegisterCarCommandDTO, CarResponseDTO
from .mappers import to_car_dto

logger = logging.getLogger(__name__)


class RegisterCar:
    """
    Use Case: Register a car

    Business Rules:
    1. Rego plate is normalised (whitespace removed, upper-case)
    2. Rego plate must be unique
    3. Owning customer and company must exist when given
    """

    def __init__(
        self,
        uow: UnitOfWork,
        car_repo: CarRepository,
        customer_repo: CustomerRepository,
        company_repo: CompanyRepository,
    ):
        self.uow = uow
        self.car_repo = car_repo
        self.customer_repo = customer_repo
        self.company_repo = company_repo

    async def execute(self, command: RegisterCarCommandDTO) -> Result[CarResponseDTO]:
        """
        Execute car registration

        Args:
            command: RegisterCarCommandDTO with plate and vehicle details

        Returns:
            Result[CarResponseDTO]: Success with car details or error
        """
        try:
            rego_plate = Car.normalize_rego(command.rego_plate)
            if not rego_plate:
                return Return.err(
                    Error(
                        code="VALIDATION_ERROR",
                        message="Rego plate must not be blank",
                    )
                )

            if await self.car_repo.get_by_rego_plate(rego_plate):
                return Return.err(
                    Error(
                        code="CAR_ALREADY_EXISTS",
                        message=f"Car with rego plate {rego_plate} already exists",
                        reason="Rego plates are unique",
                    )
                )

            customer = None
            if command.customer_id is not None:
                customer = await self.customer_repo.get_by_id(command.customer_id)
                if not customer:
                    return Return.err(
                        Error(
                            code="CUSTOMER_NOT_FOUND",
                            message=f"Customer with ID {command.customer_id} not found",
                        )
                    )

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

            car = await self.car_repo.create(
                Car(
                    rego_plate=rego_plate,
                    make=command.make,
                    model=command.model,
                    year=command.year,
                    vin=command.vin,
                    customer_id=command.customer_id,
                    company_id=command.company_id,
                    notes=command.notes,
                )
            )
            await self.uow.commit()

            logger.info(f"Registered car {car.id} ({car.rego_plate})")

            return Return.ok(to_car_dto(car, customer, company))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to register car {command.rego_plate}: {e}")
            return Return.err(
                Error(
                    code="REGISTER_CAR_FAILED",
                    message="Failed to register car",
                    reason=str(e),
                )
            )
