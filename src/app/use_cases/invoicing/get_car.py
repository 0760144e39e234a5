"""
Get Car Use Case

Retrieves a car with its owners and its full service history.
"""
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.car_repository import CarRepository
from src.app.repositories.company_repository import CompanyRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.service_visit_repository import ServiceVisitRepository
from .dtos import CarDetailResponseDTO, CarServiceVisitDTO
from .mappers import car_fields, to_invoice_summary_dto, to_visit_dto


class GetCar:
    """
    Use case: Get car details

    Visits are listed most recent first, each with the header of its invoice
    (effective status as of today).
    """

    def __init__(
        self,
        car_repo: CarRepository,
        customer_repo: CustomerRepository,
        company_repo: CompanyRepository,
        visit_repo: ServiceVisitRepository,
        invoice_repo: InvoiceRepository,
    ):
        self.car_repo = car_repo
        self.customer_repo = customer_repo
        self.company_repo = company_repo
        self.visit_repo = visit_repo
        self.invoice_repo = invoice_repo

    async def execute(
        self, car_id: int, today: Optional[date] = None
    ) -> Result[CarDetailResponseDTO]:
        today = today or date.today()

        car = await self.car_repo.get_by_id(car_id)
        if not car:
            return Return.err(
                Error(
                    code="CAR_NOT_FOUND",
                    message=f"Car with ID {car_id} not found",
                )
            )

        customer = None
        if car.customer_id is not None:
            customer = await self.customer_repo.get_by_id(car.customer_id)
        company = None
        if car.company_id is not None:
            company = await self.company_repo.get_by_id(car.company_id)

        visits = await self.visit_repo.list_by_car_id(car.id)
        invoices = await self.invoice_repo.list_by_visit_ids([visit.id for visit in visits])
        invoice_by_visit = {invoice.visit_id: invoice for invoice in invoices}

        history = []
        for visit in visits:
            invoice = invoice_by_visit.get(visit.id)
            history.append(
                CarServiceVisitDTO(
                    **to_visit_dto(visit).model_dump(),
                    invoice=to_invoice_summary_dto(invoice, today) if invoice else None,
                )
            )

        return Return.ok(
            CarDetailResponseDTO(
                **car_fields(car, customer, company),
                vin=car.vin,
                notes=car.notes,
                service_visits=history,
            )
        )
