"""Company, Customer and Car API Routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.workshop_request import (
    CarRequestSchema,
    CompanyRequestSchema,
    CustomerRequestSchema,
)
from src.app.use_cases.invoicing.dtos import (
    CarDetailResponseDTO,
    CarResponseDTO,
    CompanyResponseDTO,
    CreateCompanyCommandDTO,
    CreateCustomerCommandDTO,
    CustomerResponseDTO,
    ListCarsResponseDTO,
    ListCompaniesResponseDTO,
    ListCustomersResponseDTO,
    RegisterCarCommandDTO,
)
from src.app.use_cases.invoicing.create_company import CreateCompany
from src.app.use_cases.invoicing.create_customer import CreateCustomer
from src.app.use_cases.invoicing.get_car import GetCar
from src.app.use_cases.invoicing.list_cars import ListCars
from src.app.use_cases.invoicing.list_companies import ListCompanies
from src.app.use_cases.invoicing.list_customers import ListCustomers
from src.app.use_cases.invoicing.register_car import RegisterCar
from src.adapter.repositories.car_repository import SqlAlchemyCarRepository
from src.adapter.repositories.company_repository import SqlAlchemyCompanyRepository
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.service_visit_repository import SqlAlchemyServiceVisitRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/workshop", tags=["Customers"])

OWNER_NOT_FOUND_CODES = ("CUSTOMER_NOT_FOUND", "COMPANY_NOT_FOUND")


@router.post(
    "/companies",
    response_model=CompanyResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_company(
    request: CompanyRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """Create a company."""
    uow = SqlAlchemyUnitOfWork(session)
    company_repo = SqlAlchemyCompanyRepository(session)

    command = CreateCompanyCommandDTO(**request.model_dump())

    result = await CreateCompany(uow, company_repo).execute(command)
    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/companies",
    response_model=ListCompaniesResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_companies(session: AsyncSession = Depends(get_session)):
    """List companies by name."""
    result = await ListCompanies(SqlAlchemyCompanyRepository(session)).execute()
    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/customers",
    response_model=CustomerResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    request: CustomerRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """Create a customer, optionally linked to a company."""
    uow = SqlAlchemyUnitOfWork(session)
    customer_repo = SqlAlchemyCustomerRepository(session)
    company_repo = SqlAlchemyCompanyRepository(session)

    command = CreateCustomerCommandDTO(**request.model_dump())

    result = await CreateCustomer(uow, customer_repo, company_repo).execute(command)
    if result.is_err():
        if result.error.code == "COMPANY_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    return result.value


@router.get(
    "/customers",
    response_model=ListCustomersResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_customers(
    search: Optional[str] = Query(default=None, max_length=200),
    session: AsyncSession = Depends(get_session),
):
    """
    List customers by name.

    **Query parameters:**
    - `search` (optional): Matches name, phone, email or company name
    """
    result = await ListCustomers(SqlAlchemyCustomerRepository(session)).execute(search=search)
    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/cars",
    response_model=CarResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {
            "description": "Customer or company not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CUSTOMER_NOT_FOUND",
                            "message": "Customer with ID 7 not found"
                        }
                    }
                }
            }
        },
        409: {
            "description": "Registration plate already registered",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CAR_ALREADY_EXISTS",
                            "message": "A car with registration ABC123 already exists"
                        }
                    }
                }
            }
        }
    }
)
async def register_car(
    request: CarRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Register a car.

    The registration plate is stored upper-case without spaces and must be
    unique.

    **Returns:**
    - 201: Car registered
    - 400: Invalid request parameters
    - 404: Customer or company not found
    - 409: Registration plate already registered
    """
    uow = SqlAlchemyUnitOfWork(session)
    car_repo = SqlAlchemyCarRepository(session)
    customer_repo = SqlAlchemyCustomerRepository(session)
    company_repo = SqlAlchemyCompanyRepository(session)

    command = RegisterCarCommandDTO(**request.model_dump())

    result = await RegisterCar(uow, car_repo, customer_repo, company_repo).execute(command)
    if result.is_err():
        if result.error.code in OWNER_NOT_FOUND_CODES:
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        if result.error.code == "CAR_ALREADY_EXISTS":
            raise ClientError(result.error, status_code=status.HTTP_409_CONFLICT)
        raise ClientError(result.error)

    return result.value


@router.get(
    "/cars",
    response_model=ListCarsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_cars(
    customer_id: Optional[int] = Query(default=None),
    company_id: Optional[int] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    """
    List cars, most recently registered first.

    **Query parameters:**
    - `customer_id` (optional): Only this customer's cars
    - `company_id` (optional): Only this company's cars
    """
    result = await ListCars(SqlAlchemyCarRepository(session)).execute(
        customer_id=customer_id, company_id=company_id
    )
    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/cars/{car_id}",
    response_model=CarDetailResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_car(
    car_id: int,
    session: AsyncSession = Depends(get_session)
):
    """Get a car with its owners and its service history, latest visit first."""
    use_case = GetCar(
        SqlAlchemyCarRepository(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyCompanyRepository(session),
        SqlAlchemyServiceVisitRepository(session),
        SqlAlchemyInvoiceRepository(session),
    )

    result = await use_case.execute(car_id)
    if result.is_err():
        if result.error.code == "CAR_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    return result.value
