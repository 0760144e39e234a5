"""Unit tests for customer, car and company read use cases"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.get_car import GetCar
from src.app.use_cases.invoicing.list_cars import ListCars
from src.app.use_cases.invoicing.list_companies import ListCompanies
from src.app.use_cases.invoicing.list_customers import ListCustomers
from src.domain.car import Car
from src.domain.company import Company
from src.domain.customer import Customer
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.service_visit import ServiceVisit

CREATED = datetime(2024, 1, 1)


def make_visit(visit_id, visit_date):
    return ServiceVisit(
        id=visit_id,
        car_id=1,
        visit_date=visit_date,
        reminder_weeks=8,
        next_service_due_date=visit_date,
    )


@pytest.mark.asyncio
class TestListCustomers:
    async def test_lists_with_company_name(self):
        repo = MagicMock()
        repo.list_customers = AsyncMock(
            return_value=[
                (Customer(id=1, full_name="Amy Driver", company_id=3, created_at=CREATED),
                 Company(id=3, name="Acme Couriers")),
                (Customer(id=2, full_name="Bob Owner", created_at=CREATED), None),
            ]
        )

        result = await ListCustomers(repo).execute()

        assert [c.full_name for c in result.value.customers] == ["Amy Driver", "Bob Owner"]
        assert result.value.customers[0].company_name == "Acme Couriers"
        assert result.value.customers[1].company_name is None
        repo.list_customers.assert_called_once_with(search=None)

    async def test_blank_search_means_no_filter(self):
        repo = MagicMock()
        repo.list_customers = AsyncMock(return_value=[])

        await ListCustomers(repo).execute(search="   ")

        repo.list_customers.assert_called_once_with(search=None)

    async def test_search_is_trimmed(self):
        repo = MagicMock()
        repo.list_customers = AsyncMock(return_value=[])

        await ListCustomers(repo).execute(search=" acme ")

        repo.list_customers.assert_called_once_with(search="acme")


@pytest.mark.asyncio
class TestListCarsAndCompanies:
    async def test_lists_cars_with_owner_names(self):
        repo = MagicMock()
        repo.list_cars = AsyncMock(
            return_value=[
                (
                    Car(id=1, rego_plate="FLT001", customer_id=1, company_id=3, created_at=CREATED),
                    Customer(id=1, full_name="Amy Driver"),
                    Company(id=3, name="Acme Couriers"),
                )
            ]
        )

        result = await ListCars(repo).execute(company_id=3)

        car = result.value.cars[0]
        assert car.rego_plate == "FLT001"
        assert car.customer_name == "Amy Driver"
        assert car.company_name == "Acme Couriers"
        repo.list_cars.assert_called_once_with(customer_id=None, company_id=3)

    async def test_lists_companies(self):
        repo = MagicMock()
        repo.list_all = AsyncMock(
            return_value=[Company(id=3, name="Acme Couriers", created_at=CREATED)]
        )

        result = await ListCompanies(repo).execute()

        assert [c.name for c in result.value.companies] == ["Acme Couriers"]


@pytest.mark.asyncio
class TestGetCar:
    @pytest.fixture
    def repos(self):
        return {
            "car_repo": MagicMock(),
            "customer_repo": MagicMock(),
            "company_repo": MagicMock(),
            "visit_repo": MagicMock(),
            "invoice_repo": MagicMock(),
        }

    async def test_car_with_service_history(self, repos):
        repos["car_repo"].get_by_id = AsyncMock(
            return_value=Car(id=1, rego_plate="ABC123", customer_id=5, vin="VIN1", created_at=CREATED)
        )
        repos["customer_repo"].get_by_id = AsyncMock(
            return_value=Customer(id=5, full_name="Jane Citizen")
        )
        repos["company_repo"].get_by_id = AsyncMock()
        repos["visit_repo"].list_by_car_id = AsyncMock(
            return_value=[make_visit(11, date(2024, 2, 1)), make_visit(10, date(2024, 1, 1))]
        )
        repos["invoice_repo"].list_by_visit_ids = AsyncMock(
            return_value=[
                Invoice(
                    id=7,
                    visit_id=11,
                    invoice_number="INV-2024-000007",
                    status=InvoiceStatus.SENT,
                    subtotal=Decimal("100"),
                    tax_rate=Decimal("10"),
                    tax_total=Decimal("10.00"),
                    total=Decimal("110.00"),
                    due_date=date(2024, 2, 15),
                    created_at=CREATED,
                    updated_at=CREATED,
                )
            ]
        )

        result = await GetCar(**repos).execute(1, today=date(2024, 3, 1))

        detail = result.value
        assert detail.rego_plate == "ABC123"
        assert detail.vin == "VIN1"
        assert detail.customer_name == "Jane Citizen"
        assert detail.company_name is None
        assert [v.visit_id for v in detail.service_visits] == [11, 10]
        assert detail.service_visits[0].invoice.status == "Overdue"
        assert detail.service_visits[1].invoice is None
        repos["company_repo"].get_by_id.assert_not_called()
        repos["invoice_repo"].list_by_visit_ids.assert_called_once_with([11, 10])

    async def test_unknown_car(self, repos):
        repos["car_repo"].get_by_id = AsyncMock(return_value=None)

        result = await GetCar(**repos).execute(99)

        assert result.is_err()
        assert result.error.code == "CAR_NOT_FOUND"
