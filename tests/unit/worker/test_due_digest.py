"""Unit tests for DueDigestWorker

Tests cover:
- Worker initialization with configuration
- run_once aggregation of unpaid invoices and upcoming services
- Digest disabled scenario
- Use case failure handling
- Shutdown and cleanup
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

from libs.result import Error, Return
from src.app.use_cases.invoicing.dtos import (
    ListUnpaidInvoicesResponseDTO,
    ListUpcomingServicesResponseDTO,
    UnpaidInvoiceDTO,
    UpcomingServiceDTO,
)
from src.domain.shop_settings import ShopSettings
from src.worker.due_digest import DueDigestWorker


@pytest.fixture
def unpaid_response():
    return ListUnpaidInvoicesResponseDTO(
        invoices=[
            UnpaidInvoiceDTO(
                invoice_id=1,
                invoice_number="INV-2024-000001",
                visit_id=1,
                total=Decimal("306.90"),
                status="Overdue",
                visit_date=date(2024, 1, 1),
                due_date=date(2024, 1, 15),
                rego_plate="ABC123",
                customer_name="Jane Citizen",
                days_overdue=5,
            ),
            UnpaidInvoiceDTO(
                invoice_id=2,
                invoice_number="INV-2024-000002",
                visit_id=2,
                total=Decimal("15.00"),
                status="Draft",
                visit_date=date(2024, 1, 18),
                due_date=date(2024, 2, 1),
                rego_plate="XYZ789",
                days_overdue=0,
            ),
        ],
        total_outstanding=Decimal("321.90"),
        overdue_count=1,
    )


@pytest.fixture
def upcoming_response():
    return ListUpcomingServicesResponseDTO(
        services=[
            UpcomingServiceDTO(
                visit_id=1,
                car_id=1,
                rego_plate="ABC123",
                next_service_due_date=date(2024, 1, 25),
                days_until_due=5,
                customer_name="Jane Citizen",
            )
        ],
        horizon=date(2024, 2, 3),
    )


def mock_session_factory(mock_sessionmaker):
    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    mock_sessionmaker.return_value = MagicMock(return_value=session)
    return session


class TestDueDigestWorkerInit:
    """Test worker initialization"""

    @patch("src.worker.due_digest.ApplicationConfig")
    @patch("src.worker.due_digest.create_async_engine")
    def test_initializes_with_custom_db_uri(self, mock_create_engine, mock_app_config):
        mock_app_config.DB_URI = "sqlite+aiosqlite:///./default.db"
        mock_create_engine.return_value = MagicMock()

        worker = DueDigestWorker(
            db_uri="sqlite+aiosqlite:///./custom.db", settings=ShopSettings()
        )

        assert worker.db_uri == "sqlite+aiosqlite:///./custom.db"
        mock_create_engine.assert_called_once()

    @patch("src.worker.due_digest.create_async_engine")
    def test_settings_default_from_config(self, mock_create_engine):
        mock_create_engine.return_value = MagicMock()

        worker = DueDigestWorker(db_uri="sqlite+aiosqlite:///./custom.db")

        assert isinstance(worker.settings, ShopSettings)


@pytest.mark.asyncio
class TestDueDigestWorkerRunOnce:
    """Test run_once execution"""

    @patch("src.worker.due_digest.ApplicationConfig")
    @patch("src.worker.due_digest.ListUpcomingServices")
    @patch("src.worker.due_digest.ListUnpaidInvoices")
    @patch("src.worker.due_digest.create_async_engine")
    @patch("src.worker.due_digest.sessionmaker")
    async def test_run_once_builds_digest(
        self,
        mock_sessionmaker,
        mock_create_engine,
        mock_unpaid_class,
        mock_upcoming_class,
        mock_app_config,
        unpaid_response,
        upcoming_response,
    ):
        """
        Given: Two unpaid invoices (one overdue) and one service due
        When: run_once is called
        Then: The digest counts them and passes the reference date through
        """
        mock_app_config.DIGEST_ENABLED = True
        mock_session_factory(mock_sessionmaker)
        mock_create_engine.return_value = MagicMock()
        mock_unpaid_class.return_value.execute = AsyncMock(return_value=Return.ok(unpaid_response))
        mock_upcoming_class.return_value.execute = AsyncMock(return_value=Return.ok(upcoming_response))

        worker = DueDigestWorker(db_uri="sqlite+aiosqlite://", settings=ShopSettings())
        result = await worker.run_once(today=date(2024, 1, 20))

        assert result.unpaid_invoices == 2
        assert result.overdue_invoices == 1
        assert result.total_outstanding == Decimal("321.90")
        assert result.upcoming_services == 1
        mock_unpaid_class.return_value.execute.assert_called_once_with(today=date(2024, 1, 20))
        mock_upcoming_class.return_value.execute.assert_called_once_with(today=date(2024, 1, 20))

    @patch("src.worker.due_digest.ApplicationConfig")
    @patch("src.worker.due_digest.ListUnpaidInvoices")
    @patch("src.worker.due_digest.create_async_engine")
    async def test_run_once_skips_when_disabled(
        self, mock_create_engine, mock_unpaid_class, mock_app_config
    ):
        mock_app_config.DIGEST_ENABLED = False
        mock_create_engine.return_value = MagicMock()

        worker = DueDigestWorker(db_uri="sqlite+aiosqlite://", settings=ShopSettings())
        result = await worker.run_once()

        assert result.unpaid_invoices == 0
        assert result.upcoming_services == 0
        mock_unpaid_class.assert_not_called()

    @patch("src.worker.due_digest.ApplicationConfig")
    @patch("src.worker.due_digest.ListUnpaidInvoices")
    @patch("src.worker.due_digest.create_async_engine")
    @patch("src.worker.due_digest.sessionmaker")
    async def test_run_once_raises_on_use_case_error(
        self, mock_sessionmaker, mock_create_engine, mock_unpaid_class, mock_app_config
    ):
        mock_app_config.DIGEST_ENABLED = True
        mock_session_factory(mock_sessionmaker)
        mock_create_engine.return_value = MagicMock()
        mock_unpaid_class.return_value.execute = AsyncMock(
            return_value=Return.err(Error(code="QUERY_FAILED", message="database unavailable"))
        )

        worker = DueDigestWorker(db_uri="sqlite+aiosqlite://", settings=ShopSettings())

        with pytest.raises(RuntimeError, match="database unavailable"):
            await worker.run_once()


@pytest.mark.asyncio
class TestDueDigestWorkerShutdown:
    @patch("src.worker.due_digest.create_async_engine")
    async def test_shutdown_disposes_engine(self, mock_create_engine):
        engine = MagicMock()
        engine.dispose = AsyncMock()
        mock_create_engine.return_value = engine

        worker = DueDigestWorker(db_uri="sqlite+aiosqlite://", settings=ShopSettings())
        await worker.shutdown()

        engine.dispose.assert_called_once()
