"""Due Digest Background Worker

Periodically summarises unpaid invoices and cars due for service.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
import time
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.service_visit_repository import SqlAlchemyServiceVisitRepository
from src.app.use_cases.invoicing import (
    DueDigestResultDTO,
    ListUnpaidInvoices,
    ListUpcomingServices,
)
from src.domain.shop_settings import ShopSettings

logger = logging.getLogger(__name__)


class DueDigestWorker:
    """
    Background worker for the daily due digest

    Features:
    - Counts unpaid and overdue invoices and the amount outstanding
    - Lists cars whose next service falls within the reminder window
    - Logs the digest; nothing is sent to customers
    - Can run once or continuously

    Usage:
        worker = DueDigestWorker()
        result = await worker.run_once()

        await worker.run_forever(interval_seconds=86400)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        settings: Optional[ShopSettings] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            settings: Shop settings (defaults to ApplicationConfig values)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.settings = settings or ShopSettings.from_config(ApplicationConfig)

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("DueDigestWorker initialized")

    async def run_once(self, today: Optional[date] = None) -> DueDigestResultDTO:
        """
        Build the digest once

        Args:
            today: Reference date (default: today)

        Returns:
            DueDigestResultDTO with digest counts
        """
        if not getattr(ApplicationConfig, "DIGEST_ENABLED", True):
            logger.info("Due digest is disabled, skipping")
            return DueDigestResultDTO(
                unpaid_invoices=0,
                overdue_invoices=0,
                total_outstanding=0,
                upcoming_services=0,
                execution_time_ms=0,
            )

        today = today or date.today()
        started = time.time()

        async with self.async_session_factory() as session:
            invoice_repo = SqlAlchemyInvoiceRepository(session)
            visit_repo = SqlAlchemyServiceVisitRepository(session)

            unpaid_result = await ListUnpaidInvoices(invoice_repo).execute(today=today)
            if unpaid_result.is_err():
                logger.error(f"Due digest failed: {unpaid_result.error.message}")
                raise RuntimeError(f"Due digest failed: {unpaid_result.error.message}")

            upcoming_result = await ListUpcomingServices(visit_repo, self.settings).execute(today=today)
            if upcoming_result.is_err():
                logger.error(f"Due digest failed: {upcoming_result.error.message}")
                raise RuntimeError(f"Due digest failed: {upcoming_result.error.message}")

        unpaid = unpaid_result.value
        upcoming = upcoming_result.value

        for invoice in unpaid.invoices:
            if invoice.days_overdue > 0:
                logger.warning(
                    f"  - Overdue {invoice.invoice_number} ({invoice.rego_plate}): "
                    f"{invoice.total} due {invoice.due_date}, {invoice.days_overdue} days overdue"
                )
        for service in upcoming.services:
            logger.info(
                f"  - Service due {service.next_service_due_date} for {service.rego_plate}"
                f"{' (' + service.customer_name + ')' if service.customer_name else ''}"
            )

        return DueDigestResultDTO(
            unpaid_invoices=len(unpaid.invoices),
            overdue_invoices=unpaid.overdue_count,
            total_outstanding=unpaid.total_outstanding,
            upcoming_services=len(upcoming.services),
            execution_time_ms=int((time.time() - started) * 1000),
        )

    async def run_forever(self, interval_seconds: int = 86400):
        """
        Build the digest continuously at the given interval

        Args:
            interval_seconds: Seconds between runs (default: 24 hours)
        """
        logger.info(f"Starting continuous due digest with {interval_seconds}s interval")

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Due digest complete. "
                    f"{result.unpaid_invoices} unpaid ({result.overdue_invoices} overdue, "
                    f"{result.total_outstanding} outstanding), "
                    f"{result.upcoming_services} services due "
                    f"in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Due digest cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("DueDigestWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.due_digest --once

        # Run continuously (default: DIGEST_INTERVAL_SECONDS)
        python -m src.worker.due_digest --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Due Digest Worker")
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.DIGEST_INTERVAL_SECONDS,
        help="Interval between runs in seconds"
    )
    args = parser.parse_args()

    worker = DueDigestWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print("Due digest:")
            print(f"  Unpaid invoices: {result.unpaid_invoices}")
            print(f"  Overdue invoices: {result.overdue_invoices}")
            print(f"  Total outstanding: {result.total_outstanding}")
            print(f"  Services due: {result.upcoming_services}")
            print(f"  Execution time: {result.execution_time_ms}ms")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
