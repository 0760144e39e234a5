"""Dashboard API Routes"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.invoicing.dtos import (
    ListUpcomingServicesResponseDTO,
    RevenueStatsResponseDTO,
)
from src.app.use_cases.invoicing.list_upcoming_services import ListUpcomingServices
from src.app.use_cases.invoicing.get_revenue_stats import GetRevenueStats
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.service_visit_repository import SqlAlchemyServiceVisitRepository
from src.depends import get_session, get_shop_settings
from src.domain.shop_settings import ShopSettings
from src.api.error import ClientError

router = APIRouter(prefix="/workshop/dashboard", tags=["Dashboard"])


@router.get(
    "/upcoming-services",
    response_model=ListUpcomingServicesResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def upcoming_services(
    days: Optional[int] = Query(default=None, ge=0, le=365),
    session: AsyncSession = Depends(get_session),
    settings: ShopSettings = Depends(get_shop_settings),
):
    """
    Cars due for their next service within `days` days (default from shop
    settings). Services already past due are included.
    """
    visit_repo = SqlAlchemyServiceVisitRepository(session)

    result = await ListUpcomingServices(visit_repo, settings).execute(days=days)
    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/revenue",
    response_model=RevenueStatsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def revenue(session: AsyncSession = Depends(get_session)):
    """Paid revenue for today, this week, this month and all time."""
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    result = await GetRevenueStats(invoice_repo).execute()
    if result.is_err():
        raise ClientError(result.error)

    return result.value
