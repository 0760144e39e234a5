"""
Get Revenue Stats Use Case

Sums paid invoice totals for today, this week, this month and all time.
"""
from datetime import date, timedelta
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import RevenueStatsResponseDTO


class GetRevenueStats:
    """
    Use case: Revenue dashboard figures

    Revenue is counted on the paid date. Weeks start on Monday.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, today: Optional[date] = None) -> Result[RevenueStatsResponseDTO]:
        today = today or date.today()
        week_start = today - timedelta(days=today.weekday())
        month_start = today.replace(day=1)

        return Return.ok(
            RevenueStatsResponseDTO(
                today_revenue=await self.invoice_repo.sum_paid_between(today, today),
                week_revenue=await self.invoice_repo.sum_paid_between(week_start, today),
                month_revenue=await self.invoice_repo.sum_paid_between(month_start, today),
                all_time_revenue=await self.invoice_repo.sum_paid_between(),
                as_of=today,
            )
        )
