"""
Estimate Totals Use Case

Previews invoice totals for a set of line items without persisting anything.
"""
from libs.result import Result, Return
from src.domain.shop_settings import ShopSettings
from src.domain.totals import compute_totals
from .dtos import EstimateTotalsCommandDTO, TotalsResponseDTO


class EstimateTotals:
    """
    Use case: Preview invoice totals

    Read-only and side-effect free. Unparsable numeric input counts as zero,
    matching what the service form shows while it is being filled in.
    """

    def __init__(self, settings: ShopSettings):
        self.settings = settings

    async def execute(self, command: EstimateTotalsCommandDTO) -> Result[TotalsResponseDTO]:
        """
        Compute totals for the given line items.

        Args:
            command: Line items and optional tax rate

        Returns:
            Result[TotalsResponseDTO]: Subtotal, tax and total
        """
        tax_rate = command.tax_rate if command.tax_rate is not None else self.settings.default_tax_rate
        totals = compute_totals(command.line_items, tax_rate)

        return Return.ok(TotalsResponseDTO(**totals.model_dump()))
