"""Shop settings passed explicitly into domain computations"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.invoice import PaymentMethod


class ShopSettings(BaseModel):
    """
    Workshop-wide defaults

    Built once from ApplicationConfig and injected into use cases, so domain
    code never reads global configuration.
    """

    default_tax_rate: Decimal = Field(default=Decimal("10"), ge=0)
    default_reminder_weeks: int = Field(default=8, ge=0)
    default_payment_method: Optional[PaymentMethod] = Field(
        default=None,
        description="Used by mark-paid when no method is given (None = method required)"
    )
    payment_terms_days: int = Field(default=14, ge=0)
    upcoming_service_days: int = Field(default=14, ge=0)

    @classmethod
    def from_config(cls, config) -> "ShopSettings":
        return cls(
            default_tax_rate=Decimal(str(config.DEFAULT_TAX_RATE)),
            default_reminder_weeks=int(config.DEFAULT_REMINDER_WEEKS),
            default_payment_method=config.DEFAULT_PAYMENT_METHOD or None,
            payment_terms_days=int(config.PAYMENT_TERMS_DAYS),
            upcoming_service_days=int(config.UPCOMING_SERVICE_DAYS),
        )
