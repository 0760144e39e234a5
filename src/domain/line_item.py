"""Line Item Domain Entity

Tracks individual billable entries within an invoice.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String
from src.domain.base import BaseModel, BigIntId


class LineItem(BaseModel, table=True):
    """
    Line Item - Individual billable entry within an invoice

    Domain Rules:
    - Each line item belongs to exactly one invoice
    - line_total is a snapshot of quantity * unit_price taken at write time
    - taxable lines contribute to the invoice's taxable base
    - sort_order affects display only, never totals
    """

    __tablename__ = "line_items"
    __table_args__ = (
        Index('ix_line_items_invoice_id', 'invoice_id'),
    )

    id: int = Field(
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
        description="Unique line item identifier (auto-increment)"
    )

    invoice_id: int = Field(
        sa_column=Column(BigIntId, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Line item description (e.g., 'Oil Change')"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(12, 4), nullable=False),
        description="Quantity (fractional allowed, e.g., 0.5 hours labour)"
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Price per unit (precision: 12,2)"
    )

    taxable: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True),
        description="Whether the line contributes to the taxable base"
    )

    line_total: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 6), nullable=True),
        description="Snapshot of quantity * unit_price"
    )

    sort_order: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Display order within the invoice"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Line item creation timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "invoice_id": 1,
                "name": "Labour (per hour)",
                "quantity": "1.5000",
                "unit_price": "95.00",
                "taxable": True,
                "line_total": "142.500000",
                "sort_order": 0,
                "created_at": "2024-01-31T00:00:00Z"
            }
        }
