"""Invoice Domain Entity

Tracks service invoices, their totals and payment status.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, Date, DateTime, Text
from src.domain.base import BaseModel, BigIntId


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"  # Read-time classification, never written by this service


class PaymentMethod(str, Enum):
    """Accepted payment methods"""
    CASH = "Cash"
    CARD = "Card"
    BANK_TRANSFER = "Bank Transfer"
    CHEQUE = "Cheque"
    OTHER = "Other"


class Invoice(BaseModel, table=True):
    """
    Invoice - Bill for a single service visit

    Domain Rules:
    - invoice_number must be unique
    - One invoice per service visit
    - subtotal = sum of line totals; tax_total and total are rounded to cents
    - Status transitions: Draft -> Sent -> Paid, Draft -> Paid
    - paid_date and payment_method are set only when status becomes Paid
    - Overdue is derived from due_date at read time
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_invoice_number', 'invoice_number', unique=True),
        Index('ix_invoices_visit_id', 'visit_id', unique=True),
    )

    id: int = Field(
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    visit_id: int = Field(
        sa_column=Column(BigIntId, ForeignKey("service_visits.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to ServiceVisit"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Unique invoice number (e.g., INV-2024-000001)"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (Draft, Sent, Paid, Overdue)"
    )

    subtotal: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Sum of line totals (not pre-rounded)"
    )

    tax_rate: Decimal = Field(
        sa_column=Column(Numeric(6, 3), nullable=False),
        description="Tax rate as a percentage (e.g., 10 for 10%)"
    )

    tax_total: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Tax on the taxable base, rounded to cents"
    )

    total: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="subtotal + tax_total, rounded to cents"
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Date after which a sent invoice is overdue"
    )

    paid_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Date the invoice was paid"
    )

    payment_method: Optional[PaymentMethod] = Field(
        default=None,
        description="How the invoice was paid"
    )

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "visit_id": 1,
                "invoice_number": "INV-2024-000001",
                "status": "Sent",
                "subtotal": "279.000000",
                "tax_rate": "10.000",
                "tax_total": "27.90",
                "total": "306.90",
                "due_date": "2024-01-15",
                "paid_date": None,
                "payment_method": None,
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z"
            }
        }
