"""Customer Domain Entity

Owner of one or more cars serviced by the workshop.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import DateTime, ForeignKey, String, Text
from src.domain.base import BaseModel, BigIntId


class Customer(BaseModel, table=True):
    """
    Customer - Person billed for service visits

    Domain Rules:
    - full_name is required
    - Contact details are optional
    """

    __tablename__ = "customers"

    id: int = Field(
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
        description="Unique customer identifier (auto-increment)"
    )

    full_name: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Customer full name"
    )

    phone: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Contact phone number"
    )

    email: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Contact email address"
    )

    company_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, ForeignKey("companies.id", ondelete="SET NULL"), nullable=True),
        description="Employing company"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
    )
