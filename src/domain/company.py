"""Company Domain Entity

A business owning fleet cars and employing customers.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import DateTime, String, Text
from src.domain.base import BaseModel, BigIntId


class Company(BaseModel, table=True):
    """
    Company - Business billed for its fleet

    Domain Rules:
    - name is required
    - Cars and customers may belong to a company
    """

    __tablename__ = "companies"

    id: int = Field(
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
        description="Unique company identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Company name"
    )

    primary_phone: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    primary_email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    billing_address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
    )
