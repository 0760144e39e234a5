"""Car Domain Entity

A vehicle registered with the workshop, identified by its rego plate.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from src.domain.base import BaseModel, BigIntId


class Car(BaseModel, table=True):
    """
    Car - Vehicle receiving service visits

    Domain Rules:
    - rego_plate is unique and stored upper-case
    - customer_id is optional (fleet cars may have no individual owner)
    - company_id is optional
    """

    __tablename__ = "cars"
    __table_args__ = (
        Index('ix_cars_rego_plate', 'rego_plate', unique=True),
    )

    id: int = Field(
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
        description="Unique car identifier (auto-increment)"
    )

    rego_plate: str = Field(
        sa_column=Column(String(20), nullable=False),
        description="Registration plate (unique, upper-case)"
    )

    make: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    model: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    year: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))

    vin: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    customer_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, ForeignKey("customers.id", ondelete="SET NULL"), nullable=True),
        description="Owning customer"
    )

    company_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntId, ForeignKey("companies.id", ondelete="SET NULL"), nullable=True),
        description="Owning company for fleet cars"
    )

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
    )

    @staticmethod
    def normalize_rego(rego_plate: str) -> str:
        return "".join(rego_plate.split()).upper()
