"""Service Visit Domain Entity

A single workshop visit for a car. Owns exactly one invoice.
"""

from datetime import datetime, date
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, DateTime, ForeignKey, Integer, Text
from src.domain.base import BaseModel, BigIntId


class ServiceVisit(BaseModel, table=True):
    """
    Service Visit - Work performed on a car on a given day

    Domain Rules:
    - next_service_due_date = visit_date + reminder_weeks weeks (set at write time)
    - reminder_weeks is a non-negative integer
    - odometer_km is optional
    """

    __tablename__ = "service_visits"
    __table_args__ = (
        Index('ix_service_visits_car_id', 'car_id'),
        Index('ix_service_visits_next_due', 'next_service_due_date'),
    )

    id: int = Field(
        sa_column=Column(BigIntId, primary_key=True, autoincrement=True),
        description="Unique visit identifier (auto-increment)"
    )

    car_id: int = Field(
        sa_column=Column(BigIntId, ForeignKey("cars.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Car"
    )

    visit_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Calendar date of the visit"
    )

    odometer_km: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
        description="Odometer reading in km"
    )

    reminder_weeks: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Weeks until the next service is due"
    )

    next_service_due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Derived: visit_date + reminder_weeks weeks"
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
