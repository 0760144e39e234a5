"""Request schemas for Workshop API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from src.app.use_cases.invoicing.dtos import LineItemInputDTO
from src.domain.invoice import PaymentMethod


class EstimateTotalsRequestSchema(BaseModel):
    """
    Request schema for previewing totals

    Used for POST /workshop/invoices/estimate. Line items are not validated
    here; unparsable numbers count as zero.
    """

    line_items: List[LineItemInputDTO] = Field(default_factory=list)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, description="Tax rate percent")


class CompanyRequestSchema(BaseModel):
    """Request schema for POST /workshop/companies"""

    name: str = Field(..., min_length=1, description="Company name")
    primary_phone: Optional[str] = None
    primary_email: Optional[str] = None
    billing_address: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Company name must not be blank")
        return v.strip()


class CustomerRequestSchema(BaseModel):
    full_name: str = Field(..., min_length=1, description="Customer full name")
    phone: Optional[str] = None
    email: Optional[str] = None
    company_id: Optional[int] = None
    notes: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        if not v.strip():
            raise ValueError("Full name must not be blank")
        return v.strip()


class CarRequestSchema(BaseModel):
    """
    Request schema for registering a car

    Used for POST /workshop/cars endpoint.
    """

    rego_plate: str = Field(..., min_length=1, description="Registration plate")
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    vin: Optional[str] = None
    customer_id: Optional[int] = None
    company_id: Optional[int] = None
    notes: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "rego_plate": "ABC123",
                "make": "Toyota",
                "model": "Corolla",
                "year": 2015,
                "customer_id": 1
            }
        }


class ServiceVisitRequestSchema(BaseModel):
    """
    Request schema for recording a service visit

    Used for POST /workshop/service-visits endpoint.
    """

    car_id: int = Field(..., description="Car serviced")
    visit_date: date = Field(..., description="Visit date (YYYY-MM-DD)")
    odometer_km: Optional[int] = Field(default=None, ge=0)
    reminder_weeks: Optional[int] = Field(
        default=None,
        ge=0,
        description="Weeks until next service (default from shop settings)"
    )
    line_items: List[LineItemInputDTO] = Field(default_factory=list)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0)
    notes: Optional[str] = None
    mark_paid: bool = False
    payment_method: Optional[PaymentMethod] = None

    class Config:
        json_schema_extra = {
            "example": {
                "car_id": 1,
                "visit_date": "2024-01-01",
                "odometer_km": 85000,
                "reminder_weeks": 8,
                "line_items": [
                    {"name": "Oil Change", "quantity": "1", "unit_price": "89.00"},
                    {"name": "Labour (per hour)", "quantity": "2", "unit_price": "95.00"}
                ],
                "mark_paid": True,
                "payment_method": "Card"
            }
        }


class ReplaceLineItemsRequestSchema(BaseModel):
    line_items: List[LineItemInputDTO] = Field(default_factory=list)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0)


class MarkPaidRequestSchema(BaseModel):
    """
    Request schema for recording payment

    Used for POST /workshop/invoices/{id}/pay endpoint.
    """

    payment_method: Optional[PaymentMethod] = Field(
        default=None,
        description="Cash, Card, Bank Transfer, Cheque or Other"
    )
    paid_date: Optional[date] = Field(default=None, description="Defaults to today")
