"""
Pydantic schemas for service providers and service bookings.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import Field

from app.schemas.base import CamelModel, UpdateModel

BookingStatus = Literal["pending", "confirmed", "completed", "cancelled"]


class ServiceProviderCreate(CamelModel):
    business_name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    services: Optional[list[str]] = None
    price_range: Optional[str] = Field(None, max_length=100)
    portfolio: Optional[list[str]] = None
    availability: Optional[Any] = None


class ServiceProviderUpdate(UpdateModel):
    not_nullable = ("business_name", "category", "verified")

    business_name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    services: Optional[list[str]] = None
    price_range: Optional[str] = Field(None, max_length=100)
    portfolio: Optional[list[str]] = None
    availability: Optional[Any] = None
    verified: Optional[bool] = None


class ServiceProviderResponse(CamelModel):
    id: str
    user_id: str
    business_name: str
    category: str
    description: Optional[str] = None
    city: Optional[str] = None
    services: Optional[list[str]] = None
    price_range: Optional[str] = None
    portfolio: Optional[list[str]] = None
    availability: Optional[Any] = None
    rating: Decimal
    review_count: int
    verified: bool
    created_at: datetime
    updated_at: datetime


class ServiceBookingCreate(CamelModel):
    event_id: str
    service_provider_id: str
    total_amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    notes: Optional[str] = None


class BookingStatusUpdate(CamelModel):
    status: BookingStatus


class ServiceBookingResponse(CamelModel):
    id: str
    event_id: str
    service_provider_id: str
    organizer_id: str
    status: str
    total_amount: Decimal
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
