"""
Pydantic schemas for organizer business profiles.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel, UpdateModel


class OrganizerCreate(CamelModel):
    # Seeded organizers carry stable slug ids
    id: Optional[str] = Field(None, max_length=64)
    user_id: Optional[str] = None
    email: EmailStr
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    city: Optional[str] = Field(None, max_length=100)
    business_name: str = Field(..., min_length=1, max_length=255)
    business_description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    specialties: Optional[list[str]] = None
    years_experience: Optional[int] = Field(None, ge=0)
    price_range: Optional[str] = Field(None, max_length=100)
    portfolio_links: Optional[list[str]] = None
    profile_image_url: Optional[str] = None
    rating: Decimal = Field(Decimal("0"), ge=0, le=5)
    review_count: int = Field(0, ge=0)
    total_events_organized: int = Field(0, ge=0)
    verified: bool = False
    featured: bool = False


class OrganizerUpdate(UpdateModel):
    not_nullable = ("email", "business_name", "verified", "featured")

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    city: Optional[str] = Field(None, max_length=100)
    business_name: Optional[str] = Field(None, min_length=1, max_length=255)
    business_description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    specialties: Optional[list[str]] = None
    years_experience: Optional[int] = Field(None, ge=0)
    price_range: Optional[str] = Field(None, max_length=100)
    portfolio_links: Optional[list[str]] = None
    profile_image_url: Optional[str] = None
    verified: Optional[bool] = None
    featured: Optional[bool] = None


class OrganizerResponse(CamelModel):
    id: str
    user_id: Optional[str] = None
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    business_name: str
    business_description: Optional[str] = None
    category: Optional[str] = None
    specialties: Optional[list[str]] = None
    years_experience: Optional[int] = None
    price_range: Optional[str] = None
    portfolio_links: Optional[list[str]] = None
    profile_image_url: Optional[str] = None
    rating: Decimal
    review_count: int
    total_events_organized: int
    verified: bool
    featured: bool
    created_at: datetime
    updated_at: datetime
