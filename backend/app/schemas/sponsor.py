"""
Pydantic schemas for sponsors and event sponsorships.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel, UpdateModel

SponsorTier = Literal["platinum", "gold", "silver", "bronze", "partner"]


class SponsorCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    name_ar: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, max_length=50)
    city: Optional[str] = Field(None, max_length=100)
    is_featured: bool = False


class SponsorUpdate(UpdateModel):
    not_nullable = ("name", "is_featured")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    name_ar: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, max_length=50)
    city: Optional[str] = Field(None, max_length=100)
    is_featured: Optional[bool] = None


class SponsorResponse(CamelModel):
    id: str
    user_id: Optional[str] = None
    name: str
    name_ar: Optional[str] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    city: Optional[str] = None
    is_featured: bool
    created_at: datetime
    updated_at: datetime


class EventSponsorCreate(CamelModel):
    sponsor_id: str
    tier: SponsorTier = "partner"
    display_order: int = Field(0, ge=0)


class EventSponsorUpdate(CamelModel):
    tier: SponsorTier
    display_order: Optional[int] = Field(None, ge=0)


class EventSponsorResponse(CamelModel):
    id: str
    event_id: str
    sponsor_id: str
    tier: str
    display_order: int
    created_at: datetime
    sponsor: Optional[SponsorResponse] = None
