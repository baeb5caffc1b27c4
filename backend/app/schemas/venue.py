"""
Pydantic schemas for venues.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel, UpdateModel
from app.schemas.user import UserResponse


class VenueCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    name_ar: Optional[str] = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=500)
    capacity: Optional[int] = Field(None, gt=0)
    venue_type: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: Optional[list[str]] = None
    amenities: Optional[list[str]] = None
    verified: bool = False


class VenueUpdate(UpdateModel):
    not_nullable = ("name", "city", "location", "verified")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    name_ar: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, min_length=1, max_length=500)
    capacity: Optional[int] = Field(None, gt=0)
    venue_type: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: Optional[list[str]] = None
    amenities: Optional[list[str]] = None
    verified: Optional[bool] = None


class VenueResponse(CamelModel):
    id: str
    user_id: Optional[str] = None
    name: str
    name_ar: Optional[str] = None
    city: str
    location: str
    capacity: Optional[int] = None
    venue_type: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: Optional[list[str]] = None
    amenities: Optional[list[str]] = None
    verified: bool
    created_at: datetime
    updated_at: datetime


class VenueDetailResponse(VenueResponse):
    owner: Optional[UserResponse] = None


class VenueStatsResponse(CamelModel):
    id: str
    name: str
    name_ar: Optional[str] = None
    city: str
    location: str
    event_count: int
