"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator

from app.schemas.base import CamelModel, UpdateModel, as_utc
from app.schemas.organizer import OrganizerResponse

EventStatus = Literal["draft", "published", "cancelled", "completed"]


class _EventDates(CamelModel):
    """Date coercion and ordering shared by the create and update shapes."""

    @field_validator("start_date", "end_date", mode="after", check_fields=False)
    @classmethod
    def default_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @model_validator(mode="after")
    def end_after_start(self):
        if self.start_date is not None and self.end_date is not None and self.end_date <= self.start_date:
            raise ValueError("endDate must be after startDate")
        return self


class EventCreate(_EventDates):
    title: str = Field(..., min_length=1, max_length=255)
    title_ar: Optional[str] = Field(None, max_length=255)
    description: str = Field(..., min_length=1)
    description_ar: Optional[str] = None
    category: str = Field(..., min_length=1, max_length=100)
    start_date: datetime
    end_date: datetime
    location: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=100)
    venue: Optional[str] = Field(None, max_length=255)
    venue_id: Optional[str] = None
    price: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    currency: str = Field("SAR", min_length=3, max_length=10)
    max_attendees: Optional[int] = Field(None, gt=0)
    image_url: Optional[str] = None
    status: EventStatus = "draft"
    tags: Optional[list[str]] = None
    service_provider1_id: Optional[str] = None
    service_provider2_id: Optional[str] = None
    service_provider3_id: Optional[str] = None


class EventUpdate(_EventDates, UpdateModel):
    not_nullable = (
        "title", "description", "category", "start_date", "end_date",
        "location", "city", "price", "currency", "status",
    )

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    title_ar: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    description_ar: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = Field(None, min_length=1, max_length=500)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    venue: Optional[str] = Field(None, max_length=255)
    venue_id: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=10)
    max_attendees: Optional[int] = Field(None, gt=0)
    image_url: Optional[str] = None
    status: Optional[EventStatus] = None
    tags: Optional[list[str]] = None
    service_provider1_id: Optional[str] = None
    service_provider2_id: Optional[str] = None
    service_provider3_id: Optional[str] = None


class EventFilters(CamelModel):
    """Conjunctive filters for the public listing. Absent filters impose nothing."""

    category: Optional[str] = None
    city: Optional[str] = None
    search: Optional[str] = None
    organizer_id: Optional[str] = None
    limit: Optional[int] = Field(None, ge=1)
    offset: Optional[int] = Field(None, ge=0)

    def cache_key(self) -> str:
        parts = self.model_dump(exclude_none=True)
        return "&".join(f"{key}={parts[key]}" for key in sorted(parts))


class EventResponse(CamelModel):
    id: str
    organizer_id: str
    venue_id: Optional[str] = None
    title: str
    title_ar: Optional[str] = None
    description: str
    description_ar: Optional[str] = None
    category: str
    start_date: datetime
    end_date: datetime
    location: str
    city: str
    venue: Optional[str] = None
    price: Decimal
    currency: str
    max_attendees: Optional[int] = None
    image_url: Optional[str] = None
    status: str
    tags: Optional[list[str]] = None
    sponsor1_id: Optional[str] = None
    sponsor2_id: Optional[str] = None
    sponsor3_id: Optional[str] = None
    service_provider1_id: Optional[str] = None
    service_provider2_id: Optional[str] = None
    service_provider3_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class EventDetailResponse(EventResponse):
    organizer: Optional[OrganizerResponse] = None


class RegistrationResponse(CamelModel):
    id: str
    event_id: str
    attendee_id: str
    status: str
    ticket_code: str
    registered_at: datetime
