"""
Declarative base and shared column mixins.

Ids are opaque strings defaulting to a random UUID; timestamps are timezone-aware
UTC and set on the Python side so every dialect stores the same values.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, JSON, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


# List/dict columns: JSONB on PostgreSQL, plain JSON elsewhere
JSONList = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


class CreatedAtMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())


class TimestampMixin(CreatedAtMixin):
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
