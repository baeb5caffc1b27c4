"""
Pydantic schemas for reviews.

The review target is a tagged union on ``kind``. Flat ``targetType``/``targetId``
bodies from older clients are folded into the same shape.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, model_validator

from app.schemas.base import CamelModel

TargetType = Literal["event", "service_provider"]


class EventTarget(CamelModel):
    kind: Literal["event"]
    id: str = Field(..., min_length=1)


class ServiceProviderTarget(CamelModel):
    kind: Literal["service_provider"]
    id: str = Field(..., min_length=1)


ReviewTarget = Annotated[Union[EventTarget, ServiceProviderTarget], Field(discriminator="kind")]


class ReviewCreate(CamelModel):
    target: ReviewTarget
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=5000)

    @model_validator(mode="before")
    @classmethod
    def fold_flat_target(cls, data):
        if isinstance(data, dict) and "target" not in data:
            kind = data.get("targetType", data.get("target_type"))
            target_id = data.get("targetId", data.get("target_id"))
            if kind is not None or target_id is not None:
                data = {**data, "target": {"kind": kind, "id": target_id}}
        return data

    @property
    def target_type(self) -> str:
        return self.target.kind

    @property
    def target_id(self) -> str:
        return self.target.id


class ReviewResponse(CamelModel):
    id: str
    reviewer_id: str
    target_type: str
    target_id: str
    rating: int
    comment: Optional[str] = None
    created_at: datetime
