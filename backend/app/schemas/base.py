"""
Shared pydantic configuration.

Responses are serialized with camelCase aliases (the client contract); requests
accept either camelCase or snake_case field names.
"""

from datetime import datetime, timezone
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UpdateModel(CamelModel):
    """
    Partial update: only fields the caller actually sent are applied.

    Fields listed in ``not_nullable`` back NOT NULL columns. They may be
    omitted but never sent as null.
    """

    not_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulled = [
            type(self).model_fields[name].alias or name
            for name in self.not_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes (SQLite, clients without offsets) as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
