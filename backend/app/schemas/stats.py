from app.schemas.base import CamelModel


class StatsResponse(CamelModel):
    total_events: int
    total_attendees: int
    total_providers: int
