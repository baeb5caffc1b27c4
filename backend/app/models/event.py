"""
Event model, the central transactable entity.

Key design decisions:
- venue/location/city free-text columns predate the venues table and coexist
  with the normalized venue_id
- sponsor1_id..sponsor3_id are a projection of the event_sponsors join table,
  rewritten by storage whenever that table changes
- service_provider1_id..service_provider3_id are plain slots (no join table)
- end_date > start_date is validated by the request schemas, not the database
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin, JSONList, new_id

EVENT_STATUSES = ("draft", "published", "cancelled", "completed")
SPONSOR_SLOTS = ("sponsor1_id", "sponsor2_id", "sponsor3_id")
SERVICE_PROVIDER_SLOTS = ("service_provider1_id", "service_provider2_id", "service_provider3_id")


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(String(64), primary_key=True, default=new_id)
    organizer_id = Column(String(64), ForeignKey("organizers.id", ondelete="CASCADE"), nullable=False)
    venue_id = Column(String(64), ForeignKey("venues.id", ondelete="SET NULL"), nullable=True)
    title = Column(String(255), nullable=False)
    title_ar = Column(String(255), nullable=True)
    description = Column(Text, nullable=False)
    description_ar = Column(Text, nullable=True)
    category = Column(String(100), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    location = Column(String(500), nullable=False)
    city = Column(String(100), nullable=False)
    venue = Column(String(255), nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0, server_default="0")
    currency = Column(String(10), nullable=False, default="SAR", server_default="SAR")
    max_attendees = Column(Integer, nullable=True)  # NULL = unlimited
    image_url = Column(String(1024), nullable=True)
    status = Column(String(20), nullable=False, default="draft", server_default="draft")
    tags = Column(JSONList, nullable=True)

    sponsor1_id = Column(String(64), ForeignKey("sponsors.id", ondelete="SET NULL"), nullable=True)
    sponsor2_id = Column(String(64), ForeignKey("sponsors.id", ondelete="SET NULL"), nullable=True)
    sponsor3_id = Column(String(64), ForeignKey("sponsors.id", ondelete="SET NULL"), nullable=True)
    service_provider1_id = Column(String(64), ForeignKey("service_providers.id", ondelete="SET NULL"), nullable=True)
    service_provider2_id = Column(String(64), ForeignKey("service_providers.id", ondelete="SET NULL"), nullable=True)
    service_provider3_id = Column(String(64), ForeignKey("service_providers.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    organizer = relationship("Organizer", back_populates="events")
    venue_ref = relationship("Venue", back_populates="events")
    registrations = relationship("EventRegistration", back_populates="event", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_event_price_non_negative"),
        CheckConstraint("max_attendees IS NULL OR max_attendees > 0", name="check_event_max_attendees_positive"),
        CheckConstraint(
            "status IN ('draft', 'published', 'cancelled', 'completed')",
            name="check_event_status",
        ),
        Index("events_venue_id_idx", "venue_id"),
        Index("ix_events_organizer_id", "organizer_id"),
        # Public listing: WHERE status = 'published' ORDER BY start_date DESC
        Index("ix_events_status_start_date", "status", "start_date"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, status={self.status})>"
