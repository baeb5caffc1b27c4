"""
EventRegistration: an attendee's ticket for an event.

Key design decisions:
- ticket_code is globally unique, generated at registration time
- Status field allows cancellation without deleting records
- No composite unique constraint on (event_id, attendee_id); storage reuses a
  cancelled row when the attendee registers again
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, Index, CheckConstraint, func
from sqlalchemy.orm import relationship

from app.db.base import Base, new_id, utcnow

REGISTRATION_STATUSES = ("registered", "cancelled", "attended")


class EventRegistration(Base):
    __tablename__ = "event_registrations"

    id = Column(String(64), primary_key=True, default=new_id)
    event_id = Column(String(64), ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    attendee_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(String(20), nullable=False, default="registered", server_default="registered")
    ticket_code = Column(String(32), unique=True, nullable=False)
    registered_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    # Relationships
    event = relationship("Event", back_populates="registrations")
    attendee = relationship("User", back_populates="registrations")

    __table_args__ = (
        CheckConstraint("status IN ('registered', 'cancelled', 'attended')", name="check_registration_status"),
        Index("ix_event_registrations_event_attendee", "event_id", "attendee_id"),
        Index("ix_event_registrations_attendee_id", "attendee_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<EventRegistration(id={self.id}, event={self.event_id}, "
            f"attendee={self.attendee_id}, status={self.status})>"
        )
