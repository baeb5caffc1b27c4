"""
ServiceBooking: an organizer hiring a service provider for one of their events.

Status transitions (pending -> confirmed -> completed, any -> cancelled) are
plain overwrites; who may change them is decided by the route layer.
"""

from sqlalchemy import Column, String, Text, Numeric, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin, new_id

BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")


class ServiceBooking(Base, TimestampMixin):
    __tablename__ = "service_bookings"

    id = Column(String(64), primary_key=True, default=new_id)
    event_id = Column(String(64), ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    service_provider_id = Column(String(64), ForeignKey("service_providers.id", ondelete="CASCADE"), nullable=False)
    organizer_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(String(20), nullable=False, default="pending", server_default="pending")
    total_amount = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)

    # Relationships
    service_provider = relationship("ServiceProvider", back_populates="bookings")
    event = relationship("Event")

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="check_booking_amount_non_negative"),
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'completed', 'cancelled')",
            name="check_service_booking_status",
        ),
        Index("ix_service_bookings_event_id", "event_id"),
        Index("ix_service_bookings_provider_id", "service_provider_id"),
        Index("ix_service_bookings_organizer_id", "organizer_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ServiceBooking(id={self.id}, event={self.event_id}, "
            f"provider={self.service_provider_id}, status={self.status})>"
        )
