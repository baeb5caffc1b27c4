"""
Sponsors and their attachment to events.

event_sponsors is the authoritative event/sponsor relationship. The three
sponsor slot columns on events are re-projected from it by storage.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, Index, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base, CreatedAtMixin, TimestampMixin, new_id

SPONSOR_TIERS = ("platinum", "gold", "silver", "bronze", "partner")


class Sponsor(Base, TimestampMixin):
    __tablename__ = "sponsors"

    id = Column(String(64), primary_key=True, default=new_id)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    name_ar = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    logo_url = Column(String(1024), nullable=True)
    website = Column(String(1024), nullable=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(50), nullable=True)
    city = Column(String(100), nullable=True)
    is_featured = Column(Boolean, nullable=False, default=False, server_default="false")

    def __repr__(self) -> str:
        return f"<Sponsor(id={self.id}, name={self.name})>"


class EventSponsor(Base, CreatedAtMixin):
    __tablename__ = "event_sponsors"

    id = Column(String(64), primary_key=True, default=new_id)
    event_id = Column(String(64), ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    sponsor_id = Column(String(64), ForeignKey("sponsors.id", ondelete="CASCADE"), nullable=False)
    tier = Column(String(20), nullable=False, default="partner", server_default="partner")
    display_order = Column(Integer, nullable=False, default=0, server_default="0")

    sponsor = relationship("Sponsor")

    __table_args__ = (
        UniqueConstraint("event_id", "sponsor_id", name="uq_event_sponsor"),
        CheckConstraint(
            "tier IN ('platinum', 'gold', 'silver', 'bronze', 'partner')",
            name="check_event_sponsor_tier",
        ),
        Index("ix_event_sponsors_event_order", "event_id", "display_order"),
    )

    def __repr__(self) -> str:
        return f"<EventSponsor(event={self.event_id}, sponsor={self.sponsor_id}, tier={self.tier})>"
