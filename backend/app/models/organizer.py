"""
Organizer business profiles. Distinct from User: an organizer is the business
that hosts events, optionally claimed by the account that manages it.

Deleting an organizer that still owns events is refused by storage even though
the events.organizer_id foreign key would cascade.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin, JSONList, new_id


class Organizer(Base, TimestampMixin):
    __tablename__ = "organizers"

    id = Column(String(64), primary_key=True, default=new_id)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="SET NULL"), unique=True, nullable=True)
    email = Column(String(255), unique=True, nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    phone = Column(String(50), nullable=True)
    city = Column(String(100), nullable=True)
    business_name = Column(String(255), nullable=False)
    business_description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    specialties = Column(JSONList, nullable=True)
    years_experience = Column(Integer, nullable=True)
    price_range = Column(String(100), nullable=True)
    portfolio_links = Column(JSONList, nullable=True)
    profile_image_url = Column(String(1024), nullable=True)
    rating = Column(Numeric(3, 2), nullable=False, default=0, server_default="0")
    review_count = Column(Integer, nullable=False, default=0, server_default="0")
    total_events_organized = Column(Integer, nullable=False, default=0, server_default="0")
    verified = Column(Boolean, nullable=False, default=False, server_default="false")
    featured = Column(Boolean, nullable=False, default=False, server_default="false")

    events = relationship("Event", back_populates="organizer", passive_deletes=True)

    __table_args__ = (
        # Browse page: featured/verified first
        Index("ix_organizers_featured_verified", "featured", "verified"),
        Index("ix_organizers_city", "city"),
    )

    def __repr__(self) -> str:
        return f"<Organizer(id={self.id}, business={self.business_name})>"
