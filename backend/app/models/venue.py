"""
Physical venues. Events may point at a venue through venue_id.

events.venue_id is ON DELETE SET NULL, but storage refuses to delete a venue
that any event still references.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin, JSONList, new_id


class Venue(Base, TimestampMixin):
    __tablename__ = "venues"

    id = Column(String(64), primary_key=True, default=new_id)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    name_ar = Column(String(255), nullable=True)
    city = Column(String(100), nullable=False)
    location = Column(String(500), nullable=False)
    capacity = Column(Integer, nullable=True)
    venue_type = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    image_url = Column(String(1024), nullable=True)
    image_urls = Column(JSONList, nullable=True)
    amenities = Column(JSONList, nullable=True)
    verified = Column(Boolean, nullable=False, default=False, server_default="false")

    owner = relationship("User")
    events = relationship("Event", back_populates="venue_ref", passive_deletes=True)

    __table_args__ = (
        Index("venues_name_city_location_idx", "name", "city", "location"),
    )

    def __repr__(self) -> str:
        return f"<Venue(id={self.id}, name={self.name}, city={self.city})>"
