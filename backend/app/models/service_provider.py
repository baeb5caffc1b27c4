"""
Service provider business profiles (catering, photography, ...).

rating/review_count are denormalized from the reviews table and refreshed by
storage in the same transaction that inserts a review.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin, JSONList, new_id


class ServiceProvider(Base, TimestampMixin):
    __tablename__ = "service_providers"

    id = Column(String(64), primary_key=True, default=new_id)
    # One profile per account
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    business_name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    services = Column(JSONList, nullable=True)
    price_range = Column(String(100), nullable=True)
    portfolio = Column(JSONList, nullable=True)
    availability = Column(JSONList, nullable=True)
    rating = Column(Numeric(3, 2), nullable=False, default=0, server_default="0")
    review_count = Column(Integer, nullable=False, default=0, server_default="0")
    verified = Column(Boolean, nullable=False, default=False, server_default="false")

    user = relationship("User", back_populates="service_provider")
    bookings = relationship("ServiceBooking", back_populates="service_provider", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="check_provider_rating_range"),
        Index("ix_service_providers_category", "category"),
        Index("ix_service_providers_rating", "rating"),
    )

    def __repr__(self) -> str:
        return f"<ServiceProvider(id={self.id}, business={self.business_name}, rating={self.rating})>"
