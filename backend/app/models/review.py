"""
Reviews against a polymorphic target: (target_type, target_id).

The database cannot enforce that target_id points at a row of target_type;
storage checks the target exists before inserting.
"""

from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index, CheckConstraint

from app.db.base import Base, CreatedAtMixin, new_id

REVIEW_TARGET_TYPES = ("event", "service_provider")


class Review(Base, CreatedAtMixin):
    __tablename__ = "reviews"

    id = Column(String(64), primary_key=True, default=new_id)
    reviewer_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    target_type = Column(String(32), nullable=False)
    target_id = Column(String(64), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="check_review_rating_range"),
        CheckConstraint("target_type IN ('event', 'service_provider')", name="check_review_target_type"),
        Index("ix_reviews_target", "target_type", "target_id"),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, target={self.target_type}:{self.target_id}, rating={self.rating})>"
