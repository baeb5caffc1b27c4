"""
User accounts. Supports both password and OIDC sign-in.

Key design decisions:
- email is globally unique; username is unique but nullable (OIDC accounts
  may not have one)
- password holds a bcrypt hash and is nullable for OIDC-only accounts
- token_version is bumped to revoke every outstanding session token
"""

from sqlalchemy import Column, Integer, String, Text, CheckConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin, new_id

USER_ROLES = ("admin", "attendee", "organizer", "venue", "service_provider", "sponsor")


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, nullable=False)
    username = Column(String(30), unique=True, nullable=True)
    password = Column(String(255), nullable=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    profile_image_url = Column(String(1024), nullable=True)
    role = Column(String(32), nullable=False, default="attendee", server_default="attendee")
    bio = Column(Text, nullable=True)
    phone = Column(String(50), nullable=True)
    city = Column(String(100), nullable=True)
    token_version = Column(Integer, nullable=False, default=1, server_default="1")

    # Relationships
    registrations = relationship("EventRegistration", back_populates="attendee", passive_deletes=True)
    service_provider = relationship("ServiceProvider", back_populates="user", uselist=False, passive_deletes=True)

    __table_args__ = (
        CheckConstraint(
            "role IN ('admin', 'attendee', 'organizer', 'venue', 'service_provider', 'sponsor')",
            name="check_user_role",
        ),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
