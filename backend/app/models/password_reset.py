"""
One-time password reset tokens. Only the SHA-256 hash of the token is stored.
A token is valid while expires_at is in the future and used_at is NULL.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey

from app.db.base import Base, CreatedAtMixin, new_id


class PasswordResetToken(Base, CreatedAtMixin):
    __tablename__ = "password_reset_tokens"

    id = Column(String(64), primary_key=True, default=new_id)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token_hash = Column(String(128), unique=True, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    used_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<PasswordResetToken(id={self.id}, user={self.user_id}, used={self.used_at is not None})>"
