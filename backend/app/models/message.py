"""
Direct messages between two users. Conversations are derived, not stored.
"""

from sqlalchemy import Column, String, Text, Boolean, ForeignKey, Index

from app.db.base import Base, CreatedAtMixin, new_id


class Message(Base, CreatedAtMixin):
    __tablename__ = "messages"

    id = Column(String(64), primary_key=True, default=new_id)
    sender_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    receiver_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False, server_default="false")

    __table_args__ = (
        Index("ix_messages_sender_created", "sender_id", "created_at"),
        Index("ix_messages_receiver_created", "receiver_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, {self.sender_id}->{self.receiver_id}, read={self.read})>"
