"""
Direct messages. Conversations are derived from the message log.
"""

from typing import Optional

from sqlalchemy import select, update, or_, and_, func

from app.core.actor import Actor
from app.core.logging import get_logger
from app.models.message import Message
from app.models.user import User
from app.storage.base import StorageBase

logger = get_logger(__name__)


class MessageStore(StorageBase):

    async def send_message(self, actor: Actor, receiver_id: str, content: str) -> Message:
        async with self._transaction("send_message") as session:
            message = Message(sender_id=actor.user_id, receiver_id=receiver_id, content=content)
            session.add(message)

        logger.info("message_sent", message_id=message.id, sender_id=actor.user_id, receiver_id=receiver_id)
        return message

    async def get_message(self, message_id: str) -> Optional[Message]:
        async with self._reader("get_message") as session:
            return await session.get(Message, message_id)

    async def get_messages(self, user1_id: str, user2_id: str) -> list[Message]:
        """Both directions of one conversation, oldest first."""
        async with self._reader("get_messages") as session:
            result = await session.execute(
                select(Message)
                .where(
                    or_(
                        and_(Message.sender_id == user1_id, Message.receiver_id == user2_id),
                        and_(Message.sender_id == user2_id, Message.receiver_id == user1_id),
                    )
                )
                .order_by(Message.created_at)
            )
            return list(result.scalars().all())

    async def get_user_conversations(self, user_id: str) -> list[dict]:
        """
        One entry per counterpart, most recent conversation first.

        Each entry is {"user": User, "last_message": Message}. Counterparts whose
        account no longer resolves are skipped.
        """
        async with self._reader("get_user_conversations") as session:
            result = await session.execute(
                select(Message)
                .where(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
                .order_by(Message.created_at.desc())
            )

            latest: dict[str, Message] = {}
            for message in result.scalars():
                counterpart = message.receiver_id if message.sender_id == user_id else message.sender_id
                latest.setdefault(counterpart, message)

            conversations = []
            for counterpart_id, message in latest.items():
                counterpart = await session.get(User, counterpart_id)
                if counterpart is None:
                    continue
                conversations.append({"user": counterpart, "last_message": message})

        return conversations

    async def mark_message_as_read(self, actor: Actor, message_id: str) -> None:
        """Mark a received message read. Unknown ids are ignored."""
        async with self._transaction("mark_message_as_read") as session:
            await session.execute(update(Message).where(Message.id == message_id).values(read=True))

    async def count_unread_messages(self, user_id: str) -> int:
        async with self._reader("count_unread_messages") as session:
            unread = await session.scalar(
                select(func.count(Message.id)).where(Message.receiver_id == user_id, Message.read.is_(False))
            )
        return unread or 0
