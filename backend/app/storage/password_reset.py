"""
Password reset tokens. Callers pass the SHA-256 hash; raw tokens never reach
the database.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import select, update

from app.core.logging import get_logger
from app.db.base import utcnow
from app.models.password_reset import PasswordResetToken
from app.storage.base import StorageBase

logger = get_logger(__name__)


class PasswordResetStore(StorageBase):

    async def create_password_reset_token(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> PasswordResetToken:
        async with self._transaction("create_password_reset_token") as session:
            token = PasswordResetToken(user_id=user_id, token_hash=token_hash, expires_at=expires_at)
            session.add(token)

        logger.info("password_reset_token_created", user_id=user_id, expires_at=expires_at.isoformat())
        return token

    async def get_valid_reset_token(self, token_hash: str) -> Optional[PasswordResetToken]:
        """The unused, unexpired token with this hash, or None."""
        async with self._reader("get_valid_reset_token") as session:
            result = await session.execute(
                select(PasswordResetToken).where(
                    PasswordResetToken.token_hash == token_hash,
                    PasswordResetToken.expires_at > utcnow(),
                    PasswordResetToken.used_at.is_(None),
                )
            )
            return result.scalar_one_or_none()

    async def mark_reset_token_used(self, token_id: str) -> bool:
        """
        Consume the token. Only one caller can win: returns False when the
        token was already used.
        """
        async with self._transaction("mark_reset_token_used") as session:
            result = await session.execute(
                update(PasswordResetToken)
                .where(PasswordResetToken.id == token_id, PasswordResetToken.used_at.is_(None))
                .values(used_at=utcnow())
            )
        return result.rowcount == 1
