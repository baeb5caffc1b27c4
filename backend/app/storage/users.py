"""
User accounts: lookups, registration/OIDC upsert, role and password changes.
"""

from typing import Optional

from sqlalchemy import select, update, delete, or_
from sqlalchemy.exc import IntegrityError

from app.core.actor import Actor
from app.core.errors import ConflictError
from app.core.logging import get_logger
from app.core.security import hash_password
from app.db.base import utcnow
from app.models.user import User
from app.schemas.user import UserUpsert
from app.storage.base import StorageBase

logger = get_logger(__name__)

# Fields an OIDC re-login may refresh on an account that already exists
SAFE_PROFILE_FIELDS = ("first_name", "last_name", "profile_image_url", "bio", "phone", "city")


class UserStore(StorageBase):

    async def get_user(self, user_id: str) -> Optional[User]:
        async with self._reader("get_user") as session:
            return await session.get(User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        async with self._reader("get_user_by_email") as session:
            result = await session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def get_user_by_username(self, username: str) -> Optional[User]:
        async with self._reader("get_user_by_username") as session:
            result = await session.execute(select(User).where(User.username == username))
            return result.scalar_one_or_none()

    async def list_users(
        self,
        role: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[User]:
        query = select(User)
        if role:
            query = query.where(User.role == role)
        if search:
            query = query.where(
                or_(
                    User.email.icontains(search, autoescape=True),
                    User.username.icontains(search, autoescape=True),
                    User.first_name.icontains(search, autoescape=True),
                    User.last_name.icontains(search, autoescape=True),
                )
            )
        query = query.order_by(User.created_at.desc())
        if limit:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)

        async with self._reader("list_users") as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def upsert_user(self, data: UserUpsert) -> User:
        """
        Insert a user, or overwrite the row with the same id.

        Unique violations are resolved as follows:
        - email taken, no password supplied (OIDC re-login): merge the safe
          profile fields into the existing row and return it
        - email taken with a password (explicit registration): ConflictError
        - username taken: ConflictError
        Any other integrity error propagates.
        """
        values = data.model_dump(exclude_none=True)
        if values.get("password"):
            values["password"] = hash_password(values["password"])

        try:
            async with self._transaction("upsert_user") as session:
                existing = await session.get(User, values["id"]) if values.get("id") else None
                if existing is not None:
                    self._apply(existing, values, ignore=("id",))
                    user = existing
                else:
                    user = User(**values)
                    session.add(user)
                await session.flush()
        except IntegrityError as exc:
            return await self._resolve_upsert_conflict(data, exc)

        logger.info("user_upserted", user_id=user.id, email=user.email)
        return user

    async def _resolve_upsert_conflict(self, data: UserUpsert, exc: IntegrityError) -> User:
        by_email = await self.get_user_by_email(data.email)
        if by_email is not None and by_email.id != data.id:
            if data.password:
                raise self._fail(ConflictError("User with this email already exists"), email=data.email) from exc

            merge = {
                field: getattr(data, field)
                for field in SAFE_PROFILE_FIELDS
                if getattr(data, field) is not None
            }
            async with self._transaction("upsert_user_merge") as session:
                user = await session.get(User, by_email.id)
                self._apply(user, merge)
            logger.info("user_profile_merged", user_id=user.id, fields=sorted(merge))
            return user

        if data.username:
            by_username = await self.get_user_by_username(data.username)
            if by_username is not None and by_username.id != data.id:
                raise self._fail(ConflictError("Username already exists"), username=data.username) from exc

        raise exc

    async def update_user(self, actor: Actor, user_id: str, changes: dict) -> Optional[User]:
        try:
            async with self._transaction("update_user") as session:
                user = await session.get(User, user_id)
                if user is None:
                    return None
                self._apply(user, changes)
                await session.flush()
        except IntegrityError as exc:
            raise self._fail(ConflictError("Username already exists"), user_id=user_id) from exc
        return user

    async def update_user_role(self, actor: Actor, user_id: str, role: str) -> Optional[User]:
        async with self._transaction("update_user_role") as session:
            user = await session.get(User, user_id)
            if user is None:
                return None
            previous = user.role
            self._apply(user, {"role": role})

        logger.info("user_role_updated", user_id=user_id, previous=previous, role=role, actor_id=actor.user_id)
        return user

    async def delete_user(self, actor: Actor, user_id: str) -> None:
        async with self._transaction("delete_user") as session:
            await session.execute(delete(User).where(User.id == user_id))
        logger.info("user_deleted", user_id=user_id, actor_id=actor.user_id)

    async def update_user_password(self, user_id: str, password_hash: str) -> None:
        async with self._transaction("update_user_password") as session:
            await session.execute(
                update(User)
                .where(User.id == user_id)
                .values(password=password_hash, updated_at=utcnow())
            )

    async def invalidate_user_sessions(self, user_id: str) -> None:
        """Revoke every session token issued before now."""
        async with self._transaction("invalidate_user_sessions") as session:
            await session.execute(
                update(User)
                .where(User.id == user_id)
                .values(token_version=User.token_version + 1, updated_at=utcnow())
            )
        logger.info("user_sessions_invalidated", user_id=user_id)
