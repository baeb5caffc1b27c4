"""
Authentication service: registration, password login and password reset.
"""

from datetime import timedelta
from typing import Optional

from fastapi import HTTPException, status

from app.core.config import get_settings
from app.core.errors import InvalidResetTokenError
from app.core.logging import get_logger
from app.core.metrics import record_auth_attempt
from app.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    generate_reset_token,
    hash_reset_token,
)
from app.db.base import utcnow
from app.models.user import User
from app.schemas.user import UserRegister, UserLogin, UserUpsert, PasswordResetConfirm
from app.storage import Storage

logger = get_logger(__name__)


async def register_user(storage: Storage, user_data: UserRegister) -> User:
    """
    Register a new password account.
    Email and username conflicts surface as ConflictError (409).
    """
    user = await storage.upsert_user(
        UserUpsert(
            email=user_data.email,
            username=user_data.username,
            password=user_data.password,
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            role=user_data.role,
            phone=user_data.phone,
            city=user_data.city,
        )
    )
    logger.info("user_registered", user_id=user.id, email=user.email, role=user.role)
    return user


async def authenticate_user(storage: Storage, login_data: UserLogin) -> tuple[User, str]:
    """
    Check credentials and mint a session token.
    Raises 401 if credentials are invalid.
    """
    user = await storage.get_user_by_email(login_data.email)

    if not user or not verify_password(login_data.password, user.password):
        record_auth_attempt(False)
        logger.warning("login_failed", email=login_data.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    record_auth_attempt(True)
    token = create_access_token(user.id, user.role, user.token_version)
    logger.info("user_logged_in", user_id=user.id)
    return user, token


async def request_password_reset(storage: Storage, email: str) -> Optional[str]:
    """
    Issue a reset token for the account with this email.

    Returns the raw token, or None when no such account exists. Callers must
    respond identically in both cases.
    """
    user = await storage.get_user_by_email(email)
    if user is None:
        logger.info("password_reset_unknown_email")
        return None

    token = generate_reset_token()
    expires_at = utcnow() + timedelta(minutes=get_settings().PASSWORD_RESET_TOKEN_TTL_MINUTES)
    await storage.create_password_reset_token(user.id, hash_reset_token(token), expires_at)
    return token


async def reset_password(storage: Storage, data: PasswordResetConfirm) -> None:
    """
    Set a new password from a reset token.

    The token is single-use, and every existing session of the account is
    revoked.
    """
    reset_token = await storage.get_valid_reset_token(hash_reset_token(data.token))
    if reset_token is None:
        logger.warning("password_reset_rejected")
        raise InvalidResetTokenError()

    if not await storage.mark_reset_token_used(reset_token.id):
        logger.warning("password_reset_token_already_used", user_id=reset_token.user_id)
        raise InvalidResetTokenError()

    await storage.update_user_password(reset_token.user_id, hash_password(data.password))
    await storage.invalidate_user_sessions(reset_token.user_id)
    logger.info("password_reset_completed", user_id=reset_token.user_id)
