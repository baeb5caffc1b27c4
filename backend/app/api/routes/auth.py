"""
Authentication endpoints: register, session login/logout, current user and
password reset.
"""

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_actor, get_storage, get_current_user
from app.core.actor import Actor
from app.core.config import get_settings
from app.models.user import User
from app.schemas.user import (
    UserRegister,
    UserLogin,
    UserUpdate,
    UserResponse,
    PasswordResetRequest,
    PasswordResetConfirm,
    ForgotPasswordResponse,
    DetailResponse,
)
from app.services.auth_service import register_user, authenticate_user, request_password_reset, reset_password
from app.storage import Storage

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister, storage: Storage = Depends(get_storage)):
    """Register a new user account."""
    return await register_user(storage, user_data)


@router.post("/login", response_model=UserResponse)
async def login(login_data: UserLogin, response: Response, storage: Storage = Depends(get_storage)):
    """Authenticate and receive an HTTP-only session cookie."""
    user, token = await authenticate_user(storage, login_data)
    _set_session_cookie(response, token)
    return user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response):
    response.delete_cookie(get_settings().SESSION_COOKIE_NAME)


@router.get("/user", response_model=UserResponse)
async def current_user(user: User = Depends(get_current_user)):
    return user


@router.patch("/user", response_model=UserResponse)
async def update_profile(
    changes: UserUpdate,
    actor: Actor = Depends(get_actor),
    storage: Storage = Depends(get_storage),
):
    """Update the signed-in user's own profile."""
    return await storage.update_user(actor, actor.user_id, changes.changes())


@router.post("/forgot-password", response_model=ForgotPasswordResponse, status_code=status.HTTP_202_ACCEPTED)
async def forgot_password(data: PasswordResetRequest, storage: Storage = Depends(get_storage)):
    """
    Start a password reset. The response is the same whether or not the email
    is registered; the raw token is only echoed back in DEBUG mode.
    """
    token = await request_password_reset(storage, data.email)
    return ForgotPasswordResponse(
        message="If an account exists for this email, a reset link has been sent",
        reset_token=token if get_settings().DEBUG else None,
    )


@router.post("/reset-password", response_model=DetailResponse)
async def reset_password_endpoint(data: PasswordResetConfirm, storage: Storage = Depends(get_storage)):
    await reset_password(storage, data)
    return DetailResponse(message="Password has been reset")
