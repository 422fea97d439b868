"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from src.api.dependencies import ACCESS_TOKEN_COOKIE, get_auth_service, get_current_user
from src.config import get_settings
from src.models.user import User
from src.schemas.auth import (
    EmailChange,
    EmailChangeResponse,
    LoginResponse,
    PasswordChange,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.schemas.common import MessageResponse
from src.services.auth import AuthService

router = APIRouter(tags=["auth"])

settings = get_settings()


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password; also sets the session cookie."""
    user, access_token = auth.login(credentials.email, credentials.password)

    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        access_token,
        max_age=settings.jwt_expiration_minutes * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )

    return LoginResponse(access_token=access_token, id=user.id, email=user.email)


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response):
    """Clear the session cookie."""
    response.delete_cookie(
        ACCESS_TOKEN_COOKIE, httponly=True, secure=settings.cookie_secure, samesite="lax"
    )
    return MessageResponse(message="Logged out successfully")


@router.post("/register", response_model=MessageResponse)
def register(
    user_data: UserRegister,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    auth.register(user_data.email, user_data.password)
    return MessageResponse(message="Successfully registered!")


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.post("/edit-email", response_model=EmailChangeResponse)
def edit_email(
    data: EmailChange,
    current_user: Annotated[User, Depends(get_current_user)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Change a user's email address."""
    user = auth.change_email(data.id, data.email)
    return EmailChangeResponse(id=user.id, email=user.email)


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    data: PasswordChange,
    current_user: Annotated[User, Depends(get_current_user)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Change a user's password."""
    auth.change_password(
        data.id, data.old_password, data.new_password, data.confirm_new_password
    )
    return MessageResponse(message="Password updated successfully")
