"""Pydantic schemas for API requests and responses."""

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
from src.schemas.contact import ContactSubmission
from src.schemas.records import (
    EventResponse,
    EventUpdateResponse,
    ProjectResponse,
    ProjectUpdateResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "EmailChange",
    "EmailChangeResponse",
    "PasswordChange",
    "LoginResponse",
    "UserResponse",
    "MessageResponse",
    "ContactSubmission",
    "ProjectResponse",
    "ProjectUpdateResponse",
    "EventResponse",
    "EventUpdateResponse",
]
