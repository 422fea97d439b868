"""FastAPI dependencies for authentication, database and service wiring."""

from typing import Annotated

from fastapi import Cookie, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.attachments import AttachmentService
from src.services.auth import AuthService, decode_access_token
from src.services.notifier import MailjetNotifier
from src.services.records import EventService, ProjectService
from src.services.storage import BlobStore

ACCESS_TOKEN_COOKIE = "access_token"  # noqa: S105

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Invalid authentication credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    access_token: Annotated[str | None, Cookie()] = None,
) -> User:
    """Get the current authenticated user from the bearer token or session cookie."""
    token = credentials.credentials if credentials else access_token
    if not token:
        raise _unauthorized("Not authenticated")

    payload = decode_access_token(token)
    if payload is None:
        raise _unauthorized()

    user_id = payload.get("sub")
    if user_id is None:
        raise _unauthorized()

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise _unauthorized("User not found")

    return user


def get_blob_store(request: Request) -> BlobStore:
    """Get the blob store opened at startup."""
    return request.app.state.blob_store


def get_notifier(request: Request) -> MailjetNotifier:
    """Get the contact-form notifier created at startup."""
    return request.app.state.notifier


def get_attachment_service(
    blob_store: Annotated[BlobStore, Depends(get_blob_store)],
) -> AttachmentService:
    """Get attachment service bound to the blob store."""
    return AttachmentService(blob_store)


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db)


def get_project_service(
    db: Annotated[Session, Depends(get_db)],
    attachments: Annotated[AttachmentService, Depends(get_attachment_service)],
) -> ProjectService:
    """Get project service with dependencies."""
    return ProjectService(db, attachments)


def get_event_service(
    db: Annotated[Session, Depends(get_db)],
    attachments: Annotated[AttachmentService, Depends(get_attachment_service)],
) -> EventService:
    """Get event service with dependencies."""
    return EventService(db, attachments)
