"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from fastapi import status
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.user import User
from src.services.errors import Conflict, InvalidCredential, Mismatch, NotFound, StoreFailure

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds
)


def normalize_email(email: str) -> str:
    """Normalize an email address for storage and lookup."""
    return email.strip().lower()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, email: str) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email, case-insensitively."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


class AuthService:
    """Login, registration and credential changes for site administrators."""

    def __init__(self, db: Session):
        self.db = db

    def _get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFound("User not found")
        return user

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise StoreFailure() from e

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials and issue an access token.

        Raises:
            NotFound: No user with this email
            InvalidCredential: Password does not match
        """
        user = get_user_by_email(self.db, email)
        if not user:
            raise NotFound("User not found", status_code=status.HTTP_400_BAD_REQUEST)
        if not verify_password(password, user.password_hash):
            raise InvalidCredential("Incorrect password")
        return user, create_access_token(user.id, user.email)

    def register(self, email: str, password: str) -> User:
        """Create a user with a lowercased email and a hashed password."""
        if get_user_by_email(self.db, email):
            raise Conflict("Email already registered")

        user = User(email=normalize_email(email), password_hash=get_password_hash(password))
        self.db.add(user)
        self._commit("register user")
        self.db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    def change_email(self, user_id: int, email: str) -> User:
        """Replace a user's email address."""
        user = self._get_user(user_id)
        user.email = normalize_email(email)
        self._commit("change email")
        self.db.refresh(user)
        logger.info(f"Changed email for user {user.id}")
        return user

    def change_password(
        self, user_id: int, old_password: str, new_password: str, confirm_password: str
    ) -> None:
        """Replace a user's password after checking the old one.

        Raises:
            NotFound: No user with ``user_id``
            InvalidCredential: ``old_password`` is wrong
            Mismatch: ``new_password`` and ``confirm_password`` differ
        """
        user = self._get_user(user_id)
        if not verify_password(old_password, user.password_hash):
            raise InvalidCredential(
                "Incorrect old password", status_code=status.HTTP_404_NOT_FOUND
            )
        if new_password != confirm_password:
            raise Mismatch(
                "New passwords do not match", status_code=status.HTTP_404_NOT_FOUND
            )

        user.password_hash = get_password_hash(new_password)
        self._commit("change password")
        logger.info(f"Changed password for user {user.id}")
