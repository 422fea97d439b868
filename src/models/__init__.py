"""SQLAlchemy models."""

from src.models.event import Event
from src.models.project import Project
from src.models.user import User

__all__ = [
    "User",
    "Project",
    "Event",
]
