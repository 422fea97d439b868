"""Event model."""

from sqlalchemy import Column, Integer, String

from src.database import Base
from src.models.mixins import ShowcaseMixin, TimestampMixin


class Event(Base, TimestampMixin, ShowcaseMixin):
    """A dated event announced on the site."""

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    # Free-form strings as entered by the editor, e.g. "2024-05-01" and "7 PM"
    date = Column(String(50), nullable=True)
    time = Column(String(50), nullable=True)
