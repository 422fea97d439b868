"""Mixins for SQLAlchemy models."""

from sqlalchemy import JSON, Column, DateTime, String, Text, func

SLOT_COUNT = 6


def empty_slots() -> list[None]:
    """Return a fresh, fully empty image slot array."""
    return [None] * SLOT_COUNT


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class ShowcaseMixin:
    """Shared columns for records displayed on the site with an image gallery.

    ``image_keys`` and ``image_urls`` always hold exactly six entries, ``None``
    where a slot is empty, and are positionally aligned.
    """

    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    image_keys = Column(JSON, nullable=False, default=empty_slots)
    image_urls = Column(JSON, nullable=False, default=empty_slots)
