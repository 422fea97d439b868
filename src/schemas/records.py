"""Project and event schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ShowcaseResponse(BaseModel):
    """Fields common to projects and events.

    ``image_keys`` and ``image_urls`` have six entries each, ``None`` for an
    empty slot.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    location: str | None
    image_keys: list[str | None]
    image_urls: list[str | None]
    created_at: datetime
    updated_at: datetime


class ProjectResponse(ShowcaseResponse):
    """Project response."""


class EventResponse(ShowcaseResponse):
    """Event response."""

    date: str | None
    time: str | None


class ProjectUpdateResponse(BaseModel):
    """Project update acknowledgment with the stored result."""

    message: str = "Successfully updated project"
    project: ProjectResponse


class EventUpdateResponse(BaseModel):
    """Event update acknowledgment with the stored result."""

    message: str = "Successfully updated event"
    event: EventResponse
