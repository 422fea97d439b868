"""Event API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool

from src.api.dependencies import get_current_user, get_event_service
from src.api.uploads import read_uploads, resolve_record_id
from src.models.user import User
from src.schemas.common import MessageResponse
from src.schemas.records import EventResponse, EventUpdateResponse
from src.services.records import EventService

router = APIRouter(prefix="/events", tags=["events"])

ImageFile = Annotated[UploadFile | None, File()]


@router.get("", response_model=list[EventResponse])
def list_events(
    events: Annotated[EventService, Depends(get_event_service)],
):
    """Get all events."""
    return events.list_all()


@router.get("/{event_id}", response_model=EventResponse)
def get_event(
    event_id: int,
    events: Annotated[EventService, Depends(get_event_service)],
):
    """Get a specific event."""
    return events.get(event_id)


@router.post("", response_model=MessageResponse)
async def create_event(
    current_user: Annotated[User, Depends(get_current_user)],
    events: Annotated[EventService, Depends(get_event_service)],
    name: Annotated[str, Form()],
    description: Annotated[str | None, Form()] = None,
    location: Annotated[str | None, Form()] = None,
    date: Annotated[str | None, Form()] = None,
    time: Annotated[str | None, Form()] = None,
    image1: ImageFile = None,
    image2: ImageFile = None,
    image3: ImageFile = None,
    image4: ImageFile = None,
    image5: ImageFile = None,
    image6: ImageFile = None,
):
    """Create an event with up to six images."""
    uploads = await read_uploads(image1, image2, image3, image4, image5, image6)
    await run_in_threadpool(
        events.create,
        {
            "name": name,
            "description": description,
            "location": location,
            "date": date,
            "time": time,
        },
        uploads,
    )
    return MessageResponse(message="Successfully added event!")


@router.patch("", response_model=EventUpdateResponse)
async def update_event(
    current_user: Annotated[User, Depends(get_current_user)],
    events: Annotated[EventService, Depends(get_event_service)],
    event_id: Annotated[int | None, Form(alias="id")] = None,
    legacy_id: Annotated[int | None, Form(alias="_id")] = None,
    name: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    location: Annotated[str | None, Form()] = None,
    date: Annotated[str | None, Form()] = None,
    time: Annotated[str | None, Form()] = None,
    image1: ImageFile = None,
    image2: ImageFile = None,
    image3: ImageFile = None,
    image4: ImageFile = None,
    image5: ImageFile = None,
    image6: ImageFile = None,
):
    """Update an event. Omitted fields and image slots keep their current values."""
    uploads = await read_uploads(image1, image2, image3, image4, image5, image6)
    event = await run_in_threadpool(
        events.update,
        resolve_record_id(event_id, legacy_id, "Event"),
        {
            "name": name,
            "description": description,
            "location": location,
            "date": date,
            "time": time,
        },
        uploads,
    )
    return EventUpdateResponse(event=EventResponse.model_validate(event))


@router.delete("/{event_id}", response_model=MessageResponse)
def delete_event(
    event_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    events: Annotated[EventService, Depends(get_event_service)],
):
    """Delete an event and its images."""
    events.delete(event_id)
    return MessageResponse(message="Event deleted successfully")
