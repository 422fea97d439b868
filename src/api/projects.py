"""Project API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool

from src.api.dependencies import get_current_user, get_project_service
from src.api.uploads import read_uploads, resolve_record_id
from src.models.user import User
from src.schemas.common import MessageResponse
from src.schemas.records import ProjectResponse, ProjectUpdateResponse
from src.services.records import ProjectService

router = APIRouter(prefix="/project", tags=["projects"])

ImageFile = Annotated[UploadFile | None, File()]


@router.get("", response_model=list[ProjectResponse])
def list_projects(
    projects: Annotated[ProjectService, Depends(get_project_service)],
):
    """Get all projects."""
    return projects.list_all()


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: int,
    projects: Annotated[ProjectService, Depends(get_project_service)],
):
    """Get a specific project."""
    return projects.get(project_id)


@router.post("", response_model=MessageResponse)
async def create_project(
    current_user: Annotated[User, Depends(get_current_user)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
    name: Annotated[str, Form()],
    description: Annotated[str | None, Form()] = None,
    location: Annotated[str | None, Form()] = None,
    image1: ImageFile = None,
    image2: ImageFile = None,
    image3: ImageFile = None,
    image4: ImageFile = None,
    image5: ImageFile = None,
    image6: ImageFile = None,
):
    """Create a project with up to six images.

    Note: This endpoint must remain async because UploadFile.read() is async;
    the record and blob writes run in the threadpool.
    """
    uploads = await read_uploads(image1, image2, image3, image4, image5, image6)
    await run_in_threadpool(
        projects.create,
        {"name": name, "description": description, "location": location},
        uploads,
    )
    return MessageResponse(message="Successfully added project!")


@router.patch("", response_model=ProjectUpdateResponse)
async def update_project(
    current_user: Annotated[User, Depends(get_current_user)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
    project_id: Annotated[int | None, Form(alias="id")] = None,
    legacy_id: Annotated[int | None, Form(alias="_id")] = None,
    name: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    location: Annotated[str | None, Form()] = None,
    image1: ImageFile = None,
    image2: ImageFile = None,
    image3: ImageFile = None,
    image4: ImageFile = None,
    image5: ImageFile = None,
    image6: ImageFile = None,
):
    """Update a project. Omitted fields and image slots keep their current values."""
    uploads = await read_uploads(image1, image2, image3, image4, image5, image6)
    project = await run_in_threadpool(
        projects.update,
        resolve_record_id(project_id, legacy_id, "Project"),
        {"name": name, "description": description, "location": location},
        uploads,
    )
    return ProjectUpdateResponse(project=ProjectResponse.model_validate(project))


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
):
    """Delete a project and its images."""
    projects.delete(project_id)
    return MessageResponse(message="Project deleted successfully")
