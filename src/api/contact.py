"""Contact form endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_notifier
from src.schemas.common import MessageResponse
from src.schemas.contact import ContactSubmission
from src.services.notifier import MailjetNotifier

router = APIRouter(tags=["contact"])


@router.post("/contact", response_model=MessageResponse)
async def contact(
    submission: ContactSubmission,
    notifier: Annotated[MailjetNotifier, Depends(get_notifier)],
):
    """Forward a contact-form submission to the site inbox."""
    await notifier.notify(
        submission.name, submission.email, submission.subject, submission.message
    )
    return MessageResponse(message="Email sent successfully")
