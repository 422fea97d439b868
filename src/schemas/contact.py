"""Contact form schemas."""

from pydantic import BaseModel, EmailStr, Field


class ContactSubmission(BaseModel):
    """Contact form submission forwarded by email."""

    name: str = Field(..., max_length=255)
    email: EmailStr = Field(..., max_length=255)
    subject: str = Field("", max_length=255)
    message: str = Field(..., max_length=10000)
