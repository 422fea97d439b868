"""Authentication schemas."""

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """User registration request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=72)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=72)


class EmailChange(BaseModel):
    """Change the email address of a user."""

    id: int = Field(..., validation_alias=AliasChoices("id", "_id"))
    email: EmailStr = Field(..., max_length=255)


class PasswordChange(BaseModel):
    """Change the password of a user. Accepts the camelCase form field names."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., validation_alias=AliasChoices("id", "_id"))
    old_password: str = Field(..., alias="oldPassword", max_length=72)
    new_password: str = Field(..., alias="newPassword", min_length=8, max_length=72)
    confirm_new_password: str = Field(..., alias="confirmNewPassword", max_length=72)


class LoginResponse(BaseModel):
    """Login response with token and user info."""

    message: str = "Login successful"
    access_token: str
    token_type: str = "bearer"  # noqa: S105
    id: int
    email: str


class EmailChangeResponse(BaseModel):
    """Email change acknowledgment."""

    message: str = "Email updated successfully"
    id: int
    email: str


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
