"""Authentication schemas."""

from pydantic import BaseModel, Field

from statusboard.schemas.common import ApiModel


class LoginRequest(BaseModel):
    """User login request.

    Both fields are optional here so a missing value can be reported with
    the login endpoint's own message instead of a generic validation error.
    """

    username: str | None = Field(None, max_length=100)
    password: str | None = Field(None, max_length=128)


class LoginUser(ApiModel):
    """User information returned alongside a fresh token."""

    id: int
    username: str
    full_name: str | None
    email: str | None
    current_status: str
    status_id: int | None


class LoginResponse(ApiModel):
    """Authentication response with token and user info."""

    success: bool = True
    message: str = "Login successful!"
    user: LoginUser
    token: str
