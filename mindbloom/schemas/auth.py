"""Authentication schemas."""

from pydantic import AliasChoices, BaseModel, EmailStr, Field

from mindbloom.schemas.user import UserResponse


class UserRegister(BaseModel):
    """User registration request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    name: str | None = Field(None, max_length=255)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    # No minimum here: a short wrong password is still just a wrong password
    password: str = Field(..., min_length=1, max_length=128)


class GoogleLogin(BaseModel):
    """Google sign-in request carrying the provider-issued ID token."""

    id_token: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("id_token", "idToken"),
    )


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse
