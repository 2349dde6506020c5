"""User schemas."""

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class UserBase(CamelModel):
    """Base user schema."""

    email: str | None = Field(None, description="Email address, unique across users")
    first_name: str | None = Field(None, description="First name")
    last_name: str | None = Field(None, description="Last name")
    profile_image_url: str | None = Field(None, description="Avatar URL")
    bio: str | None = None
    company: str | None = None
    location: str | None = None
    website: str | None = None


class UserCreate(UserBase):
    """Schema for creating a user."""

    pass


class UserUpdate(CamelModel):
    """Schema for profile edits; only set fields are applied."""

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    bio: str | None = None
    company: str | None = None
    location: str | None = None
    website: str | None = None

    def changes(self) -> dict:
        """Fields the caller set."""
        return self.model_dump(exclude_unset=True)


class UserRead(UserBase):
    """Schema for reading a user."""

    id: str
    created_at: datetime
    updated_at: datetime
