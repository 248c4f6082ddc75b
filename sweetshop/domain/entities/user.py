"""User entity model."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from sweetshop.domain.value_objects import UserRole


class User(BaseModel):
    """Authenticated user as returned by the profile endpoint."""

    id: str = Field(..., description="User ID")
    first_name: str = Field(..., description="First name")
    last_name: str = Field("", description="Last name")
    email: str = Field(..., description="Login email")
    phone: str | None = Field(None, description="Phone number")
    profile_image: str | None = Field(None, description="Avatar URL")
    role: UserRole = Field(UserRole.USER, description="User role")
    email_verified: bool = Field(False, description="Email address confirmed")
    created_at: str | None = Field(None, description="Registration timestamp")
    updated_at: str | None = Field(None, description="Last update timestamp")

    class Config:
        """Pydantic config."""

        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True

    @property
    def is_admin(self) -> bool:
        """Check if user is an admin."""
        return self.role == UserRole.ADMIN

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase shape used by the API and storage."""
        return self.model_dump(by_alias=True, mode="json")

    def merged(self, changes: dict[str, Any]) -> User:
        """Return a copy with ``changes`` (camelCase or snake_case keys) applied."""
        normalized = {to_camel(k) if "_" in k else k: v for k, v in changes.items()}
        return User.model_validate({**self.to_dict(), **normalized})


class RegistrationData(BaseModel):
    """Sign-up form payload."""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    confirm_password: str
    phone: str | None = None

    class Config:
        """Pydantic config."""

        alias_generator = to_camel
        populate_by_name = True

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Email must contain @")
        return v

    @model_validator(mode="after")
    def check_passwords_match(self) -> RegistrationData:
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
