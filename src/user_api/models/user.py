"""User models for the User API."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    """Request body for creating a user."""

    name: str = Field(..., min_length=1, description="Full name of the user")
    email: EmailStr | None = Field(None, description="Email address of the user")

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"name": "Jane Doe", "email": "jane.doe@example.com"}},
    )


class UserUpdate(BaseModel):
    """Request body for updating a user. Only the fields sent are applied."""

    name: str | None = Field(None, min_length=1, description="Full name of the user")
    email: EmailStr | None = Field(None, description="Email address of the user")

    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: str | None) -> str:
        # Only runs when the field is sent; a user must keep a name
        if value is None:
            raise ValueError("name cannot be null")
        return value

    def changes(self) -> dict:
        """Return the fields explicitly set in the request body."""
        return self.model_dump(mode="json", exclude_unset=True)


class User(BaseModel):
    """User entity model."""

    id: str = Field(..., description="Unique identifier assigned on creation")
    name: str = Field(..., description="Full name of the user")
    email: EmailStr | None = Field(None, description="Email address of the user")

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "id": "3f0c9a52-6d1e-4a8e-9b7e-2f1f4c1d8a11",
                "name": "Jane Doe",
                "email": "jane.doe@example.com",
            }
        }
