"""Response bodies that carry only a message."""

from typing import ClassVar

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Confirmation message returned by operations without a record body."""

    message: str = Field(..., description="Human readable confirmation")


class ErrorResponse(BaseModel):
    """Uniform error body returned by the exception handlers."""

    message: str = Field(..., description="Human readable error message")

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {"example": {"message": "User not found"}}
