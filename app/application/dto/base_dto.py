"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from decimal import Decimal
from typing import Annotated, Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, PlainSerializer


# Amounts travel as JSON numbers; Decimal is kept inside the application
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        # Reject unknown fields
        extra="forbid",
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""
    pass


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""

    id: Optional[int] = None


class ErrorResponseDTO(BaseDTO):
    """Error response DTO."""

    error: str = Field(description="Error kind")
    message: str = Field(description="Error message")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")
