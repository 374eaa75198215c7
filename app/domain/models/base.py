"""
Base entity and domain exceptions for the domain layer.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Any, Dict
from abc import ABC
from dataclasses import dataclass, field


@dataclass(kw_only=True)
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Provides common attributes and behavior for all entities.
    """

    id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def mark_as_updated(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.utcnow()

    @property
    def is_new(self) -> bool:
        """Check if entity is new (not persisted)."""
        return self.id is None

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass


class ErrorKind(str, Enum):
    """Tagged kinds of domain failure, mapped to transport codes at the edge."""

    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_STATE = "INVALID_STATE"
    ATTEMPT_LIMIT_EXCEEDED = "ATTEMPT_LIMIT_EXCEEDED"
    CONFLICT = "CONFLICT"


class DomainException(Exception):
    """Base exception for domain errors."""

    kind: ErrorKind = ErrorKind.VALIDATION_ERROR

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        self.message = message
        if kind is not None:
            self.kind = kind
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class ValidationError(DomainException):
    """Exception raised when input or entity validation fails."""

    kind = ErrorKind.VALIDATION_ERROR

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is absent or owned by another tenant."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str, entity_id: Any = None):
        super().__init__(message)
        self.entity_id = entity_id


class InvalidStateError(DomainException):
    """Exception raised when an operation is not allowed from the current status."""

    kind = ErrorKind.INVALID_STATE


class AttemptLimitExceededError(DomainException):
    """Exception raised when the reminder attempt cap would be exceeded."""

    kind = ErrorKind.ATTEMPT_LIMIT_EXCEEDED

    def __init__(self, message: str = "Limite de tentativas atingido"):
        super().__init__(message)


class DuplicateEntityError(DomainException):
    """Exception raised when trying to create a duplicate entity."""

    kind = ErrorKind.CONFLICT


class UnauthorizedError(DomainException):
    """Exception raised when the caller is not authenticated."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Não autenticado"):
        super().__init__(message)


class ForbiddenError(DomainException):
    """Exception raised when the caller lacks permission."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = "Não autorizado"):
        super().__init__(message)
