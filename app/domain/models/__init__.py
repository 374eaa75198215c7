"""
Domain models package.
Contains the entities and domain exceptions of the billing core.
"""

from .base import (
    BaseEntity,
    ErrorKind,
    DomainException,
    ValidationError,
    EntityNotFoundError,
    InvalidStateError,
    AttemptLimitExceededError,
    DuplicateEntityError,
    UnauthorizedError,
    ForbiddenError,
)
from .client import Client, normalize_phone
from .charge import Charge, ChargeStatus, ChargeCategory, MAX_MESSAGE_ATTEMPTS, DUPLICATE_DUE_DATE_MESSAGE
from .user import User, UserRole, ApiToken, API_TOKEN_PREFIX

__all__ = [
    "BaseEntity",
    "ErrorKind",
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "InvalidStateError",
    "AttemptLimitExceededError",
    "DuplicateEntityError",
    "UnauthorizedError",
    "ForbiddenError",
    "Client",
    "normalize_phone",
    "Charge",
    "ChargeStatus",
    "ChargeCategory",
    "MAX_MESSAGE_ATTEMPTS",
    "DUPLICATE_DUE_DATE_MESSAGE",
    "User",
    "UserRole",
    "ApiToken",
    "API_TOKEN_PREFIX",
]
