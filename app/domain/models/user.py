"""
User (tenant) and API token domain models.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from app.domain.models.base import BaseEntity


API_TOKEN_PREFIX = "ckt_"


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass
class User(BaseEntity):
    """A tenant; every client and charge belongs to exactly one user."""

    id: Optional[str] = None
    name: str = ""
    email: str = ""
    role: UserRole = UserRole.USER
    is_active: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass
class ApiToken(BaseEntity):
    """A hashed bearer token used by external integrations to act as a user."""

    user_id: str = ""
    name: str = ""
    token_hash: str = ""
    expires_at: Optional[datetime] = None
    last_used_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now
