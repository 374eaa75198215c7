"""
User and API token repository interfaces.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from app.domain.models.user import User, ApiToken


class UserRepository(ABC):
    """Tenant storage."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def add(self, user: User) -> User:
        pass


class ApiTokenRepository(ABC):
    """Integration API tokens."""

    @abstractmethod
    def add(self, token: ApiToken) -> ApiToken:
        """Store a token; only its hash is persisted."""
        pass

    @abstractmethod
    def find_usable(self, token_hash: str, now: datetime) -> Optional[ApiToken]:
        """
        Find a token by hash that is not expired and whose user is active.
        Returns None otherwise.
        """
        pass

    @abstractmethod
    def touch(self, token_id: int, used_at: datetime) -> None:
        """Record the last time the token authenticated a request."""
        pass
