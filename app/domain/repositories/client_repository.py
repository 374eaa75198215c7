"""
Client repository interface.
Defines the contract for client data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from app.domain.models.client import Client


class ClientRepository(ABC):
    """
    Repository interface for clients.
    Every read and write is scoped by the owning user unless stated otherwise.
    """

    @abstractmethod
    def save(self, client: Client) -> Client:
        """
        Insert or update a client.
        Returns the saved client with its ID.
        """
        pass

    @abstractmethod
    def get_for_user(self, user_id: str, client_id: int) -> Optional[Client]:
        """
        Find a client by ID among the user's clients.
        Returns None if absent or owned by someone else.
        """
        pass

    @abstractmethod
    def find_by_phone(self, user_id: str, phone: str) -> Optional[Client]:
        """Find a client of the user by normalized phone."""
        pass

    @abstractmethod
    def list_for_user(
        self,
        user_id: str,
        search: Optional[str] = None,
        active: Optional[bool] = None
    ) -> List[Client]:
        """List the user's clients ordered by name."""
        pass

    @abstractmethod
    def find_active(self, user_id: Optional[str] = None) -> List[Client]:
        """
        Find active clients.
        Without a user this spans every tenant (used by the monthly batch).
        """
        pass

    @abstractmethod
    def deactivate(self, client_ids: Iterable[int]) -> int:
        """Set active=False on the given clients. Returns the number changed."""
        pass

    @abstractmethod
    def count_for_user(self, user_id: str, active: Optional[bool] = None) -> int:
        pass

    @abstractmethod
    def count_without_charges(self, user_id: str) -> int:
        pass
