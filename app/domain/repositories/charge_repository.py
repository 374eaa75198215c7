"""
Charge repository interface.
Defines the contract for charge persistence, status bulk updates and the integration queries.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Set

from app.domain.models.charge import Charge, ChargeStatus


class ChargeRepository(ABC):
    """
    Repository interface for charges.
    Charges are owned through their client, so tenant scoping joins on the client's user.
    """

    @abstractmethod
    def add(self, charge: Charge) -> Charge:
        """
        Insert a new charge.
        Raises DuplicateEntityError if the client already has a charge on that due date.
        """
        pass

    @abstractmethod
    def save(self, charge: Charge) -> Charge:
        """Persist changes to an existing charge."""
        pass

    @abstractmethod
    def get_for_user(self, user_id: str, charge_id: int) -> Optional[Charge]:
        """
        Find a charge by ID among the user's charges, with its client attached.
        Returns None if absent or owned by another tenant.
        """
        pass

    @abstractmethod
    def exists_for_client_on(self, client_id: int, due_date: date) -> bool:
        """Check whether the client already has a charge due on that calendar day."""
        pass

    @abstractmethod
    def mark_overdue(self, user_id: str, today: date) -> int:
        """PENDENTE charges due before today become ATRASADO. Returns rows changed."""
        pass

    @abstractmethod
    def mark_pending(self, user_id: str, today: date) -> int:
        """ATRASADO charges due today or later become PENDENTE. Returns rows changed."""
        pass

    @abstractmethod
    def list_for_user(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[ChargeStatus] = None,
        client_name: Optional[str] = None
    ) -> List[Charge]:
        """List the user's charges, newest due date first."""
        pass

    @abstractmethod
    def list_recent_for_client(self, client_id: int, limit: int = 5) -> List[Charge]:
        pass

    @abstractmethod
    def find_clients_with_exhausted_attempts(self, user_id: str, max_attempts: int) -> Set[int]:
        """
        Active clients of the user owning an unpaid charge whose attempts reached the cap.
        """
        pass

    @abstractmethod
    def list_actionable(
        self,
        user_id: str,
        today: date,
        upcoming_until: date,
        max_attempts: int,
        after: Optional[Charge],
        take: int
    ) -> List[Charge]:
        """
        Charges the integration should act on, ordered by (due date, id).

        Upcoming PENDENTE charges due within [today, upcoming_until] and every
        ATRASADO charge, below the attempt cap and belonging to active clients.
        `after` is the last charge of the previous page.
        """
        pass

    @abstractmethod
    def increment_attempts(self, charge_id: int, delta: int, max_attempts: int) -> Optional[int]:
        """
        Atomically add `delta` attempts unless the total would exceed the cap.
        Returns the new count, or None when nothing was changed.
        """
        pass

    @abstractmethod
    def sum_debt(self, user_id: str, statuses: Sequence[ChargeStatus]) -> Decimal:
        pass

    @abstractmethod
    def sum_paid_between(self, user_id: str, start: datetime, end: datetime) -> Decimal:
        pass

    @abstractmethod
    def count(
        self,
        user_id: str,
        status: ChargeStatus,
        due_from: Optional[date] = None,
        due_until: Optional[date] = None
    ) -> int:
        pass
