"""
Integration gateway.
Read model and attempt bookkeeping for the external reminder automation.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional

from app.domain.models.base import (
    EntityNotFoundError,
    ValidationError,
    AttemptLimitExceededError,
)
from app.domain.models.charge import Charge, MAX_MESSAGE_ATTEMPTS
from app.domain.repositories.charge_repository import ChargeRepository
from app.domain.repositories.client_repository import ClientRepository
from app.domain.services.billing_calendar import Clock
from app.domain.services.payment_service import CHARGE_NOT_FOUND
from app.domain.services.status_sync_service import StatusSynchronizer


logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGE_SIZE = 50
DEFAULT_UPCOMING_WINDOW_DAYS = 2


@dataclass
class ActionablePage:
    items: List[Charge] = field(default_factory=list)
    limit: int = DEFAULT_MAX_PAGE_SIZE
    next_cursor: Optional[str] = None
    has_next_page: bool = False


class IntegrationGateway:
    """
    Operations used by the reminder automation through its API token.

    Reminder attempts are capped per charge. A client whose unpaid charge
    exhausts the cap is deactivated the next time the feed is listed, which
    removes all of its charges from the feed.
    """

    def __init__(
        self,
        charge_repository: ChargeRepository,
        client_repository: ClientRepository,
        synchronizer: StatusSynchronizer,
        clock: Clock,
        max_attempts: int = MAX_MESSAGE_ATTEMPTS,
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
        upcoming_window_days: int = DEFAULT_UPCOMING_WINDOW_DAYS
    ):
        self.charge_repository = charge_repository
        self.client_repository = client_repository
        self.synchronizer = synchronizer
        self.clock = clock
        self.max_attempts = max_attempts
        self.max_page_size = max_page_size
        self.upcoming_window_days = upcoming_window_days

    def list_actionable(
        self,
        user_id: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None
    ) -> ActionablePage:
        """
        List upcoming and overdue charges the automation should remind.

        Args:
            user_id: Tenant whose charges are listed
            cursor: ID of the last charge of the previous page
            limit: Requested page size, capped at the maximum; missing or non-positive means the maximum

        Returns:
            ActionablePage ordered by due date then ID
        """
        if not limit or limit < 1:
            limit = self.max_page_size
        page_size = min(limit, self.max_page_size)

        self.synchronizer.sync(user_id)
        self.deactivate_exhausted_clients(user_id)

        after = self._resolve_cursor(user_id, cursor)
        today = self.clock.today()
        rows = self.charge_repository.list_actionable(
            user_id=user_id,
            today=today,
            upcoming_until=today + timedelta(days=self.upcoming_window_days),
            max_attempts=self.max_attempts,
            after=after,
            take=page_size + 1,
        )

        has_next_page = len(rows) > page_size
        items = rows[:page_size]
        next_cursor = str(items[-1].id) if has_next_page and items else None

        return ActionablePage(
            items=items,
            limit=page_size,
            next_cursor=next_cursor,
            has_next_page=has_next_page,
        )

    def deactivate_exhausted_clients(self, user_id: str) -> int:
        client_ids = self.charge_repository.find_clients_with_exhausted_attempts(
            user_id, self.max_attempts
        )
        if not client_ids:
            return 0

        changed = self.client_repository.deactivate(client_ids)
        logger.info(
            f"Deactivated {changed} clients of user {user_id} after {self.max_attempts} reminder attempts: "
            f"{sorted(client_ids)}"
        )
        return changed

    def increment_attempt(self, user_id: str, charge_id: int) -> Charge:
        """Record exactly one reminder attempt."""
        charge = self._get_charge(user_id, charge_id)
        charge.ensure_accepts_attempts(1, self.max_attempts)
        self._add_attempts(charge, 1)
        return charge

    def apply_update(
        self,
        user_id: str,
        charge_id: int,
        attempts_delta: Optional[int] = None,
        notes: Optional[str] = None,
        append_notes: bool = False
    ) -> Charge:
        """
        Add reminder attempts and/or write notes in one call.
        At least one of a delta or non-blank notes is required.
        """
        has_notes = notes is not None and bool(notes.strip())
        if attempts_delta is None and not has_notes:
            raise ValidationError(
                "Envie pelo menos messageAttemptsDelta ou observacoes", "messageAttemptsDelta"
            )

        charge = self._get_charge(user_id, charge_id)

        if attempts_delta is not None:
            charge.ensure_accepts_attempts(attempts_delta, self.max_attempts)

        if has_notes and charge.apply_notes(notes, append_notes):
            self.charge_repository.save(charge)

        if attempts_delta is not None:
            self._add_attempts(charge, attempts_delta)

        return charge

    def record_message(
        self,
        user_id: str,
        charge_id: int,
        notes: Optional[str] = None,
        append_notes: bool = False
    ) -> Charge:
        """A reminder was sent: one attempt plus optional notes."""
        return self.apply_update(user_id, charge_id, 1, notes, append_notes)

    def _get_charge(self, user_id: str, charge_id: int) -> Charge:
        charge = self.charge_repository.get_for_user(user_id, charge_id)
        if charge is None:
            raise EntityNotFoundError(CHARGE_NOT_FOUND, charge_id)
        return charge

    def _add_attempts(self, charge: Charge, delta: int) -> None:
        new_total = self.charge_repository.increment_attempts(charge.id, delta, self.max_attempts)
        if new_total is None:
            # Another request reached the cap first
            raise AttemptLimitExceededError()
        charge.message_attempts = new_total

    def _resolve_cursor(self, user_id: str, cursor: Optional[str]) -> Optional[Charge]:
        if not cursor:
            return None
        try:
            cursor_id = int(cursor)
        except ValueError:
            raise ValidationError("Cursor inválido", "cursor")

        after = self.charge_repository.get_for_user(user_id, cursor_id)
        if after is None:
            raise ValidationError("Cursor inválido", "cursor")
        return after
