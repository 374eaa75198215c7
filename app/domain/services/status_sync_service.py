"""
Status synchronizer.
Keeps PENDENTE/ATRASADO in line with the calendar before anything reads statuses.
"""

import logging

from app.domain.repositories.charge_repository import ChargeRepository
from app.domain.services.billing_calendar import Clock


logger = logging.getLogger(__name__)


class StatusSynchronizer:
    """
    Recompute due-date driven statuses for one tenant.

    Two unconditional bulk updates, so running it repeatedly is harmless:
    overdue pending charges become ATRASADO and ATRASADO charges whose due
    date moved to today or later go back to PENDENTE.
    """

    def __init__(self, charge_repository: ChargeRepository, clock: Clock):
        self.charge_repository = charge_repository
        self.clock = clock

    def sync(self, user_id: str) -> int:
        today = self.clock.today()
        overdue = self.charge_repository.mark_overdue(user_id, today)
        reopened = self.charge_repository.mark_pending(user_id, today)

        if overdue or reopened:
            logger.info(
                f"Status sync for user {user_id}: {overdue} overdue, {reopened} back to pending"
            )
        return overdue + reopened
