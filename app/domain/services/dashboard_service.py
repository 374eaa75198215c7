"""
Dashboard service.
Aggregates tenant figures after a status sync.
"""

from dataclasses import dataclass, asdict
from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict

from app.domain.models.charge import ChargeStatus
from app.domain.repositories.charge_repository import ChargeRepository
from app.domain.repositories.client_repository import ClientRepository
from app.domain.services.billing_calendar import Clock, month_bounds, start_of_day, end_of_day
from app.domain.services.status_sync_service import StatusSynchronizer


DUE_SOON_DAYS = 7


@dataclass
class DashboardStats:
    active_clients: int
    total_clients: int
    pending_amount: Decimal
    paid_this_month: Decimal
    overdue_amount: Decimal
    clients_without_charges: int
    charges_due_soon: int
    overdue_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DashboardService:
    """Computes the figures shown on the tenant dashboard."""

    def __init__(
        self,
        charge_repository: ChargeRepository,
        client_repository: ClientRepository,
        synchronizer: StatusSynchronizer,
        clock: Clock
    ):
        self.charge_repository = charge_repository
        self.client_repository = client_repository
        self.synchronizer = synchronizer
        self.clock = clock

    def get_stats(self, user_id: str) -> DashboardStats:
        self.synchronizer.sync(user_id)

        today = self.clock.today()
        first_day, last_day = month_bounds(today.month, today.year)
        charges = self.charge_repository

        return DashboardStats(
            active_clients=self.client_repository.count_for_user(user_id, active=True),
            total_clients=self.client_repository.count_for_user(user_id),
            pending_amount=charges.sum_debt(user_id, [ChargeStatus.PENDENTE, ChargeStatus.ATRASADO]),
            paid_this_month=charges.sum_paid_between(
                user_id, start_of_day(first_day), end_of_day(last_day)
            ),
            overdue_amount=charges.sum_debt(user_id, [ChargeStatus.ATRASADO]),
            clients_without_charges=self.client_repository.count_without_charges(user_id),
            charges_due_soon=charges.count(
                user_id, ChargeStatus.PENDENTE, today, today + timedelta(days=DUE_SOON_DAYS)
            ),
            overdue_count=charges.count(user_id, ChargeStatus.ATRASADO),
        )
