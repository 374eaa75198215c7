"""
Payment processor.
Settles charges while keeping the original debt for reconciliation.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.domain.models.base import EntityNotFoundError
from app.domain.models.charge import Charge
from app.domain.repositories.charge_repository import ChargeRepository
from app.domain.services.billing_calendar import Clock


logger = logging.getLogger(__name__)

CHARGE_NOT_FOUND = "Cobrança não encontrada"


class PaymentService:
    """Marks charges as paid."""

    def __init__(self, charge_repository: ChargeRepository, clock: Clock):
        self.charge_repository = charge_repository
        self.clock = clock

    def mark_as_paid(
        self,
        user_id: str,
        charge_id: int,
        amount: Optional[Decimal] = None,
        payment_date: Optional[datetime] = None
    ) -> Charge:
        """
        Settle a charge of the user.

        Without an amount the whole debt is considered paid; without a date the
        payment happened now. Partial and over payments are accepted as given.
        """
        charge = self.charge_repository.get_for_user(user_id, charge_id)
        if charge is None:
            raise EntityNotFoundError(CHARGE_NOT_FOUND, charge_id)

        charge.mark_as_paid(payment_date or self.clock.now(), amount)
        saved = self.charge_repository.save(charge)

        logger.info(
            f"Charge {charge_id} paid: {saved.paid_amount} (debt {saved.debt_amount})"
        )
        return saved
