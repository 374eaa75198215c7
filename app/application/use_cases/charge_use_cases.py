"""
Charge ("cobrança") use cases for the application layer.
"""

import logging
import re
from typing import List, Optional

from app.application.use_cases.base_use_case import TenantUseCase
from app.application.dto.charge_dto import (
    CreateChargeRequestDTO,
    UpdateChargeRequestDTO,
    PayChargeRequestDTO,
)
from app.domain.models.base import DuplicateEntityError, EntityNotFoundError, ValidationError
from app.domain.models.charge import Charge, ChargeStatus, DUPLICATE_DUE_DATE_MESSAGE
from app.domain.models.client import clean_notes
from app.domain.repositories.charge_repository import ChargeRepository
from app.domain.repositories.client_repository import ClientRepository
from app.domain.services.billing_calendar import Clock, month_bounds
from app.domain.services.payment_service import PaymentService, CHARGE_NOT_FOUND
from app.domain.services.status_sync_service import StatusSynchronizer


logger = logging.getLogger(__name__)

CLIENT_NOT_OWNED = "Cliente não encontrado ou não pertence ao usuário"
ALL_STATUSES = "todos"
_MONTH_FILTER = re.compile(r"^(\d{4})-(\d{2})$")


def parse_month_filter(value: str):
    """Parse a "YYYY-MM" filter into (month, year)."""
    match = _MONTH_FILTER.match(value.strip())
    if not match or not 1 <= int(match.group(2)) <= 12:
        raise ValidationError("Mês inválido. Use o formato AAAA-MM", "month")
    return int(match.group(2)), int(match.group(1))


class CreateChargeUseCase(TenantUseCase[Charge]):
    """Create a charge for one of the tenant's clients."""

    def __init__(self, charge_repository: ChargeRepository, client_repository: ClientRepository, clock: Clock):
        super().__init__()
        self.charge_repository = charge_repository
        self.client_repository = client_repository
        self.clock = clock

    def _execute_business_logic(self, request: CreateChargeRequestDTO) -> Charge:
        client = self.client_repository.get_for_user(self.current_user_id, request.client_id)
        if not client:
            raise EntityNotFoundError(CLIENT_NOT_OWNED, request.client_id)

        if self.charge_repository.exists_for_client_on(client.id, request.due_date):
            raise DuplicateEntityError(DUPLICATE_DUE_DATE_MESSAGE)

        status = ChargeStatus(request.status)
        payment_date = request.payment_date
        if payment_date is not None:
            payment_date = self.clock.localize(payment_date)
        elif status == ChargeStatus.PAGO:
            payment_date = self.clock.now()

        charge = Charge.create(
            client_id=client.id,
            amount=request.amount,
            due_date=request.due_date,
            status=status,
            notes=request.notes,
            payment_date=payment_date,
        )

        saved = self.charge_repository.add(charge)
        saved.client = client
        logger.info(f"Charge {saved.id} created for client {client.id} due {saved.due_date}")
        return saved


class GetChargeUseCase(TenantUseCase[Charge]):
    """Charge detail."""

    def __init__(self, charge_repository: ChargeRepository, synchronizer: StatusSynchronizer):
        super().__init__()
        self.charge_repository = charge_repository
        self.synchronizer = synchronizer

    def _execute_business_logic(self, charge_id: int) -> Charge:
        self.synchronizer.sync(self.current_user_id)
        charge = self.charge_repository.get_for_user(self.current_user_id, charge_id)
        if not charge:
            raise EntityNotFoundError(CHARGE_NOT_FOUND, charge_id)
        return charge


class ListChargesUseCase(TenantUseCase[List[Charge]]):
    """
    List charges, newest due date first.

    With a "YYYY-MM" month the whole month is listed; without it the window
    runs from the first day of the current month through today.
    """

    def __init__(self, charge_repository: ChargeRepository, synchronizer: StatusSynchronizer, clock: Clock):
        super().__init__()
        self.charge_repository = charge_repository
        self.synchronizer = synchronizer
        self.clock = clock

    def _execute_business_logic(
        self,
        month: Optional[str] = None,
        status: Optional[str] = None,
        client_name: Optional[str] = None
    ) -> List[Charge]:
        if month:
            start, end = month_bounds(*parse_month_filter(month))
        else:
            today = self.clock.today()
            start, end = today.replace(day=1), today

        status_filter = None
        if status and status.lower() != ALL_STATUSES:
            try:
                status_filter = ChargeStatus(status.upper())
            except ValueError:
                raise ValidationError("Status inválido", "status")

        self.synchronizer.sync(self.current_user_id)
        return self.charge_repository.list_for_user(
            self.current_user_id,
            start=start,
            end=end,
            status=status_filter,
            client_name=client_name.strip() if client_name else None,
        )


class UpdateChargeUseCase(TenantUseCase[Charge]):
    """
    Partial charge update.

    While the charge is open the debt follows the amount; once paid the debt
    stays frozen and only the displayed amount changes.
    """

    def __init__(self, charge_repository: ChargeRepository, clock: Clock):
        super().__init__()
        self.charge_repository = charge_repository
        self.clock = clock

    def _execute_business_logic(self, charge_id: int, request: UpdateChargeRequestDTO) -> Charge:
        charge = self.charge_repository.get_for_user(self.current_user_id, charge_id)
        if not charge:
            raise EntityNotFoundError(CHARGE_NOT_FOUND, charge_id)

        fields = request.model_fields_set

        if "status" in fields and request.status is not None:
            charge.change_status(request.status)

        if "amount" in fields and request.amount is not None:
            charge.change_amount(request.amount)

        if "due_date" in fields and request.due_date is not None and request.due_date != charge.due_date:
            if self.charge_repository.exists_for_client_on(charge.client_id, request.due_date):
                raise DuplicateEntityError(DUPLICATE_DUE_DATE_MESSAGE)
            charge.due_date = request.due_date

        if "payment_date" in fields:
            charge.payment_date = self.clock.localize(request.payment_date) if request.payment_date else None

        if "notes" in fields:
            charge.notes = clean_notes(request.notes)

        charge.validate()
        charge.mark_as_updated()
        return self.charge_repository.save(charge)


class PayChargeUseCase(TenantUseCase[Charge]):
    """Mark a charge as paid, optionally with the amount and moment of payment."""

    def __init__(self, payment_service: PaymentService, clock: Clock):
        super().__init__()
        self.payment_service = payment_service
        self.clock = clock

    def _execute_business_logic(self, charge_id: int, request: Optional[PayChargeRequestDTO] = None) -> Charge:
        amount = request.amount if request else None
        payment_date = request.payment_date if request else None
        if payment_date is not None:
            payment_date = self.clock.localize(payment_date)

        return self.payment_service.mark_as_paid(self.current_user_id, charge_id, amount, payment_date)
