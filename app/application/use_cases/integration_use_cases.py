"""
Use cases behind the reminder automation endpoints.
"""

from typing import Optional

from app.application.use_cases.base_use_case import TenantUseCase
from app.application.dto.charge_dto import IntegrationUpdateRequestDTO, RecordMessageRequestDTO
from app.domain.models.charge import Charge
from app.domain.services.integration_service import IntegrationGateway, ActionablePage


class ListActionableChargesUseCase(TenantUseCase[ActionablePage]):
    """Upcoming and overdue charges that still accept reminders."""

    def __init__(self, gateway: IntegrationGateway):
        super().__init__()
        self.gateway = gateway

    def _execute_business_logic(self, cursor: Optional[str] = None, limit: Optional[int] = None) -> ActionablePage:
        return self.gateway.list_actionable(self.current_user_id, cursor, limit)


class RegisterAttemptUseCase(TenantUseCase[Charge]):
    def __init__(self, gateway: IntegrationGateway):
        super().__init__()
        self.gateway = gateway

    def _execute_business_logic(self, charge_id: int) -> Charge:
        return self.gateway.increment_attempt(self.current_user_id, charge_id)


class IntegrationUpdateUseCase(TenantUseCase[Charge]):
    """Attempts delta and/or notes in a single call."""

    def __init__(self, gateway: IntegrationGateway):
        super().__init__()
        self.gateway = gateway

    def _execute_business_logic(self, charge_id: int, request: IntegrationUpdateRequestDTO) -> Charge:
        return self.gateway.apply_update(
            self.current_user_id,
            charge_id,
            attempts_delta=request.attempts_delta,
            notes=request.notes,
            append_notes=request.append_notes,
        )


class RecordMessageUseCase(TenantUseCase[Charge]):
    """A reminder message was sent for a charge."""

    def __init__(self, gateway: IntegrationGateway):
        super().__init__()
        self.gateway = gateway

    def _execute_business_logic(self, request: RecordMessageRequestDTO) -> Charge:
        return self.gateway.record_message(
            self.current_user_id,
            request.id,
            notes=request.notes,
            append_notes=request.append_notes,
        )
