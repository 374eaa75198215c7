"""
DTOs served to the reminder automation.
"""

from typing import List, Optional
from datetime import date
from pydantic import Field

from app.domain.models.charge import Charge, ChargeCategory, ChargeStatus
from app.domain.services.integration_service import ActionablePage
from .base_dto import BaseDTO, Money
from .charge_dto import ClientSummaryDTO


class ActionableChargeDTO(BaseDTO):
    id: int
    client: ClientSummaryDTO
    status: ChargeStatus
    amount: Money = Field(alias="valor")
    due_date: date = Field(alias="dataVencimento")
    message_attempts: int = Field(alias="messageAttempts")
    notes: Optional[str] = Field(default=None, alias="observacoes")
    category: ChargeCategory

    @classmethod
    def from_domain(cls, charge: Charge) -> "ActionableChargeDTO":
        return cls(
            id=charge.id,
            client=ClientSummaryDTO.from_domain(charge.client),
            status=charge.status,
            amount=charge.amount,
            due_date=charge.due_date,
            message_attempts=charge.message_attempts,
            notes=charge.notes,
            category=charge.category,
        )


class PaginationDTO(BaseDTO):
    limit: int
    next_cursor: Optional[str] = Field(default=None, alias="nextCursor")
    has_next_page: bool = Field(alias="hasNextPage")


class ActionablePageResponseDTO(BaseDTO):
    """Keyset page of charges that need a reminder."""

    data: List[ActionableChargeDTO] = Field(default_factory=list)
    pagination: PaginationDTO

    @classmethod
    def from_page(cls, page: ActionablePage) -> "ActionablePageResponseDTO":
        return cls(
            data=[ActionableChargeDTO.from_domain(charge) for charge in page.items],
            pagination=PaginationDTO(
                limit=page.limit,
                next_cursor=page.next_cursor,
                has_next_page=page.has_next_page,
            ),
        )


class AttemptDTO(BaseDTO):
    id: int
    message_attempts: int = Field(alias="messageAttempts")


class AttemptResponseDTO(BaseDTO):
    data: AttemptDTO

    @classmethod
    def from_domain(cls, charge: Charge) -> "AttemptResponseDTO":
        return cls(data=AttemptDTO(id=charge.id, message_attempts=charge.message_attempts))


class IntegrationChargeDTO(BaseDTO):
    id: int
    status: ChargeStatus
    message_attempts: int = Field(alias="messageAttempts")
    notes: Optional[str] = Field(default=None, alias="observacoes")


class IntegrationUpdateResponseDTO(BaseDTO):
    """Charge state after an update coming from the automation."""

    data: IntegrationChargeDTO

    @classmethod
    def from_domain(cls, charge: Charge) -> "IntegrationUpdateResponseDTO":
        return cls(
            data=IntegrationChargeDTO(
                id=charge.id,
                status=charge.status,
                message_attempts=charge.message_attempts,
                notes=charge.notes,
            )
        )
