"""
Charge ("cobrança") DTOs for the application layer.
Wire keys keep the Portuguese camelCase names used by the web client and the automation.
"""

from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from pydantic import Field, PositiveInt, field_validator, model_validator

from app.domain.models.charge import Charge, ChargeStatus
from app.domain.models.client import Client, NOTES_MAX_LENGTH
from .base_dto import BaseDTO, RequestDTO, ResponseDTO, Money


EMPTY_UPDATE_MESSAGE = "Informe ao menos um campo para atualizar"
TRUTHY_STRINGS = {"true", "1", "yes"}


class ClientSummaryDTO(BaseDTO):
    """The owning client as embedded in charge payloads."""

    id: int
    name: str = Field(alias="nome")
    phone: str = Field(alias="fone")
    active: bool = Field(alias="ativo")

    @classmethod
    def from_domain(cls, client: Client) -> "ClientSummaryDTO":
        return cls(id=client.id, name=client.name, phone=client.phone, active=client.active)


class CreateChargeRequestDTO(RequestDTO):
    """DTO for creating a charge by hand."""

    client_id: PositiveInt = Field(alias="clientId")
    amount: Decimal = Field(alias="valor", gt=0)
    due_date: date = Field(alias="dataVencimento")
    payment_date: Optional[datetime] = Field(default=None, alias="dataPagamento")
    status: ChargeStatus = ChargeStatus.PENDENTE
    notes: Optional[str] = Field(default=None, alias="observacoes", max_length=NOTES_MAX_LENGTH)


class UpdateChargeRequestDTO(RequestDTO):
    """
    Partial update; only the keys present in the body are applied.
    `observacoes: null` or blank clears the notes.
    """

    amount: Optional[Decimal] = Field(default=None, alias="valor", gt=0)
    due_date: Optional[date] = Field(default=None, alias="dataVencimento")
    payment_date: Optional[datetime] = Field(default=None, alias="dataPagamento")
    status: Optional[ChargeStatus] = None
    notes: Optional[str] = Field(default=None, alias="observacoes", max_length=NOTES_MAX_LENGTH)

    @model_validator(mode="after")
    def require_some_field(self) -> "UpdateChargeRequestDTO":
        if not self.model_fields_set:
            raise ValueError(EMPTY_UPDATE_MESSAGE)
        return self


class PayChargeRequestDTO(RequestDTO):
    """Both fields are optional: full debt, paid now."""

    amount: Optional[Decimal] = Field(default=None, alias="valor", gt=0)
    payment_date: Optional[datetime] = Field(default=None, alias="dataPagamento")


def parse_flag(value):
    """Booleans pass through; "true", "1" and "yes" (any case) are true."""
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    return value


class IntegrationUpdateRequestDTO(RequestDTO):
    """Attempts and/or notes sent by the reminder automation."""

    attempts_delta: Optional[int] = Field(default=None, alias="messageAttemptsDelta", ge=1, le=3)
    notes: Optional[str] = Field(default=None, alias="observacoes", max_length=NOTES_MAX_LENGTH)
    append_notes: bool = Field(default=False, alias="appendObservacoes")

    _parse_append = field_validator("append_notes", mode="before")(parse_flag)


class RecordMessageRequestDTO(RequestDTO):
    """A reminder was sent for charge `id`; counts as one attempt."""

    id: PositiveInt
    notes: Optional[str] = Field(default=None, alias="observacoes", max_length=NOTES_MAX_LENGTH)
    append_notes: bool = Field(default=False, alias="appendObservacoes")

    _parse_append = field_validator("append_notes", mode="before")(parse_flag)


class ChargeResponseDTO(ResponseDTO):
    """DTO for charge responses."""

    client_id: int = Field(alias="clientId")
    amount: Money = Field(alias="valor")
    debt_amount: Money = Field(alias="valorDivida")
    paid_amount: Optional[Money] = Field(default=None, alias="valorPago")
    amount_difference: Optional[Money] = Field(default=None, alias="diferencaValor")
    due_date: date = Field(alias="dataVencimento")
    payment_date: Optional[datetime] = Field(default=None, alias="dataPagamento")
    status: ChargeStatus
    message_attempts: int = Field(alias="messageAttempts")
    notes: Optional[str] = Field(default=None, alias="observacoes")
    client: Optional[ClientSummaryDTO] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @classmethod
    def from_domain(cls, charge: Charge) -> "ChargeResponseDTO":
        return cls(
            id=charge.id,
            client_id=charge.client_id,
            amount=charge.amount,
            debt_amount=charge.debt_amount,
            paid_amount=charge.paid_amount,
            amount_difference=charge.amount_difference,
            due_date=charge.due_date,
            payment_date=charge.payment_date,
            status=charge.status,
            message_attempts=charge.message_attempts,
            notes=charge.notes,
            client=ClientSummaryDTO.from_domain(charge.client) if charge.client else None,
            created_at=charge.created_at,
            updated_at=charge.updated_at,
        )
