"""
Client DTOs for the application layer.
Data Transfer Objects for client management operations.
"""

from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from pydantic import Field, StrictBool, field_validator, model_validator

from app.domain.models.charge import Charge
from app.domain.models.client import Client, NOTES_MAX_LENGTH
from .base_dto import RequestDTO, ResponseDTO, Money
from .charge_dto import ChargeResponseDTO


PHONE_PATTERN = r"^[0-9()+\s-]{8,20}$"
EMPTY_UPDATE_MESSAGE = "Informe ao menos um campo para atualizar"


class CreateClientRequestDTO(RequestDTO):
    """DTO for creating a new client."""

    name: str = Field(alias="nome", min_length=3, description="Client name")
    phone: str = Field(alias="fone", pattern=PHONE_PATTERN, description="Phone number")
    billing_day: int = Field(alias="vencimento", ge=1, le=31, description="Day of the month to bill")
    amount: Decimal = Field(alias="valor", ge=0, description="Monthly amount")
    notes: Optional[str] = Field(default=None, alias="observacoes", max_length=NOTES_MAX_LENGTH)
    active: bool = Field(default=True, alias="ativo")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if len(v.strip()) < 3:
            raise ValueError("Nome precisa de pelo menos 3 caracteres")
        return v.strip()


class UpdateClientRequestDTO(RequestDTO):
    """DTO for partially updating a client."""

    name: Optional[str] = Field(default=None, alias="nome", min_length=3)
    phone: Optional[str] = Field(default=None, alias="fone", pattern=PHONE_PATTERN)
    billing_day: Optional[int] = Field(default=None, alias="vencimento", ge=1, le=31)
    amount: Optional[Decimal] = Field(default=None, alias="valor", ge=0)
    notes: Optional[str] = Field(default=None, alias="observacoes", max_length=NOTES_MAX_LENGTH)
    active: Optional[bool] = Field(default=None, alias="ativo")

    @model_validator(mode="after")
    def require_some_field(self) -> "UpdateClientRequestDTO":
        if not self.model_fields_set:
            raise ValueError(EMPTY_UPDATE_MESSAGE)
        return self


class ToggleClientStatusRequestDTO(RequestDTO):
    """DTO for activating or deactivating a client."""

    active: StrictBool = Field(alias="ativo")


class ClientResponseDTO(ResponseDTO):
    """DTO for client responses."""

    name: str = Field(alias="nome")
    phone: str = Field(alias="fone")
    billing_day: int = Field(alias="vencimento")
    amount: Money = Field(alias="valor")
    active: bool = Field(alias="ativo")
    notes: Optional[str] = Field(default=None, alias="observacoes")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @classmethod
    def from_domain(cls, client: Client) -> "ClientResponseDTO":
        return cls(
            id=client.id,
            name=client.name,
            phone=client.phone,
            billing_day=client.billing_day,
            amount=client.amount,
            active=client.active,
            notes=client.notes,
            created_at=client.created_at,
            updated_at=client.updated_at,
        )


class ClientDetailResponseDTO(ClientResponseDTO):
    """Client with its most recent charges."""

    charges: List[ChargeResponseDTO] = Field(default_factory=list, alias="cobrancas")

    @classmethod
    def from_domain_with_charges(cls, client: Client, charges: List[Charge]) -> "ClientDetailResponseDTO":
        return cls(
            **ClientResponseDTO.from_domain(client).model_dump(),
            charges=[ChargeResponseDTO.from_domain(charge) for charge in charges],
        )


class ToggleClientStatusResponseDTO(ResponseDTO):
    success: bool = True
    message: str
