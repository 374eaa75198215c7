"""
DTOs for the administrative bill generation.
"""

from typing import List, Optional
from pydantic import Field, field_validator

from app.domain.services.billing_service import GenerationResult
from .base_dto import BaseDTO, RequestDTO


class GenerateBillsRequestDTO(RequestDTO):
    """Month and year default to the month after today."""

    month: Optional[int] = None
    year: Optional[int] = None
    user_id: Optional[str] = Field(default=None, alias="userId")

    @field_validator("month")
    @classmethod
    def validate_month(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 1 <= v <= 12:
            raise ValueError("Mês inválido. Deve ser entre 1 e 12")
        return v

    @field_validator("year")
    @classmethod
    def validate_year(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 2000:
            raise ValueError("Ano inválido")
        return v


class GenerationErrorDTO(BaseDTO):
    client_id: int = Field(alias="clientId")
    client_name: str = Field(alias="clientName")
    error: str


class GenerationResultDTO(BaseDTO):
    total: int
    created: int
    duplicates: int
    errors: int
    error_details: List[GenerationErrorDTO] = Field(default_factory=list, alias="errorDetails")

    @classmethod
    def from_domain(cls, result: GenerationResult) -> "GenerationResultDTO":
        return cls(**result.to_dict())


class PeriodDTO(BaseDTO):
    month: int
    year: int


class GenerateBillsResponseDTO(BaseDTO):
    success: bool = True
    message: str
    result: GenerationResultDTO
    period: PeriodDTO
