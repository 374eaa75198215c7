"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import BaseDTO, RequestDTO, ResponseDTO, ErrorResponseDTO, Money
from .charge_dto import (
    ClientSummaryDTO,
    CreateChargeRequestDTO,
    UpdateChargeRequestDTO,
    PayChargeRequestDTO,
    IntegrationUpdateRequestDTO,
    RecordMessageRequestDTO,
    ChargeResponseDTO,
)
from .client_dto import (
    CreateClientRequestDTO,
    UpdateClientRequestDTO,
    ToggleClientStatusRequestDTO,
    ToggleClientStatusResponseDTO,
    ClientResponseDTO,
    ClientDetailResponseDTO,
)
from .integration_dto import (
    ActionableChargeDTO,
    ActionablePageResponseDTO,
    AttemptResponseDTO,
    IntegrationUpdateResponseDTO,
)
from .dashboard_dto import DashboardStatsResponseDTO
from .billing_dto import GenerateBillsRequestDTO, GenerateBillsResponseDTO, GenerationResultDTO

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "ErrorResponseDTO",
    "Money",

    # Charge DTOs
    "ClientSummaryDTO",
    "CreateChargeRequestDTO",
    "UpdateChargeRequestDTO",
    "PayChargeRequestDTO",
    "IntegrationUpdateRequestDTO",
    "RecordMessageRequestDTO",
    "ChargeResponseDTO",

    # Client DTOs
    "CreateClientRequestDTO",
    "UpdateClientRequestDTO",
    "ToggleClientStatusRequestDTO",
    "ToggleClientStatusResponseDTO",
    "ClientResponseDTO",
    "ClientDetailResponseDTO",

    # Integration DTOs
    "ActionableChargeDTO",
    "ActionablePageResponseDTO",
    "AttemptResponseDTO",
    "IntegrationUpdateResponseDTO",

    # Dashboard and billing DTOs
    "DashboardStatsResponseDTO",
    "GenerateBillsRequestDTO",
    "GenerateBillsResponseDTO",
    "GenerationResultDTO",
]
