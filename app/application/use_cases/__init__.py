"""
Application layer use cases.
Business logic for the billing system.
"""

from .base_use_case import BaseUseCase, TenantUseCase
from .client_use_cases import (
    CreateClientUseCase,
    UpdateClientUseCase,
    SetClientActiveUseCase,
    GetClientUseCase,
    ListClientsUseCase,
)
from .charge_use_cases import (
    CreateChargeUseCase,
    GetChargeUseCase,
    ListChargesUseCase,
    UpdateChargeUseCase,
    PayChargeUseCase,
)
from .integration_use_cases import (
    ListActionableChargesUseCase,
    RegisterAttemptUseCase,
    IntegrationUpdateUseCase,
    RecordMessageUseCase,
)
from .dashboard_use_cases import GetDashboardStatsUseCase
from .billing_use_cases import GenerateMonthlyBillsUseCase, GenerationRun

__all__ = [
    # Base Use Cases
    "BaseUseCase",
    "TenantUseCase",

    # Client Use Cases
    "CreateClientUseCase",
    "UpdateClientUseCase",
    "SetClientActiveUseCase",
    "GetClientUseCase",
    "ListClientsUseCase",

    # Charge Use Cases
    "CreateChargeUseCase",
    "GetChargeUseCase",
    "ListChargesUseCase",
    "UpdateChargeUseCase",
    "PayChargeUseCase",

    # Integration Use Cases
    "ListActionableChargesUseCase",
    "RegisterAttemptUseCase",
    "IntegrationUpdateUseCase",
    "RecordMessageUseCase",

    # Dashboard and billing
    "GetDashboardStatsUseCase",
    "GenerateMonthlyBillsUseCase",
    "GenerationRun",
]
