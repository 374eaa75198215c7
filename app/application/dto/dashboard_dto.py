"""
Dashboard DTOs.
"""

from pydantic import Field

from app.domain.services.dashboard_service import DashboardStats
from .base_dto import BaseDTO, Money


class DashboardStatsResponseDTO(BaseDTO):
    """Tenant figures; amounts in the tenant currency."""

    active_clients: int = Field(alias="activeClients")
    total_clients: int = Field(alias="totalClients")
    pending_amount: Money = Field(alias="pendingAmount")
    paid_this_month: Money = Field(alias="paidThisMonth")
    overdue_amount: Money = Field(alias="overdueAmount")
    clients_without_charges: int = Field(alias="clientsWithoutCharges")
    charges_due_soon: int = Field(alias="chargesDueSoon")
    overdue_count: int = Field(alias="overdueCount")

    @classmethod
    def from_domain(cls, stats: DashboardStats) -> "DashboardStatsResponseDTO":
        return cls(**stats.to_dict())
