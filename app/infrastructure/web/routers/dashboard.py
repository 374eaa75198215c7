"""
Dashboard router.
"""

from typing import Annotated
from fastapi import APIRouter, Depends

from app.infrastructure.auth import get_current_user_id
from app.application.use_cases.dashboard_use_cases import GetDashboardStatsUseCase
from app.application.dto.dashboard_dto import DashboardStatsResponseDTO
from app.domain.services.dashboard_service import DashboardService
from app.infrastructure.web.dependencies import get_dashboard_service


router = APIRouter()


@router.get("/stats", response_model=DashboardStatsResponseDTO)
def get_stats(
    user_id: Annotated[str, Depends(get_current_user_id)],
    service: Annotated[DashboardService, Depends(get_dashboard_service)]
):
    """Client counts and amounts for the current month."""
    stats = GetDashboardStatsUseCase(service).set_current_user(user_id).execute()
    return DashboardStatsResponseDTO.from_domain(stats)
