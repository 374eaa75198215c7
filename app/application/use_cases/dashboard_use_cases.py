"""
Dashboard use cases.
"""

from app.application.use_cases.base_use_case import TenantUseCase
from app.domain.services.dashboard_service import DashboardService, DashboardStats


class GetDashboardStatsUseCase(TenantUseCase[DashboardStats]):
    def __init__(self, dashboard_service: DashboardService):
        super().__init__()
        self.dashboard_service = dashboard_service

    def _execute_business_logic(self) -> DashboardStats:
        return self.dashboard_service.get_stats(self.current_user_id)
