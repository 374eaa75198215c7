"""
Domain services for the billing core.
This module exports the services that hold the temporal and state-machine rules.
"""

from .billing_calendar import (
    Clock,
    SystemClock,
    resolve_due_date,
    last_day_of_month,
    is_last_day_of_month,
    next_month,
)
from .billing_service import BillingService, BillGenerator, GenerationResult
from .status_sync_service import StatusSynchronizer
from .payment_service import PaymentService
from .integration_service import IntegrationGateway, ActionablePage
from .dashboard_service import DashboardService, DashboardStats
