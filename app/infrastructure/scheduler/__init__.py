"""
Scheduling infrastructure (Celery beat).
"""

from .celery_app import create_celery_app
from .billing_scheduler import BillingScheduler, MONTHLY_GENERATION_TASK, MONTHLY_GENERATION_ENTRY

__all__ = [
    "create_celery_app",
    "BillingScheduler",
    "MONTHLY_GENERATION_TASK",
    "MONTHLY_GENERATION_ENTRY",
]
