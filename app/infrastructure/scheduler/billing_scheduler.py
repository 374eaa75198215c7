"""
Monthly bill generation schedule.
A daily beat entry runs the check; charges are only generated on the last day of the month.
"""

import logging
from typing import Any, Dict, Optional

from celery import Celery
from celery.schedules import crontab

from app.domain.services.billing_calendar import Clock, is_last_day_of_month, next_month
from app.domain.services.billing_service import BillGenerator, GenerationResult


logger = logging.getLogger(__name__)

MONTHLY_GENERATION_TASK = "billing.monthly_generation"
MONTHLY_GENERATION_ENTRY = "generate-monthly-bills"


class BillingScheduler:
    """
    Owns the beat entry of the monthly generation.

    start() is explicit and idempotent: the task and its schedule are
    registered once no matter how many times it is called. stop() removes
    the schedule entry so a later start() registers it again.
    """

    def __init__(
        self,
        celery_app: Celery,
        generator: BillGenerator,
        clock: Clock,
        hour: int = 23,
        minute: int = 59
    ):
        self.celery_app = celery_app
        self.generator = generator
        self.clock = clock
        self.hour = hour
        self.minute = minute
        self._started = False

    @property
    def is_started(self) -> bool:
        return self._started

    def start(self) -> bool:
        """Register the task and its daily beat entry. Returns False if already started."""
        if self._started:
            logger.debug("Billing scheduler already started")
            return False

        self._register_task()
        schedule = dict(self.celery_app.conf.beat_schedule or {})
        schedule[MONTHLY_GENERATION_ENTRY] = {
            "task": MONTHLY_GENERATION_TASK,
            "schedule": crontab(minute=self.minute, hour=self.hour),
        }
        self.celery_app.conf.beat_schedule = schedule
        self._started = True

        logger.info(
            f"Billing scheduler started: daily check at {self.hour:02d}:{self.minute:02d} "
            f"({self.celery_app.conf.timezone})"
        )
        return True

    def stop(self) -> bool:
        """Remove the beat entry. Returns False if it was not started."""
        if not self._started:
            return False

        schedule = dict(self.celery_app.conf.beat_schedule or {})
        schedule.pop(MONTHLY_GENERATION_ENTRY, None)
        self.celery_app.conf.beat_schedule = schedule
        self._started = False

        logger.info("Billing scheduler stopped")
        return True

    def run_daily_check(self) -> Optional[GenerationResult]:
        """
        Generate next month's charges when today is the last day of the month.
        Returns None on every other day.
        """
        today = self.clock.today()
        if not is_last_day_of_month(today):
            logger.info(f"{today} is not the last day of the month, skipping bill generation")
            return None

        month, year = next_month(today)
        logger.info(f"Last day of the month, generating bills for {month:02d}/{year}")
        return self.generator.generate(month, year)

    def _register_task(self) -> None:
        if MONTHLY_GENERATION_TASK in self.celery_app.tasks:
            return

        def monthly_generation() -> Optional[Dict[str, Any]]:
            result = self.run_daily_check()
            return result.to_dict() if result else None

        self.celery_app.task(name=MONTHLY_GENERATION_TASK, shared=False, lazy=False)(monthly_generation)
