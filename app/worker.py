"""
Celery worker entry point.
Builds the scheduler explicitly and runs the worker with an embedded beat.

Usage: python -m app.worker
"""

import logging
from typing import Optional, Tuple

from celery import Celery
from sentry_sdk.integrations.celery import CeleryIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from app.config import Settings, get_settings
from app.domain.services.billing_calendar import SystemClock
from app.domain.services.billing_service import BillGenerator
from app.infrastructure.db.database import create_db_engine, create_session_factory
from app.infrastructure.repositories.unit_of_work import SQLAlchemyUnitOfWork
from app.infrastructure.scheduler import BillingScheduler, create_celery_app
from app.main import configure_logging, init_sentry

logger = logging.getLogger(__name__)

IN_PROCESS_BROKERS = ("memory://",)


def check_broker(settings: Settings) -> None:
    """
    The embedded beat runs in a child process, so the scheduler needs a broker
    reachable from both processes.
    """
    if settings.billing_scheduler_enabled and settings.celery_broker_url.startswith(IN_PROCESS_BROKERS):
        raise RuntimeError(
            f"CELERY_BROKER_URL={settings.celery_broker_url} is process-local; "
            "set an amqp:// or redis:// broker or disable BILLING_SCHEDULER_ENABLED"
        )


def build_worker(settings: Optional[Settings] = None) -> Tuple[Celery, BillingScheduler]:
    """Wire the Celery app and the billing scheduler; nothing is scheduled yet."""
    settings = settings or get_settings()

    engine = create_db_engine(settings.sqlalchemy_database_url, echo=settings.database_echo)
    session_factory = create_session_factory(engine)
    generator = BillGenerator(lambda: SQLAlchemyUnitOfWork(session_factory))

    celery_app = create_celery_app(settings)
    scheduler = BillingScheduler(
        celery_app,
        generator,
        SystemClock(settings.timezone),
        hour=settings.billing_cron_hour,
        minute=settings.billing_cron_minute,
    )
    return celery_app, scheduler


def main() -> None:
    settings = get_settings()
    configure_logging(settings.debug)
    init_sentry(settings, [CeleryIntegration(), SqlalchemyIntegration()])
    check_broker(settings)

    celery_app, scheduler = build_worker(settings)
    if settings.billing_scheduler_enabled:
        scheduler.start()
    else:
        logger.info("Billing scheduler disabled by configuration")

    celery_app.worker_main(["worker", "--beat", "--loglevel=DEBUG" if settings.debug else "--loglevel=INFO"])


if __name__ == "__main__":
    main()
