"""
Celery application used for scheduled billing work.
"""

from celery import Celery

from app.config import Settings


def create_celery_app(settings: Settings) -> Celery:
    """Create the Celery app; beat entries are added by the schedulers, not here."""
    app = Celery("cobranca", broker=settings.celery_broker_url, backend=settings.celery_result_backend)
    app.conf.update(
        timezone=settings.timezone,
        enable_utc=False,
        task_always_eager=settings.celery_task_always_eager,
        task_acks_late=True,
        task_reject_on_worker_lost=True,
        worker_prefetch_multiplier=1,
        accept_content=["json"],
        task_serializer="json",
        result_serializer="json",
        beat_schedule={},
    )
    return app
