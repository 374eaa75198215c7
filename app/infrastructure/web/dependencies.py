"""
Application-wide FastAPI dependencies.
Settings, the clock and the session factory are built once by create_application()
and read from app.state; repositories and services are built per request.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session, sessionmaker

from app.config import Settings
from app.domain.services.billing_calendar import Clock
from app.domain.services.billing_service import BillGenerator
from app.domain.services.dashboard_service import DashboardService
from app.domain.services.integration_service import IntegrationGateway
from app.domain.services.payment_service import PaymentService
from app.domain.services.status_sync_service import StatusSynchronizer
from app.infrastructure.db.database import get_db, get_session_factory
from app.infrastructure.repositories.charge_repository import SQLAlchemyChargeRepository
from app.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from app.infrastructure.repositories.unit_of_work import SQLAlchemyUnitOfWork
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_app_settings(request: Request) -> Settings:
    """Dependency to get the settings the application was created with."""
    return request.app.state.settings


def get_clock(request: Request) -> Clock:
    """Dependency to get the business clock."""
    return request.app.state.clock


def get_client_repository(session: Annotated[Session, Depends(get_db)]) -> SQLAlchemyClientRepository:
    """Dependency to get client repository."""
    return SQLAlchemyClientRepository(session)


def get_charge_repository(session: Annotated[Session, Depends(get_db)]) -> SQLAlchemyChargeRepository:
    """Dependency to get charge repository."""
    return SQLAlchemyChargeRepository(session)


def get_user_repository(session: Annotated[Session, Depends(get_db)]) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(session)


def get_status_synchronizer(
    charges: Annotated[SQLAlchemyChargeRepository, Depends(get_charge_repository)],
    clock: Annotated[Clock, Depends(get_clock)]
) -> StatusSynchronizer:
    return StatusSynchronizer(charges, clock)


def get_payment_service(
    charges: Annotated[SQLAlchemyChargeRepository, Depends(get_charge_repository)],
    clock: Annotated[Clock, Depends(get_clock)]
) -> PaymentService:
    return PaymentService(charges, clock)


def get_integration_gateway(
    charges: Annotated[SQLAlchemyChargeRepository, Depends(get_charge_repository)],
    clients: Annotated[SQLAlchemyClientRepository, Depends(get_client_repository)],
    synchronizer: Annotated[StatusSynchronizer, Depends(get_status_synchronizer)],
    clock: Annotated[Clock, Depends(get_clock)],
    settings: Annotated[Settings, Depends(get_app_settings)]
) -> IntegrationGateway:
    return IntegrationGateway(
        charges,
        clients,
        synchronizer,
        clock,
        max_attempts=settings.max_message_attempts,
        max_page_size=settings.integration_max_page_size,
        upcoming_window_days=settings.upcoming_window_days,
    )


def get_dashboard_service(
    charges: Annotated[SQLAlchemyChargeRepository, Depends(get_charge_repository)],
    clients: Annotated[SQLAlchemyClientRepository, Depends(get_client_repository)],
    synchronizer: Annotated[StatusSynchronizer, Depends(get_status_synchronizer)],
    clock: Annotated[Clock, Depends(get_clock)]
) -> DashboardService:
    return DashboardService(charges, clients, synchronizer, clock)


def get_bill_generator(
    session_factory: Annotated[sessionmaker, Depends(get_session_factory)]
) -> BillGenerator:
    """The generator opens its own transaction per client, outside the request session."""
    return BillGenerator(lambda: SQLAlchemyUnitOfWork(session_factory))
