"""
Unit of work implementation using SQLAlchemy.
"""

from sqlalchemy.orm import sessionmaker

from app.domain.repositories.unit_of_work import UnitOfWork
from app.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from app.infrastructure.repositories.charge_repository import SQLAlchemyChargeRepository


class SQLAlchemyUnitOfWork(UnitOfWork):
    """One session, and therefore one transaction, per unit of work."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self.session = None

    def __enter__(self) -> "SQLAlchemyUnitOfWork":
        self.session = self.session_factory()
        self.clients = SQLAlchemyClientRepository(self.session)
        self.charges = SQLAlchemyChargeRepository(self.session)
        return self

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def close(self) -> None:
        self.session.close()
