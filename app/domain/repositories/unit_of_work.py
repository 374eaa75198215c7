"""
Unit of work interface.
Groups repository operations into one transaction that is committed explicitly.
"""

from abc import ABC, abstractmethod

from app.domain.repositories.client_repository import ClientRepository
from app.domain.repositories.charge_repository import ChargeRepository


class UnitOfWork(ABC):
    """
    One transaction over the client and charge repositories.

    Usage:
        with uow_factory() as uow:
            uow.charges.add(charge)
            uow.commit()

    Leaving the block without commit() rolls the work back.
    """

    clients: ClientRepository
    charges: ChargeRepository

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()
        self.close()

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass

    def close(self) -> None:
        pass
