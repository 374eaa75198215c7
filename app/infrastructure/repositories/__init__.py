"""
Infrastructure repositories module.
Contains SQLAlchemy implementations of domain repositories.
"""

from .user_repository import SQLAlchemyUserRepository, SQLAlchemyApiTokenRepository
from .client_repository import SQLAlchemyClientRepository
from .charge_repository import SQLAlchemyChargeRepository
from .unit_of_work import SQLAlchemyUnitOfWork

__all__ = [
    "SQLAlchemyUserRepository",
    "SQLAlchemyApiTokenRepository",
    "SQLAlchemyClientRepository",
    "SQLAlchemyChargeRepository",
    "SQLAlchemyUnitOfWork",
]
