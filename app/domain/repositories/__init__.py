"""
Repository interfaces for the domain layer.
Define persistence contracts without committing to a storage technology.
"""

from .client_repository import ClientRepository
from .charge_repository import ChargeRepository
from .user_repository import UserRepository, ApiTokenRepository
from .unit_of_work import UnitOfWork

__all__ = [
    "ClientRepository",
    "ChargeRepository",
    "UserRepository",
    "ApiTokenRepository",
    "UnitOfWork",
]
