"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .user_mapper import UserMapper
from .client_mapper import ClientMapper
from .charge_mapper import ChargeMapper

__all__ = [
    "UserMapper",
    "ClientMapper",
    "ChargeMapper",
]
