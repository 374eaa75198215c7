"""
Database infrastructure for the billing service.
"""

from .database import Base, create_db_engine, create_session_factory, get_db, get_session_factory
from .models import UserModel, ApiTokenModel, ClientModel, ChargeModel, create_all_tables

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "get_db",
    "get_session_factory",
    "UserModel",
    "ApiTokenModel",
    "ClientModel",
    "ChargeModel",
    "create_all_tables",
]
