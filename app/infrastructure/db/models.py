"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

import uuid

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean,
    Numeric, Date, ForeignKey, Index, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def _new_uuid() -> str:
    return str(uuid.uuid4())


class UserModel(Base):
    """Tenant table"""
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=_new_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    role = Column(String(20), nullable=False, default="USER")
    is_active = Column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    clients = relationship("ClientModel", back_populates="user")
    api_tokens = relationship("ApiTokenModel", back_populates="user")


class ApiTokenModel(Base):
    """Integration API tokens (hashed)"""
    __tablename__ = 'api_tokens'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    name = Column(String(100), nullable=False)
    token_hash = Column(String(64), nullable=False, unique=True)
    expires_at = Column(DateTime)
    last_used_at = Column(DateTime)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("UserModel", back_populates="api_tokens")

    __table_args__ = (
        Index('idx_api_tokens_user', 'user_id'),
    )


class ClientModel(Base):
    """Client table"""
    __tablename__ = 'clients'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    name = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=False)
    billing_day = Column(Integer, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)
    notes = Column(Text)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("UserModel", back_populates="clients")
    charges = relationship("ChargeModel", back_populates="client")

    __table_args__ = (
        UniqueConstraint('user_id', 'phone', name='uq_clients_user_phone'),
        CheckConstraint('billing_day BETWEEN 1 AND 31', name='ck_clients_billing_day'),
        CheckConstraint('amount >= 0', name='ck_clients_amount'),
        Index('idx_clients_user_active', 'user_id', 'active'),
    )


class ChargeModel(Base):
    """Charge ("cobrança") table"""
    __tablename__ = 'charges'

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey('clients.id', ondelete='CASCADE'), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    debt_amount = Column(Numeric(12, 2), nullable=False)
    paid_amount = Column(Numeric(12, 2))
    due_date = Column(Date, nullable=False)
    payment_date = Column(DateTime)
    status = Column(String(20), nullable=False, default="PENDENTE")
    message_attempts = Column(Integer, nullable=False, default=0)
    notes = Column(Text)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    client = relationship("ClientModel", back_populates="charges")

    __table_args__ = (
        # One charge per client per calendar day; due_date is a DATE column
        UniqueConstraint('client_id', 'due_date', name='uq_charges_client_due_date'),
        CheckConstraint('message_attempts BETWEEN 0 AND 3', name='ck_charges_message_attempts'),
        Index('idx_charges_status_due', 'status', 'due_date'),
        Index('idx_charges_client_status', 'client_id', 'status'),
    )


def create_all_tables(engine) -> None:
    """Create every table (development and tests)."""
    Base.metadata.create_all(bind=engine)
