"""
Database configuration and session management.
The engine and session factory are built once by the entry point and shared through app.state.
"""

from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from fastapi import Request


# Create declarative base
Base = declarative_base()


def create_db_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create the process-wide SQLAlchemy engine (connection pool)."""
    return create_engine(
        database_url,
        pool_pre_ping=True,
        echo=echo,
        **kwargs
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory bound to the given engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def get_session_factory(request: Request) -> sessionmaker:
    """Dependency returning the session factory created at startup."""
    return request.app.state.session_factory


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    Commits when the request succeeds and rolls back on any error.
    """
    db = get_session_factory(request)()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
