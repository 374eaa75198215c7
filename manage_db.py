#!/usr/bin/env python3
"""
Database management script for the billing backend.
Handles migrations, table creation, users and integration API tokens.
"""

import sys
from datetime import timedelta

from alembic.config import Config
from alembic import command

from app.config import get_settings
from app.domain.models.user import User, UserRole, ApiToken
from app.domain.services.billing_calendar import SystemClock
from app.infrastructure.auth.api_tokens import generate_api_token
from app.infrastructure.db.database import create_db_engine, create_session_factory
from app.infrastructure.db.models import create_all_tables
from app.infrastructure.repositories.user_repository import (
    SQLAlchemyUserRepository,
    SQLAlchemyApiTokenRepository,
)

ALEMBIC_INI = "app/infrastructure/db/migrations/alembic.ini"


def _alembic_config() -> Config:
    return Config(ALEMBIC_INI)


def _engine():
    settings = get_settings()
    return create_db_engine(settings.sqlalchemy_database_url, echo=settings.database_echo)


def create_migration(message: str = "Auto-generated migration"):
    """Create a new migration."""
    print(f"Creating migration: {message}")
    command.revision(_alembic_config(), message=message, autogenerate=True)


def run_migrations():
    """Run pending migrations."""
    print("Running migrations...")
    command.upgrade(_alembic_config(), "head")


def rollback_migration():
    """Rollback last migration."""
    print("Rolling back migration...")
    command.downgrade(_alembic_config(), "-1")


def reset_database():
    """Reset database - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        alembic_cfg = _alembic_config()
        print("Resetting database...")
        command.downgrade(alembic_cfg, "base")
        command.upgrade(alembic_cfg, "head")
    else:
        print("Database reset cancelled.")


def show_current_revision():
    """Show current database revision."""
    command.current(_alembic_config())


def show_history():
    """Show migration history."""
    command.history(_alembic_config())


def create_tables():
    """Create tables straight from the models, without migrations."""
    engine = _engine()
    create_all_tables(engine)
    engine.dispose()
    print("Tables created.")


def create_user(email: str, name: str, admin: bool = False):
    """Create a tenant."""
    engine = _engine()
    session = create_session_factory(engine)()
    try:
        user = SQLAlchemyUserRepository(session).add(
            User(email=email, name=name, role=UserRole.ADMIN if admin else UserRole.USER)
        )
        session.commit()
        print(f"User created: {user.id} ({user.email}, {user.role.value})")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()


def issue_token(user_id: str, name: str, valid_days: int = 0):
    """
    Issue an integration API token for a user.
    The raw token is printed once; only its hash is stored.
    """
    settings = get_settings()
    engine = _engine()
    session = create_session_factory(engine)()
    try:
        if SQLAlchemyUserRepository(session).get_by_id(user_id) is None:
            print(f"User not found: {user_id}")
            sys.exit(1)

        raw_token, token_hash = generate_api_token()
        expires_at = None
        if valid_days > 0:
            expires_at = SystemClock(settings.timezone).now() + timedelta(days=valid_days)

        SQLAlchemyApiTokenRepository(session).add(
            ApiToken(user_id=user_id, name=name, token_hash=token_hash, expires_at=expires_at)
        )
        session.commit()
        print(f"Token for {user_id} ({name}): {raw_token}")
        if expires_at:
            print(f"Expires at {expires_at:%Y-%m-%d %H:%M}")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        print("  create [msg]                       - Create new migration")
        print("  migrate                            - Run pending migrations")
        print("  rollback                           - Rollback last migration")
        print("  reset                              - Reset database (WARNING: drops all data)")
        print("  current                            - Show current revision")
        print("  history                            - Show migration history")
        print("  create-tables                      - Create tables without migrations")
        print("  create-user <email> <name> [admin] - Create a user")
        print("  issue-token <user_id> <name> [days] - Issue an integration API token")
        return

    command_name = sys.argv[1]
    args = sys.argv[2:]

    if command_name == "create":
        message = " ".join(args) if args else "Auto-generated migration"
        create_migration(message)
    elif command_name == "migrate":
        run_migrations()
    elif command_name == "rollback":
        rollback_migration()
    elif command_name == "reset":
        reset_database()
    elif command_name == "current":
        show_current_revision()
    elif command_name == "history":
        show_history()
    elif command_name == "create-tables":
        create_tables()
    elif command_name == "create-user" and len(args) >= 2:
        create_user(args[0], args[1], admin=len(args) > 2 and args[2] == "admin")
    elif command_name == "issue-token" and len(args) >= 2:
        issue_token(args[0], args[1], int(args[2]) if len(args) > 2 else 0)
    else:
        print(f"Unknown command or missing arguments: {command_name}")
        sys.exit(1)


if __name__ == "__main__":
    main()
