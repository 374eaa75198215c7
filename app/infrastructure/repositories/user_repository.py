"""
User and API token repository implementations using SQLAlchemy.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.models.user import User, ApiToken
from app.domain.repositories.user_repository import (
    UserRepository as UserRepositoryInterface,
    ApiTokenRepository as ApiTokenRepositoryInterface,
)
from app.infrastructure.db.models import UserModel, ApiTokenModel
from app.infrastructure.mappers.user_mapper import UserMapper


class SQLAlchemyUserRepository(UserRepositoryInterface):
    """SQLAlchemy implementation of user repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = UserMapper()

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        model = self.session.query(UserModel).filter_by(id=user_id).first()

        if not model:
            return None

        return self.mapper.model_to_domain(model)

    def add(self, user: User) -> User:
        """Create a user."""
        model = self.mapper.domain_to_model(user)
        self.session.add(model)
        self.session.flush()
        self.session.refresh(model)
        return self.mapper.model_to_domain(model)


class SQLAlchemyApiTokenRepository(ApiTokenRepositoryInterface):
    """SQLAlchemy implementation of API token lookups."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = UserMapper()

    def add(self, token: ApiToken) -> ApiToken:
        """Store a token."""
        model = self.mapper.token_to_model(token)
        self.session.add(model)
        self.session.flush()
        self.session.refresh(model)
        return self.mapper.token_to_domain(model)

    def find_usable(self, token_hash: str, now: datetime) -> Optional[ApiToken]:
        """Token by hash, unexpired, owned by an active user."""
        model = self.session.query(ApiTokenModel).join(ApiTokenModel.user).filter(
            ApiTokenModel.token_hash == token_hash,
            or_(ApiTokenModel.expires_at.is_(None), ApiTokenModel.expires_at > now),
            UserModel.is_active.is_(True)
        ).first()

        if not model:
            return None

        return self.mapper.token_to_domain(model)

    def touch(self, token_id: int, used_at: datetime) -> None:
        """Update last_used_at."""
        self.session.query(ApiTokenModel).filter_by(id=token_id).update(
            {ApiTokenModel.last_used_at: used_at},
            synchronize_session=False
        )
