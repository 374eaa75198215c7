"""
Authentication dependencies for FastAPI.
Resolves the tenant of a request from a session token or an integration API token.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import Settings
from app.domain.models.base import UnauthorizedError, ForbiddenError
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository, ApiTokenRepository
from app.domain.services.billing_calendar import Clock
from app.infrastructure.auth.api_tokens import hash_api_token, is_api_token
from app.infrastructure.auth.jwt_handler import JWTHandler, INVALID_TOKEN
from app.infrastructure.db.database import get_db
from app.infrastructure.repositories.user_repository import (
    SQLAlchemyUserRepository,
    SQLAlchemyApiTokenRepository,
)
from app.infrastructure.web.dependencies import get_app_settings, get_clock


logger = logging.getLogger(__name__)


def _bearer_token(request: Request) -> Optional[str]:
    authorization = request.headers.get("authorization")
    if not authorization:
        return None

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError(INVALID_TOKEN)
    return token.strip()


class TenantResolver:
    """
    Finds the user a request acts for.

    A session token (cookie or bearer JWT) is tried first, then an
    integration API token (bearer "ckt_..."). Session users and token owners
    must exist and be active.
    """

    def __init__(
        self,
        jwt_handler: JWTHandler,
        user_repository: UserRepository,
        token_repository: ApiTokenRepository,
        clock: Clock,
        cookie_name: str = "session_token"
    ):
        self.jwt_handler = jwt_handler
        self.user_repository = user_repository
        self.token_repository = token_repository
        self.clock = clock
        self.cookie_name = cookie_name

    def resolve(self, request: Request) -> User:
        bearer = _bearer_token(request)
        cookie = request.cookies.get(self.cookie_name)

        if bearer and is_api_token(bearer):
            return self._from_api_token(bearer)

        token = bearer or cookie
        if not token:
            raise UnauthorizedError()

        return self._from_session(token)

    def _from_session(self, token: str) -> User:
        user_id = self.jwt_handler.get_user_id(token)
        user = self.user_repository.get_by_id(user_id)
        if not user or not user.is_active:
            raise UnauthorizedError(INVALID_TOKEN)
        return user

    def _from_api_token(self, raw_token: str) -> User:
        now = self.clock.now()
        token = self.token_repository.find_usable(hash_api_token(raw_token), now)
        if not token:
            logger.warning("Rejected API token: unknown, expired or owned by an inactive user")
            raise UnauthorizedError(INVALID_TOKEN)

        self.token_repository.touch(token.id, now)

        user = self.user_repository.get_by_id(token.user_id)
        if not user:
            raise UnauthorizedError(INVALID_TOKEN)
        return user


def resolve_tenant_from_request(request: Request, session: Session, settings: Settings, clock: Clock) -> User:
    resolver = TenantResolver(
        JWTHandler(settings),
        SQLAlchemyUserRepository(session),
        SQLAlchemyApiTokenRepository(session),
        clock,
        settings.session_cookie_name,
    )
    return resolver.resolve(request)


def get_current_user(
    request: Request,
    session: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    clock: Annotated[Clock, Depends(get_clock)]
) -> User:
    """
    FastAPI dependency to get the authenticated user.

    Raises:
        UnauthorizedError: No credentials, or credentials that do not resolve to an active user
    """
    return resolve_tenant_from_request(request, session, settings, clock)


def get_current_user_id(user: Annotated[User, Depends(get_current_user)]) -> str:
    """FastAPI dependency to get current tenant ID."""
    return user.id


def get_current_admin_id(user: Annotated[User, Depends(get_current_user)]) -> str:
    """FastAPI dependency that only lets administrators through."""
    if not user.is_admin:
        raise ForbiddenError()
    return user.id
