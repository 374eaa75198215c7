"""
JWT token handler for session authentication.
Validates session tokens signed with AUTH_SECRET and extracts the user.
"""

from typing import Dict, Any
from datetime import datetime, timedelta
from jose import JWTError, jwt as jose_jwt

from app.config import Settings
from app.domain.models.base import UnauthorizedError


INVALID_TOKEN = "Token inválido"


class JWTHandler:
    """Handles session token validation and issuing."""

    def __init__(self, settings: Settings):
        self.jwt_secret = settings.auth_secret
        self.jwt_algorithm = settings.jwt_algorithm

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a session token.

        Args:
            token: JWT token string, with or without the "Bearer " prefix

        Returns:
            Dict containing token payload

        Raises:
            UnauthorizedError: If token is invalid or expired
        """
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            payload = jose_jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_aud": False}
            )
        except JWTError:
            raise UnauthorizedError(INVALID_TOKEN)

        if not payload.get('sub'):
            raise UnauthorizedError(INVALID_TOKEN)

        return payload

    def get_user_id(self, token: str) -> str:
        """Extract user ID (sub claim) from a session token."""
        return self.verify_token(token)['sub']

    def create_session_token(self, user_id: str, expires_minutes: int = 60 * 24) -> str:
        """
        Issue a session token for a user.

        Args:
            user_id: User ID to include in token
            expires_minutes: Token lifetime in minutes (default: one day)

        Returns:
            JWT token string
        """
        now = datetime.utcnow()
        payload = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=expires_minutes)).timestamp()),
        }
        return jose_jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)
