"""
Unit tests for session and API token helpers.
"""

import pytest

from app.config import Settings
from app.domain.models.base import UnauthorizedError
from app.infrastructure.auth.api_tokens import generate_api_token, hash_api_token, is_api_token
from app.infrastructure.auth.jwt_handler import JWTHandler


@pytest.fixture
def handler():
    return JWTHandler(Settings(
        database_url="postgresql://localhost/db",
        auth_secret="secret",
        _env_file=None,
    ))


class TestJWTHandler:

    def test_round_trip(self, handler):
        """Test an issued token resolves to its user, with or without the Bearer prefix."""
        token = handler.create_session_token("user-1")

        assert handler.get_user_id(token) == "user-1"
        assert handler.get_user_id(f"Bearer {token}") == "user-1"

    def test_expired(self, handler):
        token = handler.create_session_token("user-1", expires_minutes=-1)

        with pytest.raises(UnauthorizedError, match="Token inválido"):
            handler.verify_token(token)

    def test_wrong_secret(self, handler):
        other = JWTHandler(Settings(database_url="postgresql://localhost/db", auth_secret="other", _env_file=None))

        with pytest.raises(UnauthorizedError):
            handler.verify_token(other.create_session_token("user-1"))

    def test_garbage(self, handler):
        with pytest.raises(UnauthorizedError):
            handler.verify_token("not-a-jwt")


class TestApiTokens:

    def test_generate(self):
        """Test tokens carry the prefix and only the hash is returned for storage."""
        raw_token, token_hash = generate_api_token()

        assert is_api_token(raw_token)
        assert token_hash == hash_api_token(raw_token)
        assert len(token_hash) == 64
        assert raw_token not in token_hash

    def test_tokens_are_unique(self):
        assert generate_api_token()[0] != generate_api_token()[0]
