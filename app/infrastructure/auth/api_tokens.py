"""
Integration API tokens.
Only the SHA-256 hex digest of a token is stored; the raw value is shown once when issued.
"""

import hashlib
import secrets
from typing import Tuple

from app.domain.models.user import API_TOKEN_PREFIX


def hash_api_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def is_api_token(raw_token: str) -> bool:
    return raw_token.startswith(API_TOKEN_PREFIX)


def generate_api_token() -> Tuple[str, str]:
    """
    Create a new token.

    Returns:
        (raw token to hand to the integration, hash to persist)
    """
    raw_token = f"{API_TOKEN_PREFIX}{secrets.token_urlsafe(32)}"
    return raw_token, hash_api_token(raw_token)
