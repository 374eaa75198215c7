"""
Authentication infrastructure module.
Handles session tokens, integration API tokens and tenant resolution.
"""

from .jwt_handler import JWTHandler
from .api_tokens import hash_api_token, generate_api_token, is_api_token
from .dependencies import (
    TenantResolver,
    resolve_tenant_from_request,
    get_current_user,
    get_current_user_id,
    get_current_admin_id,
)

__all__ = [
    "JWTHandler",
    "hash_api_token",
    "generate_api_token",
    "is_api_token",
    "TenantResolver",
    "resolve_tenant_from_request",
    "get_current_user",
    "get_current_user_id",
    "get_current_admin_id",
]
