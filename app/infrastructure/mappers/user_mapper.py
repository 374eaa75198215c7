"""
User mapper for converting between domain entities and database models.
"""

from app.domain.models.user import User, UserRole, ApiToken
from app.infrastructure.db.models import UserModel, ApiTokenModel


class UserMapper:
    """Maps users and their API tokens to domain entities."""

    def model_to_domain(self, model: UserModel) -> User:
        """Convert UserModel to User domain entity."""
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=UserRole(model.role),
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def token_to_domain(self, model: ApiTokenModel) -> ApiToken:
        """Convert ApiTokenModel to ApiToken domain entity."""
        return ApiToken(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            token_hash=model.token_hash,
            expires_at=model.expires_at,
            last_used_at=model.last_used_at,
            created_at=model.created_at,
        )

    def domain_to_model(self, user: User) -> UserModel:
        """Convert User domain entity to UserModel."""
        return UserModel(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value if isinstance(user.role, UserRole) else user.role,
            is_active=user.is_active,
        )

    def token_to_model(self, token: ApiToken) -> ApiTokenModel:
        """Convert ApiToken domain entity to ApiTokenModel."""
        return ApiTokenModel(
            user_id=token.user_id,
            name=token.name,
            token_hash=token.token_hash,
            expires_at=token.expires_at,
        )
