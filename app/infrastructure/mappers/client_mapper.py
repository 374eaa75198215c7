"""
Client mapper for converting between domain entities and database models.
"""

from decimal import Decimal

from app.domain.models.client import Client
from app.infrastructure.db.models import ClientModel


class ClientMapper:
    """Maps between Client domain entity and ClientModel database model."""

    def domain_to_model(self, client: Client) -> ClientModel:
        """Convert Client domain entity to ClientModel."""
        return ClientModel(
            id=client.id,
            user_id=client.user_id,
            name=client.name,
            phone=client.phone,
            billing_day=client.billing_day,
            amount=client.amount,
            active=client.active,
            notes=client.notes,
        )

    def update_model(self, model: ClientModel, client: Client) -> ClientModel:
        """Copy mutable client fields onto an existing row."""
        model.name = client.name
        model.phone = client.phone
        model.billing_day = client.billing_day
        model.amount = client.amount
        model.active = client.active
        model.notes = client.notes
        return model

    def model_to_domain(self, model: ClientModel) -> Client:
        """Convert ClientModel to Client domain entity."""
        return Client(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            phone=model.phone,
            billing_day=model.billing_day,
            amount=Decimal(model.amount),
            active=model.active,
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
