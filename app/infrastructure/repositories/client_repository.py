"""
Client repository implementation using SQLAlchemy.
"""

from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func

from app.domain.models.client import Client
from app.domain.repositories.client_repository import ClientRepository as ClientRepositoryInterface
from app.domain.models.base import EntityNotFoundError
from app.infrastructure.db.models import ClientModel, ChargeModel
from app.infrastructure.mappers.client_mapper import ClientMapper


class SQLAlchemyClientRepository(ClientRepositoryInterface):
    """SQLAlchemy implementation of client repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ClientMapper()
        self.model = ClientModel

    def save(self, client: Client) -> Client:
        """Save a client entity."""
        if client.is_new:
            model = self.mapper.domain_to_model(client)
            self.session.add(model)
        else:
            model = self.session.query(ClientModel).filter_by(
                id=client.id,
                user_id=client.user_id
            ).first()
            if not model:
                raise EntityNotFoundError("Cliente não encontrado", client.id)
            self.mapper.update_model(model, client)

        self.session.flush()
        return self.mapper.model_to_domain(model)

    def get_for_user(self, user_id: str, client_id: int) -> Optional[Client]:
        """Get client by ID within the user's clients."""
        model = self.session.query(ClientModel).filter_by(
            id=client_id,
            user_id=user_id
        ).first()

        if not model:
            return None

        return self.mapper.model_to_domain(model)

    def find_by_phone(self, user_id: str, phone: str) -> Optional[Client]:
        """Get client by user and normalized phone."""
        model = self.session.query(ClientModel).filter_by(
            user_id=user_id,
            phone=phone
        ).first()

        if not model:
            return None

        return self.mapper.model_to_domain(model)

    def list_for_user(
        self,
        user_id: str,
        search: Optional[str] = None,
        active: Optional[bool] = None
    ) -> List[Client]:
        """List clients ordered by name, optionally filtered by name and status."""
        query = self.session.query(ClientModel).filter(ClientModel.user_id == user_id)

        if search:
            query = query.filter(ClientModel.name.ilike(f'%{search}%'))
        if active is not None:
            query = query.filter(ClientModel.active == active)

        models = query.order_by(ClientModel.name.asc()).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def find_active(self, user_id: Optional[str] = None) -> List[Client]:
        """Get active clients, of one user or of every user."""
        query = self.session.query(ClientModel).filter(ClientModel.active.is_(True))
        if user_id:
            query = query.filter(ClientModel.user_id == user_id)

        models = query.order_by(ClientModel.id.asc()).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def deactivate(self, client_ids: Iterable[int]) -> int:
        """Bulk set active=False."""
        ids = list(client_ids)
        if not ids:
            return 0

        return self.session.query(ClientModel).filter(
            ClientModel.id.in_(ids),
            ClientModel.active.is_(True)
        ).update(
            {ClientModel.active: False, ClientModel.updated_at: func.now()},
            synchronize_session=False
        )

    def count_for_user(self, user_id: str, active: Optional[bool] = None) -> int:
        """Get client count for user."""
        query = self.session.query(func.count(ClientModel.id)).filter(ClientModel.user_id == user_id)
        if active is not None:
            query = query.filter(ClientModel.active == active)
        return query.scalar() or 0

    def count_without_charges(self, user_id: str) -> int:
        """Count the user's clients that never had a charge."""
        has_charges = self.session.query(ChargeModel.id).filter(
            ChargeModel.client_id == ClientModel.id
        ).exists()

        return self.session.query(func.count(ClientModel.id)).filter(
            ClientModel.user_id == user_id,
            ~has_charges
        ).scalar() or 0
