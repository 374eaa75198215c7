"""
Client use cases for the application layer.
Implements business logic for client operations.
"""

import logging
from typing import List, Optional, Tuple

from app.application.use_cases.base_use_case import TenantUseCase
from app.application.dto.client_dto import CreateClientRequestDTO, UpdateClientRequestDTO
from app.domain.models.base import DuplicateEntityError, EntityNotFoundError, ValidationError
from app.domain.models.charge import Charge
from app.domain.models.client import Client, normalize_phone, clean_notes
from app.domain.repositories.charge_repository import ChargeRepository
from app.domain.repositories.client_repository import ClientRepository
from app.domain.services.status_sync_service import StatusSynchronizer


logger = logging.getLogger(__name__)

CLIENT_NOT_FOUND = "Cliente não encontrado"
PHONE_TAKEN = "Telefone já cadastrado para outro cliente"
RECENT_CHARGES_LIMIT = 5

STATUS_FILTERS = {"ativo": True, "inativo": False, "todos": None}


class CreateClientUseCase(TenantUseCase[Client]):
    """Use case for creating a new client."""

    def __init__(self, client_repository: ClientRepository):
        super().__init__()
        self.client_repository = client_repository

    def _execute_business_logic(self, request: CreateClientRequestDTO) -> Client:
        phone = normalize_phone(request.phone)
        if self.client_repository.find_by_phone(self.current_user_id, phone):
            raise DuplicateEntityError(PHONE_TAKEN)

        client = Client.create(
            user_id=self.current_user_id,
            name=request.name,
            phone=phone,
            billing_day=request.billing_day,
            amount=request.amount,
            active=request.active,
            notes=request.notes,
        )

        saved = self.client_repository.save(client)
        logger.info(f"Client {saved.id} created for user {self.current_user_id}")
        return saved


class UpdateClientUseCase(TenantUseCase[Client]):
    """Use case for a partial client update; only the fields sent are changed."""

    def __init__(self, client_repository: ClientRepository):
        super().__init__()
        self.client_repository = client_repository

    def _execute_business_logic(self, client_id: int, request: UpdateClientRequestDTO) -> Client:
        client = self.client_repository.get_for_user(self.current_user_id, client_id)
        if not client:
            raise EntityNotFoundError(CLIENT_NOT_FOUND, client_id)

        fields = request.model_fields_set

        if "name" in fields and request.name is not None:
            client.name = request.name.strip()

        if "phone" in fields and request.phone is not None:
            phone = normalize_phone(request.phone)
            existing = self.client_repository.find_by_phone(self.current_user_id, phone)
            if existing and existing.id != client.id:
                raise DuplicateEntityError(PHONE_TAKEN)
            client.phone = phone

        if "billing_day" in fields and request.billing_day is not None:
            client.billing_day = request.billing_day

        if "amount" in fields and request.amount is not None:
            client.amount = request.amount

        if "notes" in fields:
            client.notes = clean_notes(request.notes)

        if "active" in fields and request.active is not None:
            client.active = request.active

        client.validate()
        client.mark_as_updated()
        return self.client_repository.save(client)


class SetClientActiveUseCase(TenantUseCase[Client]):
    """Activate or deactivate a client."""

    def __init__(self, client_repository: ClientRepository):
        super().__init__()
        self.client_repository = client_repository

    def _execute_business_logic(self, client_id: int, active: bool) -> Client:
        client = self.client_repository.get_for_user(self.current_user_id, client_id)
        if not client:
            raise EntityNotFoundError(CLIENT_NOT_FOUND, client_id)

        if active:
            client.activate()
        else:
            client.deactivate()

        return self.client_repository.save(client)


class GetClientUseCase(TenantUseCase[Tuple[Client, List[Charge]]]):
    """Client detail with its most recent charges."""

    def __init__(
        self,
        client_repository: ClientRepository,
        charge_repository: ChargeRepository,
        synchronizer: StatusSynchronizer
    ):
        super().__init__()
        self.client_repository = client_repository
        self.charge_repository = charge_repository
        self.synchronizer = synchronizer

    def _execute_business_logic(self, client_id: int) -> Tuple[Client, List[Charge]]:
        client = self.client_repository.get_for_user(self.current_user_id, client_id)
        if not client:
            raise EntityNotFoundError(CLIENT_NOT_FOUND, client_id)

        self.synchronizer.sync(self.current_user_id)
        charges = self.charge_repository.list_recent_for_client(client.id, RECENT_CHARGES_LIMIT)
        return client, charges


class ListClientsUseCase(TenantUseCase[List[Client]]):
    """List clients by name with optional search and status filter."""

    def __init__(self, client_repository: ClientRepository):
        super().__init__()
        self.client_repository = client_repository

    def _execute_business_logic(self, search: Optional[str] = None, status: Optional[str] = None) -> List[Client]:
        status = (status or "todos").lower()
        if status not in STATUS_FILTERS:
            raise ValidationError("Status inválido. Use ativo, inativo ou todos", "status")

        search = search.strip() if search else None
        return self.client_repository.list_for_user(
            self.current_user_id,
            search=search or None,
            active=STATUS_FILTERS[status],
        )
