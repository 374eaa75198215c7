"""
Client management router.
Handles CRUD operations for client resources.
"""

from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, status, Query

from app.infrastructure.auth import get_current_user_id
from app.application.use_cases.client_use_cases import (
    CreateClientUseCase,
    UpdateClientUseCase,
    GetClientUseCase,
    ListClientsUseCase,
    SetClientActiveUseCase,
)
from app.application.dto.client_dto import (
    CreateClientRequestDTO,
    UpdateClientRequestDTO,
    ToggleClientStatusRequestDTO,
    ToggleClientStatusResponseDTO,
    ClientResponseDTO,
    ClientDetailResponseDTO,
)
from app.domain.services.status_sync_service import StatusSynchronizer
from app.infrastructure.repositories.charge_repository import SQLAlchemyChargeRepository
from app.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from app.infrastructure.web.dependencies import (
    get_charge_repository,
    get_client_repository,
    get_status_synchronizer,
)


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ClientResponseDTO)
def create_client(
    request: CreateClientRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    repository: Annotated[SQLAlchemyClientRepository, Depends(get_client_repository)]
):
    """
    Create a new client.

    - **nome**: Client name (at least 3 characters)
    - **fone**: Phone number, stored as digits only; unique per user
    - **vencimento**: Day of the month the client is billed (1-31)
    - **valor**: Monthly amount
    - **observacoes**: Optional notes (up to 500 characters)
    - **ativo**: Whether the client is billed automatically (default true)
    """
    client = CreateClientUseCase(repository).set_current_user(user_id).execute(request)
    return ClientResponseDTO.from_domain(client)


@router.get("", response_model=List[ClientResponseDTO])
def list_clients(
    user_id: Annotated[str, Depends(get_current_user_id)],
    repository: Annotated[SQLAlchemyClientRepository, Depends(get_client_repository)],
    search: Optional[str] = Query(None, description="Search clients by name"),
    status: Optional[str] = Query("todos", description="ativo, inativo or todos")
):
    """List clients ordered by name."""
    clients = ListClientsUseCase(repository).set_current_user(user_id).execute(search, status)
    return [ClientResponseDTO.from_domain(client) for client in clients]


@router.get("/{client_id}", response_model=ClientDetailResponseDTO)
def get_client(
    client_id: int,
    user_id: Annotated[str, Depends(get_current_user_id)],
    repository: Annotated[SQLAlchemyClientRepository, Depends(get_client_repository)],
    charges: Annotated[SQLAlchemyChargeRepository, Depends(get_charge_repository)],
    synchronizer: Annotated[StatusSynchronizer, Depends(get_status_synchronizer)]
):
    """Get a client with its five most recent charges."""
    use_case = GetClientUseCase(repository, charges, synchronizer).set_current_user(user_id)
    client, recent = use_case.execute(client_id)

    return ClientDetailResponseDTO.from_domain_with_charges(client, recent)


@router.patch("/{client_id}", response_model=ClientResponseDTO)
def update_client(
    client_id: int,
    request: UpdateClientRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    repository: Annotated[SQLAlchemyClientRepository, Depends(get_client_repository)]
):
    """Update only the fields present in the body."""
    client = UpdateClientUseCase(repository).set_current_user(user_id).execute(client_id, request)
    return ClientResponseDTO.from_domain(client)


@router.patch("/{client_id}/toggle-status", response_model=ToggleClientStatusResponseDTO)
def toggle_client_status(
    client_id: int,
    request: ToggleClientStatusRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    repository: Annotated[SQLAlchemyClientRepository, Depends(get_client_repository)]
):
    """Activate or deactivate a client."""
    client = SetClientActiveUseCase(repository).set_current_user(user_id).execute(client_id, request.active)
    message = "Cliente ativado com sucesso" if client.active else "Cliente desativado com sucesso"
    return ToggleClientStatusResponseDTO(id=client.id, success=True, message=message)
