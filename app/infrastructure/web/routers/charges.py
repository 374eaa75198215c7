"""
Charge ("cobrança") router.
Manual charge management, payment and the message callbacks of the reminder automation.
"""

from typing import Annotated, List, Optional
from fastapi import APIRouter, Body, Depends, Query, status

from app.infrastructure.auth import get_current_user_id
from app.application.use_cases.charge_use_cases import (
    CreateChargeUseCase,
    GetChargeUseCase,
    ListChargesUseCase,
    UpdateChargeUseCase,
    PayChargeUseCase,
)
from app.application.use_cases.integration_use_cases import (
    IntegrationUpdateUseCase,
    RecordMessageUseCase,
)
from app.application.dto.charge_dto import (
    CreateChargeRequestDTO,
    UpdateChargeRequestDTO,
    PayChargeRequestDTO,
    IntegrationUpdateRequestDTO,
    RecordMessageRequestDTO,
    ChargeResponseDTO,
)
from app.application.dto.integration_dto import IntegrationUpdateResponseDTO
from app.domain.services.billing_calendar import Clock
from app.domain.services.integration_service import IntegrationGateway
from app.domain.services.payment_service import PaymentService
from app.domain.services.status_sync_service import StatusSynchronizer
from app.infrastructure.repositories.charge_repository import SQLAlchemyChargeRepository
from app.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from app.infrastructure.web.dependencies import (
    get_charge_repository,
    get_client_repository,
    get_clock,
    get_integration_gateway,
    get_payment_service,
    get_status_synchronizer,
)


router = APIRouter()


@router.get("", response_model=List[ChargeResponseDTO])
def list_charges(
    user_id: Annotated[str, Depends(get_current_user_id)],
    repository: Annotated[SQLAlchemyChargeRepository, Depends(get_charge_repository)],
    synchronizer: Annotated[StatusSynchronizer, Depends(get_status_synchronizer)],
    clock: Annotated[Clock, Depends(get_clock)],
    month: Optional[str] = Query(None, description="YYYY-MM; defaults to this month up to today"),
    status: Optional[str] = Query(None, description="PENDENTE, ATRASADO, PAGO, CANCELADO or todos"),
    client_name: Optional[str] = Query(None, alias="clientName", description="Part of the client name")
):
    """List charges, most recent due date first."""
    use_case = ListChargesUseCase(repository, synchronizer, clock).set_current_user(user_id)
    charges = use_case.execute(month, status, client_name)
    return [ChargeResponseDTO.from_domain(charge) for charge in charges]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ChargeResponseDTO)
def create_charge(
    request: CreateChargeRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    repository: Annotated[SQLAlchemyChargeRepository, Depends(get_charge_repository)],
    clients: Annotated[SQLAlchemyClientRepository, Depends(get_client_repository)],
    clock: Annotated[Clock, Depends(get_clock)]
):
    """
    Create a charge for one of your clients.

    - **clientId**: Client the charge belongs to
    - **valor**: Amount owed (greater than zero)
    - **dataVencimento**: Due date; one charge per client per day
    - **status**: Initial status (default PENDENTE)
    - **observacoes**: Optional notes
    """
    charge = CreateChargeUseCase(repository, clients, clock).set_current_user(user_id).execute(request)
    return ChargeResponseDTO.from_domain(charge)


@router.post("/message", response_model=IntegrationUpdateResponseDTO)
def record_message(
    request: RecordMessageRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    gateway: Annotated[IntegrationGateway, Depends(get_integration_gateway)]
):
    """A reminder message was sent for the charge `id`: one attempt plus optional notes."""
    charge = RecordMessageUseCase(gateway).set_current_user(user_id).execute(request)
    return IntegrationUpdateResponseDTO.from_domain(charge)


@router.get("/{charge_id}", response_model=ChargeResponseDTO)
def get_charge(
    charge_id: int,
    user_id: Annotated[str, Depends(get_current_user_id)],
    repository: Annotated[SQLAlchemyChargeRepository, Depends(get_charge_repository)],
    synchronizer: Annotated[StatusSynchronizer, Depends(get_status_synchronizer)]
):
    charge = GetChargeUseCase(repository, synchronizer).set_current_user(user_id).execute(charge_id)
    return ChargeResponseDTO.from_domain(charge)


@router.patch("/{charge_id}", response_model=ChargeResponseDTO)
def update_charge(
    charge_id: int,
    request: UpdateChargeRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    repository: Annotated[SQLAlchemyChargeRepository, Depends(get_charge_repository)],
    clock: Annotated[Clock, Depends(get_clock)]
):
    """
    Update only the fields present in the body.
    Payment goes through the pay endpoint.
    """
    charge = UpdateChargeUseCase(repository, clock).set_current_user(user_id).execute(charge_id, request)
    return ChargeResponseDTO.from_domain(charge)


@router.post("/{charge_id}/pay", response_model=ChargeResponseDTO)
def pay_charge(
    charge_id: int,
    user_id: Annotated[str, Depends(get_current_user_id)],
    payment_service: Annotated[PaymentService, Depends(get_payment_service)],
    clock: Annotated[Clock, Depends(get_clock)],
    request: Annotated[Optional[PayChargeRequestDTO], Body()] = None
):
    """
    Mark a charge as paid.

    - **valor**: Amount received; defaults to the whole debt
    - **dataPagamento**: When it was paid; defaults to now
    """
    charge = PayChargeUseCase(payment_service, clock).set_current_user(user_id).execute(charge_id, request)
    return ChargeResponseDTO.from_domain(charge)


@router.post("/{charge_id}/update-integration", response_model=IntegrationUpdateResponseDTO)
def update_from_integration(
    charge_id: int,
    request: IntegrationUpdateRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    gateway: Annotated[IntegrationGateway, Depends(get_integration_gateway)]
):
    """
    Record reminder attempts and/or notes.

    - **messageAttemptsDelta**: Attempts to add (1-3); the total never exceeds 3
    - **observacoes**: Notes to write
    - **appendObservacoes**: Append to the existing notes instead of replacing them
    """
    charge = IntegrationUpdateUseCase(gateway).set_current_user(user_id).execute(charge_id, request)
    return IntegrationUpdateResponseDTO.from_domain(charge)
