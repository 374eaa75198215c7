"""
Integration router.
Feed and attempt counter used by the reminder automation, authenticated with an API token.
"""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Query

from app.infrastructure.auth import get_current_user_id
from app.application.use_cases.integration_use_cases import (
    ListActionableChargesUseCase,
    RegisterAttemptUseCase,
)
from app.application.dto.integration_dto import ActionablePageResponseDTO, AttemptResponseDTO
from app.domain.services.integration_service import IntegrationGateway
from app.infrastructure.web.dependencies import get_integration_gateway


router = APIRouter()


@router.get("/cobrancas", response_model=ActionablePageResponseDTO)
def list_actionable_charges(
    user_id: Annotated[str, Depends(get_current_user_id)],
    gateway: Annotated[IntegrationGateway, Depends(get_integration_gateway)],
    cursor: Optional[str] = Query(None, description="ID of the last charge of the previous page"),
    limit: Optional[int] = Query(None, description="Page size, at most 50; non-positive values fall back to 50")
):
    """
    Charges to remind: pending ones due within two days and overdue ones,
    of active clients, with fewer than three attempts.
    """
    page = ListActionableChargesUseCase(gateway).set_current_user(user_id).execute(cursor, limit)
    return ActionablePageResponseDTO.from_page(page)


@router.post("/cobrancas/{charge_id}/attempt", response_model=AttemptResponseDTO)
def register_attempt(
    charge_id: int,
    user_id: Annotated[str, Depends(get_current_user_id)],
    gateway: Annotated[IntegrationGateway, Depends(get_integration_gateway)]
):
    """Add one reminder attempt to a charge."""
    charge = RegisterAttemptUseCase(gateway).set_current_user(user_id).execute(charge_id)
    return AttemptResponseDTO.from_domain(charge)
