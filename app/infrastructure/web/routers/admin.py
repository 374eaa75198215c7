"""
Administration router.
"""

from typing import Annotated, Optional
from fastapi import APIRouter, Body, Depends

from app.infrastructure.auth import get_current_admin_id
from app.application.use_cases.billing_use_cases import GenerateMonthlyBillsUseCase
from app.application.dto.billing_dto import (
    GenerateBillsRequestDTO,
    GenerateBillsResponseDTO,
    GenerationResultDTO,
    PeriodDTO,
)
from app.domain.services.billing_calendar import Clock
from app.domain.services.billing_service import BillGenerator
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from app.infrastructure.web.dependencies import get_bill_generator, get_clock, get_user_repository


router = APIRouter()


@router.post("/generate-bills", response_model=GenerateBillsResponseDTO)
def generate_bills(
    admin_id: Annotated[str, Depends(get_current_admin_id)],
    generator: Annotated[BillGenerator, Depends(get_bill_generator)],
    users: Annotated[SQLAlchemyUserRepository, Depends(get_user_repository)],
    clock: Annotated[Clock, Depends(get_clock)],
    request: Annotated[Optional[GenerateBillsRequestDTO], Body()] = None
):
    """
    Run the monthly generation now.

    - **month** / **year**: Target month; defaults to next month
    - **userId**: Restrict the run to one user; defaults to every user
    """
    run = GenerateMonthlyBillsUseCase(generator, users, clock).execute(request or GenerateBillsRequestDTO())
    return GenerateBillsResponseDTO(
        success=True,
        message=run.message,
        result=GenerationResultDTO.from_domain(run.result),
        period=PeriodDTO(month=run.month, year=run.year),
    )
