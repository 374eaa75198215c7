"""
Bill generation use cases.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from app.application.use_cases.base_use_case import BaseUseCase
from app.application.dto.billing_dto import GenerateBillsRequestDTO
from app.domain.models.base import EntityNotFoundError
from app.domain.repositories.user_repository import UserRepository
from app.domain.services.billing_calendar import Clock, next_month
from app.domain.services.billing_service import BillGenerator, GenerationResult


logger = logging.getLogger(__name__)


@dataclass
class GenerationRun:
    month: int
    year: int
    user_id: Optional[str]
    result: GenerationResult

    @property
    def message(self) -> str:
        return (
            f"Geração concluída para {self.month:02d}/{self.year}: "
            f"{self.result.created} criadas, {self.result.duplicates} duplicadas, "
            f"{self.result.errors} erros"
        )


class GenerateMonthlyBillsUseCase(BaseUseCase[GenerationRun]):
    """
    Generate charges for a month, for every tenant or a single one.
    Month and year default to the month following today.
    """

    def __init__(self, generator: BillGenerator, user_repository: UserRepository, clock: Clock):
        super().__init__()
        self.generator = generator
        self.user_repository = user_repository
        self.clock = clock

    def _execute_business_logic(self, request: GenerateBillsRequestDTO) -> GenerationRun:
        default_month, default_year = next_month(self.clock.today())
        month = request.month or default_month
        year = request.year or default_year

        if request.user_id and not self.user_repository.get_by_id(request.user_id):
            raise EntityNotFoundError("Usuário não encontrado", request.user_id)

        logger.info(f"Manual bill generation requested for {month:02d}/{year}")
        result = self.generator.generate(month, year, request.user_id)
        return GenerationRun(month=month, year=year, user_id=request.user_id, result=result)
