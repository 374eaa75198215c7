"""Billing service for monthly charge generation.
Builds charges from the clients' billing configuration and runs the monthly batch.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from app.domain.models.base import DuplicateEntityError, ValidationError
from app.domain.models.charge import Charge, ChargeStatus
from app.domain.models.client import Client
from app.domain.repositories.unit_of_work import UnitOfWork
from app.domain.services.billing_calendar import resolve_due_date


logger = logging.getLogger(__name__)


@dataclass
class GenerationError:
    client_id: int
    client_name: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "client_id": self.client_id,
            "client_name": self.client_name,
            "error": self.error,
        }


@dataclass
class GenerationResult:
    """Counters of one generation run; per-client failures are reported as data."""

    total: int = 0
    created: int = 0
    duplicates: int = 0
    errors: int = 0
    error_details: List[GenerationError] = field(default_factory=list)

    def add_error(self, client: Client, message: str) -> None:
        self.errors += 1
        self.error_details.append(GenerationError(client.id, client.name, message))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "created": self.created,
            "duplicates": self.duplicates,
            "errors": self.errors,
            "error_details": [detail.to_dict() for detail in self.error_details],
        }


class BillingService:
    """
    Domain service for the rules of automatic charges.
    """

    @staticmethod
    def monthly_note(month: int, year: int) -> str:
        return f"Cobrança gerada automaticamente para {month:02d}/{year}"

    def build_monthly_charge(self, client: Client, month: int, year: int) -> Charge:
        """
        Build the PENDENTE charge of a client for the given month.
        Raises ValidationError when the client has no positive amount.
        """
        if not client.is_billable:
            raise ValidationError("Valor inválido ou zero", "amount")

        return Charge.create(
            client_id=client.id,
            amount=client.amount,
            due_date=resolve_due_date(client.billing_day, month, year),
            status=ChargeStatus.PENDENTE,
            notes=self.monthly_note(month, year),
        )


class BillGenerator:
    """
    Generate one charge per active client for a target month.

    Each client is handled in its own transaction, so one failure never aborts
    the batch. The existence check skips known duplicates; the unique
    (client, due date) constraint catches a concurrent run that slipped past it.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        billing_service: Optional[BillingService] = None
    ):
        self.uow_factory = uow_factory
        self.billing_service = billing_service or BillingService()

    def generate(self, month: int, year: int, user_id: Optional[str] = None) -> GenerationResult:
        scope = f"user {user_id}" if user_id else "all users"
        logger.info(f"Generating bills for {month:02d}/{year} ({scope})")

        try:
            with self.uow_factory() as uow:
                clients = uow.clients.find_active(user_id)
        except Exception:
            logger.exception(f"Could not load active clients for {month:02d}/{year}")
            raise

        result = GenerationResult(total=len(clients))
        logger.info(f"{len(clients)} active clients found")

        for client in clients:
            self._generate_for_client(client, month, year, result)

        logger.info(
            f"Bill generation for {month:02d}/{year} finished: total={result.total} "
            f"created={result.created} duplicates={result.duplicates} errors={result.errors}"
        )
        return result

    def _generate_for_client(self, client: Client, month: int, year: int, result: GenerationResult) -> None:
        due_date = resolve_due_date(client.billing_day, month, year)
        try:
            with self.uow_factory() as uow:
                if uow.charges.exists_for_client_on(client.id, due_date):
                    result.duplicates += 1
                    logger.debug(f"Client {client.id} already has a charge on {due_date}")
                    return

                charge = self.billing_service.build_monthly_charge(client, month, year)
                uow.charges.add(charge)
                uow.commit()

            result.created += 1
            logger.debug(f"Charge created for client {client.id} due {due_date}")

        except DuplicateEntityError:
            result.duplicates += 1
            logger.info(f"Concurrent charge detected for client {client.id} on {due_date}")
        except Exception as e:
            result.add_error(client, str(e))
            logger.error(f"Failed to generate charge for client {client.id} ({client.name}): {e}")
