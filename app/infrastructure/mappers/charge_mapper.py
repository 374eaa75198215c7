"""
Charge mapper for converting between domain entities and database models.
"""

from decimal import Decimal
from typing import Optional

from app.domain.models.charge import Charge, ChargeStatus
from app.infrastructure.db.models import ChargeModel
from app.infrastructure.mappers.client_mapper import ClientMapper


def _decimal(value) -> Optional[Decimal]:
    return Decimal(value) if value is not None else None


class ChargeMapper:
    """Maps between Charge domain entity and ChargeModel database model."""

    def __init__(self):
        self.client_mapper = ClientMapper()

    def domain_to_model(self, charge: Charge) -> ChargeModel:
        """Convert Charge domain entity to ChargeModel."""
        return ChargeModel(
            id=charge.id,
            client_id=charge.client_id,
            amount=charge.amount,
            debt_amount=charge.debt_amount,
            paid_amount=charge.paid_amount,
            due_date=charge.due_date,
            payment_date=charge.payment_date,
            status=charge.status.value,
            message_attempts=charge.message_attempts,
            notes=charge.notes,
        )

    def update_model(self, model: ChargeModel, charge: Charge) -> ChargeModel:
        """
        Copy mutable charge fields onto an existing row.
        message_attempts is left out: it only changes through conditional updates.
        """
        model.amount = charge.amount
        model.debt_amount = charge.debt_amount
        model.paid_amount = charge.paid_amount
        model.due_date = charge.due_date
        model.payment_date = charge.payment_date
        model.status = charge.status.value
        model.notes = charge.notes
        return model

    def model_to_domain(self, model: ChargeModel, with_client: bool = False) -> Charge:
        """Convert ChargeModel to Charge domain entity."""
        return Charge(
            id=model.id,
            client_id=model.client_id,
            amount=Decimal(model.amount),
            debt_amount=Decimal(model.debt_amount),
            paid_amount=_decimal(model.paid_amount),
            due_date=model.due_date,
            payment_date=model.payment_date,
            status=ChargeStatus(model.status),
            message_attempts=model.message_attempts,
            notes=model.notes,
            client=self.client_mapper.model_to_domain(model.client) if with_client else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
