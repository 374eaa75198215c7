"""
Client domain model.
A billable person owned by exactly one tenant, billed on a fixed day each month.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from app.domain.models.base import BaseEntity, ValidationError


NOTES_MAX_LENGTH = 500
_NON_DIGITS = re.compile(r"\D")


def normalize_phone(value: str) -> str:
    """Keep only the digits of a phone number."""
    return _NON_DIGITS.sub("", value or "")


def clean_notes(value: Optional[str]) -> Optional[str]:
    """Trim free-text notes, turning blank text into None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class Client(BaseEntity):
    """
    Client entity.
    `billing_day` is the day of the month a charge is generated for (1-31);
    `amount` is the standard monthly value used by the bill generator.
    """

    user_id: str = ""
    name: str = ""
    phone: str = ""
    billing_day: int = 1
    amount: Decimal = Decimal("0")
    active: bool = True
    notes: Optional[str] = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Validate client state."""
        if not self.user_id:
            raise ValidationError("Cliente precisa pertencer a um usuário", "user_id")

        if not 1 <= self.billing_day <= 31:
            raise ValidationError("Dia de vencimento deve estar entre 1 e 31", "billing_day")

        if self.amount < 0:
            raise ValidationError("Valor não pode ser negativo", "amount")

    @classmethod
    def create(
        cls,
        user_id: str,
        name: str,
        phone: str,
        billing_day: int,
        amount: Decimal,
        active: bool = True,
        notes: Optional[str] = None,
    ) -> "Client":
        """Create a new client with normalized fields."""
        return cls(
            user_id=user_id,
            name=name.strip(),
            phone=normalize_phone(phone),
            billing_day=billing_day,
            amount=Decimal(amount),
            active=active,
            notes=clean_notes(notes),
        )

    @property
    def is_billable(self) -> bool:
        """A client only gets automatic charges with a positive amount."""
        return self.amount > 0

    def deactivate(self) -> None:
        self.active = False
        self.mark_as_updated()

    def activate(self) -> None:
        self.active = True
        self.mark_as_updated()
