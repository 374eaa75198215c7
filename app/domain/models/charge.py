"""
Charge ("cobrança") domain model.
Holds the status lifecycle and the separate debt/paid amounts of one billing instance.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from app.domain.models.base import (
    BaseEntity,
    ValidationError,
    InvalidStateError,
    AttemptLimitExceededError,
)
from app.domain.models.client import Client, clean_notes


MAX_MESSAGE_ATTEMPTS = 3
DUPLICATE_DUE_DATE_MESSAGE = "Já existe uma cobrança para este cliente nesta data"


class ChargeStatus(str, Enum):
    """Charge status enumeration."""

    PENDENTE = "PENDENTE"
    ATRASADO = "ATRASADO"
    PAGO = "PAGO"
    CANCELADO = "CANCELADO"

    @property
    def is_terminal(self) -> bool:
        return self in (ChargeStatus.PAGO, ChargeStatus.CANCELADO)

    @property
    def is_open(self) -> bool:
        return self in (ChargeStatus.PENDENTE, ChargeStatus.ATRASADO)


class ChargeCategory(str, Enum):
    """How the integration feed labels an actionable charge."""

    UPCOMING = "upcoming"
    OVERDUE = "overdue"


@dataclass
class Charge(BaseEntity):
    """
    Charge entity.

    `debt_amount` is the obligation fixed at creation, `paid_amount` is what was
    actually collected and `amount` is the value shown in listings: it mirrors
    the debt while the charge is open and the paid value once it is paid.
    """

    client_id: int = 0
    amount: Decimal = Decimal("0")
    debt_amount: Decimal = Decimal("0")
    paid_amount: Optional[Decimal] = None
    due_date: date = None
    payment_date: Optional[datetime] = None
    status: ChargeStatus = ChargeStatus.PENDENTE
    message_attempts: int = 0
    notes: Optional[str] = None

    # Read-side only, filled by repositories that join the owning client
    client: Optional[Client] = None

    def __post_init__(self):
        if isinstance(self.status, str):
            self.status = ChargeStatus(self.status)
        self.validate()

    def validate(self) -> None:
        """Validate charge state."""
        if self.due_date is None:
            raise ValidationError("Data de vencimento é obrigatória", "due_date")

        if self.amount < 0 or self.debt_amount < 0:
            raise ValidationError("Valor não pode ser negativo", "amount")

        if not 0 <= self.message_attempts <= MAX_MESSAGE_ATTEMPTS:
            raise ValidationError("Tentativas devem estar entre 0 e 3", "message_attempts")

        if self.status == ChargeStatus.PAGO and (self.paid_amount is None or self.payment_date is None):
            raise ValidationError("Cobrança paga precisa de valor e data de pagamento", "status")

    @classmethod
    def create(
        cls,
        client_id: int,
        amount: Decimal,
        due_date: date,
        status: ChargeStatus = ChargeStatus.PENDENTE,
        notes: Optional[str] = None,
        payment_date: Optional[datetime] = None,
    ) -> "Charge":
        """Create a new charge whose debt equals the given amount."""
        amount = Decimal(amount)
        if amount <= 0:
            raise ValidationError("Valor deve ser maior que zero", "amount")

        status = ChargeStatus(status)
        paid_amount = None
        if status == ChargeStatus.PAGO:
            paid_amount = amount
            payment_date = payment_date or datetime.utcnow()

        return cls(
            client_id=client_id,
            amount=amount,
            debt_amount=amount,
            paid_amount=paid_amount,
            due_date=due_date,
            payment_date=payment_date,
            status=status,
            message_attempts=0,
            notes=clean_notes(notes),
        )

    @property
    def category(self) -> ChargeCategory:
        if self.status == ChargeStatus.ATRASADO:
            return ChargeCategory.OVERDUE
        return ChargeCategory.UPCOMING

    @property
    def amount_difference(self) -> Optional[Decimal]:
        """Paid minus owed; negative for partial payments, None while unpaid."""
        if self.paid_amount is None:
            return None
        return self.paid_amount - self.debt_amount

    def mark_as_paid(self, paid_at: datetime, amount: Optional[Decimal] = None) -> None:
        """
        Settle the charge.
        The debt is kept as-is so reports can show under or over payment.
        """
        if self.status == ChargeStatus.PAGO:
            raise InvalidStateError("Cobrança já está marcada como paga")
        if self.status == ChargeStatus.CANCELADO:
            raise InvalidStateError("Não é possível marcar uma cobrança cancelada como paga")

        paid = Decimal(amount) if amount is not None else self.debt_amount
        self.status = ChargeStatus.PAGO
        self.paid_amount = paid
        self.payment_date = paid_at
        self.amount = paid
        self.mark_as_updated()

    def change_amount(self, new_amount: Decimal) -> None:
        """Change the displayed amount; open debts follow it, settled ones stay frozen."""
        new_amount = Decimal(new_amount)
        if new_amount <= 0:
            raise ValidationError("Valor deve ser maior que zero", "amount")
        self.amount = new_amount
        if self.status != ChargeStatus.PAGO:
            self.debt_amount = new_amount
        self.mark_as_updated()

    def change_status(self, new_status: ChargeStatus) -> None:
        """Administrative status change; payment has its own operation."""
        new_status = ChargeStatus(new_status)
        if new_status == self.status:
            return
        if self.status.is_terminal:
            raise InvalidStateError(
                f"Não é possível alterar o status de uma cobrança {self.status.value}"
            )
        if new_status == ChargeStatus.PAGO:
            raise InvalidStateError("Use a operação de pagamento para marcar a cobrança como paga")
        self.status = new_status
        self.mark_as_updated()

    def ensure_accepts_attempts(self, delta: int = 1, limit: int = MAX_MESSAGE_ATTEMPTS) -> None:
        """Raise if `delta` more reminder attempts cannot be recorded."""
        if self.status == ChargeStatus.CANCELADO:
            raise InvalidStateError("Não é possível registrar tentativas em uma cobrança cancelada")
        if self.message_attempts + delta > limit:
            raise AttemptLimitExceededError()

    def apply_notes(self, text: str, append: bool = False) -> bool:
        """
        Replace or append the notes.
        Returns False when there is nothing to write.
        """
        text = (text or "").strip()
        if not text:
            return False

        if append and self.notes:
            merged = f"{self.notes}\n{text}".strip()
        else:
            merged = text

        self.notes = merged
        self.mark_as_updated()
        return True
