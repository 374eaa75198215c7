"""
Charge repository implementation using SQLAlchemy.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Set

from sqlalchemy import and_, or_, select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, Query, contains_eager, joinedload

from app.domain.models.base import DuplicateEntityError, EntityNotFoundError
from app.domain.models.charge import Charge, ChargeStatus, DUPLICATE_DUE_DATE_MESSAGE
from app.domain.repositories.charge_repository import ChargeRepository as ChargeRepositoryInterface
from app.infrastructure.db.models import ChargeModel, ClientModel
from app.infrastructure.mappers.charge_mapper import ChargeMapper


def _to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


# PostgreSQL reports the constraint name, SQLite the column list.
DUE_DATE_CONSTRAINT_MARKERS = (
    "uq_charges_client_due_date",
    "charges.client_id, charges.due_date",
)


def is_due_date_conflict(error: IntegrityError) -> bool:
    """True when the violation is the one-charge-per-client-per-day constraint."""
    message = str(error.orig)
    return any(marker in message for marker in DUE_DATE_CONSTRAINT_MARKERS)


class SQLAlchemyChargeRepository(ChargeRepositoryInterface):
    """SQLAlchemy implementation of charge repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ChargeMapper()
        self.model = ChargeModel

    def _user_client_ids(self, user_id: str):
        return select(ClientModel.id).where(ClientModel.user_id == user_id)

    def _query_for_user(self, user_id: str) -> Query:
        """Charges joined with their client, restricted to one tenant."""
        return self.session.query(ChargeModel).join(ChargeModel.client).options(
            contains_eager(ChargeModel.client)
        ).filter(ClientModel.user_id == user_id)

    def _aggregate_for_user(self, expression, user_id: str) -> Query:
        return self.session.query(expression).select_from(ChargeModel).join(
            ChargeModel.client
        ).filter(ClientModel.user_id == user_id)

    def add(self, charge: Charge) -> Charge:
        """Insert a charge; a second charge on the same client and day is a duplicate."""
        model = self.mapper.domain_to_model(charge)
        self.session.add(model)
        try:
            self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            if is_due_date_conflict(e):
                raise DuplicateEntityError(DUPLICATE_DUE_DATE_MESSAGE)
            raise

        return self.mapper.model_to_domain(model)

    def save(self, charge: Charge) -> Charge:
        """Persist changes to an existing charge."""
        model = self.session.query(ChargeModel).options(
            joinedload(ChargeModel.client)
        ).filter_by(id=charge.id).first()
        if not model:
            raise EntityNotFoundError("Cobrança não encontrada", charge.id)

        self.mapper.update_model(model, charge)
        try:
            self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            if is_due_date_conflict(e):
                raise DuplicateEntityError(DUPLICATE_DUE_DATE_MESSAGE)
            raise

        return self.mapper.model_to_domain(model, with_client=True)

    def get_for_user(self, user_id: str, charge_id: int) -> Optional[Charge]:
        """Get charge by ID within the user's charges."""
        model = self._query_for_user(user_id).filter(ChargeModel.id == charge_id).first()

        if not model:
            return None

        return self.mapper.model_to_domain(model, with_client=True)

    def exists_for_client_on(self, client_id: int, due_date: date) -> bool:
        """Check for a charge of the client on that calendar day."""
        return self.session.query(
            self.session.query(ChargeModel.id).filter(
                ChargeModel.client_id == client_id,
                ChargeModel.due_date == due_date
            ).exists()
        ).scalar()

    def mark_overdue(self, user_id: str, today: date) -> int:
        """PENDENTE -> ATRASADO for charges due before today."""
        return self.session.query(ChargeModel).filter(
            ChargeModel.client_id.in_(self._user_client_ids(user_id)),
            ChargeModel.status == ChargeStatus.PENDENTE.value,
            ChargeModel.due_date < today
        ).update(
            {ChargeModel.status: ChargeStatus.ATRASADO.value, ChargeModel.updated_at: func.now()},
            synchronize_session=False
        )

    def mark_pending(self, user_id: str, today: date) -> int:
        """ATRASADO -> PENDENTE for charges due today or later."""
        return self.session.query(ChargeModel).filter(
            ChargeModel.client_id.in_(self._user_client_ids(user_id)),
            ChargeModel.status == ChargeStatus.ATRASADO.value,
            ChargeModel.due_date >= today
        ).update(
            {ChargeModel.status: ChargeStatus.PENDENTE.value, ChargeModel.updated_at: func.now()},
            synchronize_session=False
        )

    def list_for_user(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[ChargeStatus] = None,
        client_name: Optional[str] = None
    ) -> List[Charge]:
        """List charges newest due date first."""
        query = self._query_for_user(user_id)

        if start:
            query = query.filter(ChargeModel.due_date >= start)
        if end:
            query = query.filter(ChargeModel.due_date <= end)
        if status:
            query = query.filter(ChargeModel.status == ChargeStatus(status).value)
        if client_name:
            query = query.filter(ClientModel.name.ilike(f'%{client_name}%'))

        models = query.order_by(ChargeModel.due_date.desc(), ChargeModel.id.desc()).all()
        return [self.mapper.model_to_domain(model, with_client=True) for model in models]

    def list_recent_for_client(self, client_id: int, limit: int = 5) -> List[Charge]:
        """Most recent charges of a client by due date."""
        models = self.session.query(ChargeModel).filter(
            ChargeModel.client_id == client_id
        ).order_by(ChargeModel.due_date.desc()).limit(limit).all()

        return [self.mapper.model_to_domain(model) for model in models]

    def find_clients_with_exhausted_attempts(self, user_id: str, max_attempts: int) -> Set[int]:
        """Distinct active clients with an unpaid charge at the attempt cap."""
        rows = self.session.query(ChargeModel.client_id).join(ChargeModel.client).filter(
            ClientModel.user_id == user_id,
            ClientModel.active.is_(True),
            ChargeModel.message_attempts >= max_attempts,
            ChargeModel.status != ChargeStatus.PAGO.value
        ).distinct().all()

        return {row.client_id for row in rows}

    def list_actionable(
        self,
        user_id: str,
        today: date,
        upcoming_until: date,
        max_attempts: int,
        after: Optional[Charge],
        take: int
    ) -> List[Charge]:
        """Upcoming and overdue charges in (due date, id) keyset order."""
        upcoming = and_(
            ChargeModel.status == ChargeStatus.PENDENTE.value,
            ChargeModel.due_date >= today,
            ChargeModel.due_date <= upcoming_until
        )
        overdue = ChargeModel.status == ChargeStatus.ATRASADO.value

        query = self._query_for_user(user_id).filter(
            ClientModel.active.is_(True),
            ChargeModel.message_attempts < max_attempts,
            or_(upcoming, overdue)
        )

        if after is not None:
            query = query.filter(
                or_(
                    ChargeModel.due_date > after.due_date,
                    and_(ChargeModel.due_date == after.due_date, ChargeModel.id > after.id)
                )
            )

        models = query.order_by(
            ChargeModel.due_date.asc(),
            ChargeModel.id.asc()
        ).limit(take).all()

        return [self.mapper.model_to_domain(model, with_client=True) for model in models]

    def increment_attempts(self, charge_id: int, delta: int, max_attempts: int) -> Optional[int]:
        """Conditional increment; concurrent callers can never push the count past the cap."""
        updated = self.session.query(ChargeModel).filter(
            ChargeModel.id == charge_id,
            ChargeModel.status != ChargeStatus.CANCELADO.value,
            ChargeModel.message_attempts + delta <= max_attempts
        ).update(
            {
                ChargeModel.message_attempts: ChargeModel.message_attempts + delta,
                ChargeModel.updated_at: func.now(),
            },
            synchronize_session=False
        )

        if not updated:
            return None

        return self.session.query(ChargeModel.message_attempts).filter(
            ChargeModel.id == charge_id
        ).scalar()

    def sum_debt(self, user_id: str, statuses: Sequence[ChargeStatus]) -> Decimal:
        """Sum of debt_amount for the given statuses."""
        total = self._aggregate_for_user(func.sum(ChargeModel.debt_amount), user_id).filter(
            ChargeModel.status.in_([ChargeStatus(status).value for status in statuses])
        ).scalar()
        return _to_decimal(total)

    def sum_paid_between(self, user_id: str, start: datetime, end: datetime) -> Decimal:
        """Sum of paid_amount for charges paid within [start, end]."""
        total = self._aggregate_for_user(func.sum(ChargeModel.paid_amount), user_id).filter(
            ChargeModel.status == ChargeStatus.PAGO.value,
            ChargeModel.payment_date >= start,
            ChargeModel.payment_date <= end
        ).scalar()
        return _to_decimal(total)

    def count(
        self,
        user_id: str,
        status: ChargeStatus,
        due_from: Optional[date] = None,
        due_until: Optional[date] = None
    ) -> int:
        """Count charges with a status, optionally inside a due date window."""
        query = self._aggregate_for_user(func.count(ChargeModel.id), user_id).filter(
            ChargeModel.status == ChargeStatus(status).value
        )
        if due_from:
            query = query.filter(ChargeModel.due_date >= due_from)
        if due_until:
            query = query.filter(ChargeModel.due_date <= due_until)
        return query.scalar() or 0
