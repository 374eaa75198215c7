"""
Unit tests for telling duplicate charges apart from other integrity violations.
"""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from app.domain.models.base import DuplicateEntityError
from app.domain.models.charge import Charge
from app.infrastructure.repositories.charge_repository import (
    SQLAlchemyChargeRepository,
    is_due_date_conflict,
)


def integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO charges ...", {}, Exception(message))


class TestIsDueDateConflict:

    def test_postgres_constraint_name(self):
        error = integrity_error(
            'duplicate key value violates unique constraint "uq_charges_client_due_date"'
        )
        assert is_due_date_conflict(error) is True

    def test_sqlite_column_list(self):
        error = integrity_error("UNIQUE constraint failed: charges.client_id, charges.due_date")
        assert is_due_date_conflict(error) is True

    def test_other_violations(self):
        assert is_due_date_conflict(integrity_error("CHECK constraint failed: ck_charges_message_attempts")) is False
        assert is_due_date_conflict(integrity_error("NOT NULL constraint failed: charges.amount")) is False


class TestRepositoryIntegrityErrors:

    def setup_method(self):
        self.session = MagicMock()
        self.repository = SQLAlchemyChargeRepository(self.session)
        self.charge = Charge.create(client_id=1, amount=Decimal("100.00"), due_date=date(2024, 4, 10))
        self.charge.id = 7

    def test_save_reraises_check_violation(self):
        """Test a CHECK failure is not reported as a duplicate date."""
        self.session.flush.side_effect = integrity_error("CHECK constraint failed: ck_charges_message_attempts")

        with pytest.raises(IntegrityError):
            self.repository.save(self.charge)
        self.session.rollback.assert_called_once()

    def test_save_reports_duplicate_date(self):
        self.session.flush.side_effect = integrity_error(
            "UNIQUE constraint failed: charges.client_id, charges.due_date"
        )

        with pytest.raises(DuplicateEntityError):
            self.repository.save(self.charge)

    def test_add_reraises_other_violation(self):
        self.session.flush.side_effect = integrity_error("FOREIGN KEY constraint failed")

        with pytest.raises(IntegrityError):
            self.repository.add(self.charge)
