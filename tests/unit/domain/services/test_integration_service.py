"""
Unit tests for IntegrationGateway.
"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from unittest.mock import Mock

from app.domain.models.base import (
    AttemptLimitExceededError,
    EntityNotFoundError,
    InvalidStateError,
    ValidationError,
)
from app.domain.models.charge import Charge, ChargeStatus
from app.domain.services.billing_calendar import Clock
from app.domain.services.integration_service import IntegrationGateway


class StubClock(Clock):
    def now(self):
        return datetime(2024, 3, 15, 10, 0)


def charge(charge_id: int, attempts: int = 0, status=ChargeStatus.PENDENTE, notes=None) -> Charge:
    item = Charge.create(client_id=1, amount=Decimal("100"), due_date=date(2024, 3, 16), notes=notes)
    item.id = charge_id
    item.status = status
    item.message_attempts = attempts
    return item


class TestListActionable:
    """Feed listing, pagination and cursor handling."""

    def setup_method(self):
        """Set up test fixtures."""
        self.charges = Mock()
        self.clients = Mock()
        self.synchronizer = Mock()
        self.charges.find_clients_with_exhausted_attempts.return_value = set()
        self.gateway = IntegrationGateway(
            self.charges, self.clients, self.synchronizer, StubClock(), max_page_size=2
        )

    def test_syncs_and_queries_window(self):
        """Test statuses are synced and the upcoming window is today + 2 days."""
        self.charges.list_actionable.return_value = [charge(1)]

        page = self.gateway.list_actionable("user-1")

        self.synchronizer.sync.assert_called_once_with("user-1")
        kwargs = self.charges.list_actionable.call_args.kwargs
        assert kwargs["today"] == date(2024, 3, 15)
        assert kwargs["upcoming_until"] == date(2024, 3, 15) + timedelta(days=2)
        assert kwargs["max_attempts"] == 3
        assert kwargs["take"] == 3
        assert page.has_next_page is False
        assert page.next_cursor is None

    def test_next_cursor_when_more_rows(self):
        """Test one extra row signals another page; the cursor is the last item's ID."""
        self.charges.list_actionable.return_value = [charge(1), charge(2), charge(3)]

        page = self.gateway.list_actionable("user-1")

        assert [item.id for item in page.items] == [1, 2]
        assert page.has_next_page is True
        assert page.next_cursor == "2"

    def test_limit_is_capped(self):
        """Test the requested limit never exceeds the maximum page size."""
        self.charges.list_actionable.return_value = []

        page = self.gateway.list_actionable("user-1", limit=500)

        assert page.limit == 2

    @pytest.mark.parametrize("limit", [0, -5])
    def test_non_positive_limit_uses_maximum(self, limit):
        """Test a zero or negative limit falls back to the maximum page size."""
        self.charges.list_actionable.return_value = []

        page = self.gateway.list_actionable("user-1", limit=limit)

        assert page.limit == 2
        assert self.charges.list_actionable.call_args.kwargs["take"] == 3

    @pytest.mark.parametrize("cursor", ["abc", "99"])
    def test_invalid_cursor(self, cursor):
        """Test non-numeric and unknown cursors are rejected."""
        self.charges.get_for_user.return_value = None

        with pytest.raises(ValidationError, match="Cursor inválido"):
            self.gateway.list_actionable("user-1", cursor=cursor)

    def test_exhausted_clients_are_deactivated(self):
        """Test clients at the attempt cap are switched off before listing."""
        self.charges.find_clients_with_exhausted_attempts.return_value = {4, 5}
        self.clients.deactivate.return_value = 2
        self.charges.list_actionable.return_value = []

        self.gateway.list_actionable("user-1")

        self.clients.deactivate.assert_called_once_with({4, 5})


class TestAttempts:
    """Attempt counting and integration updates."""

    def setup_method(self):
        """Set up test fixtures."""
        self.charges = Mock()
        self.charges.save.side_effect = lambda item: item
        self.gateway = IntegrationGateway(self.charges, Mock(), Mock(), StubClock())

    def test_increment_attempt(self):
        """Test one attempt is added through the conditional update."""
        self.charges.get_for_user.return_value = charge(1, attempts=1)
        self.charges.increment_attempts.return_value = 2

        result = self.gateway.increment_attempt("user-1", 1)

        assert result.message_attempts == 2
        self.charges.increment_attempts.assert_called_once_with(1, 1, 3)

    def test_increment_at_cap(self):
        """Test the fourth attempt is refused."""
        self.charges.get_for_user.return_value = charge(1, attempts=3)

        with pytest.raises(AttemptLimitExceededError):
            self.gateway.increment_attempt("user-1", 1)
        self.charges.increment_attempts.assert_not_called()

    def test_lost_race_on_increment(self):
        """Test a concurrent request reaching the cap first is reported as the limit."""
        self.charges.get_for_user.return_value = charge(1, attempts=2)
        self.charges.increment_attempts.return_value = None

        with pytest.raises(AttemptLimitExceededError):
            self.gateway.increment_attempt("user-1", 1)

    def test_unknown_charge(self):
        self.charges.get_for_user.return_value = None

        with pytest.raises(EntityNotFoundError):
            self.gateway.increment_attempt("user-1", 1)

    def test_cancelled_charge(self):
        self.charges.get_for_user.return_value = charge(1, status=ChargeStatus.CANCELADO)

        with pytest.raises(InvalidStateError):
            self.gateway.increment_attempt("user-1", 1)

    def test_update_requires_delta_or_notes(self):
        """Test an update with neither attempts nor notes is invalid."""
        with pytest.raises(ValidationError, match="messageAttemptsDelta ou observacoes"):
            self.gateway.apply_update("user-1", 1, attempts_delta=None, notes="  ")

    def test_update_appends_notes_and_adds_attempts(self):
        """Test notes and attempts in one call."""
        self.charges.get_for_user.return_value = charge(1, attempts=1, notes="Aviso 1")
        self.charges.increment_attempts.return_value = 3

        result = self.gateway.apply_update("user-1", 1, attempts_delta=2, notes="Aviso 2", append_notes=True)

        assert result.notes == "Aviso 1\nAviso 2"
        assert result.message_attempts == 3
        self.charges.save.assert_called_once()

    def test_update_over_cap_writes_nothing(self):
        """Test a delta that would exceed the cap leaves notes untouched."""
        self.charges.get_for_user.return_value = charge(1, attempts=2, notes="Aviso 1")

        with pytest.raises(AttemptLimitExceededError):
            self.gateway.apply_update("user-1", 1, attempts_delta=2, notes="Aviso 2")
        self.charges.save.assert_not_called()

    def test_record_message_counts_one_attempt(self):
        """Test a sent message is one attempt."""
        self.charges.get_for_user.return_value = charge(1)
        self.charges.increment_attempts.return_value = 1

        result = self.gateway.record_message("user-1", 1, notes="Lembrete enviado")

        assert result.message_attempts == 1
        assert result.notes == "Lembrete enviado"
        self.charges.increment_attempts.assert_called_once_with(1, 1, 3)
