"""
Unit tests for StatusSynchronizer.
"""

from datetime import date, datetime
from unittest.mock import Mock

from app.domain.services.billing_calendar import Clock
from app.domain.services.status_sync_service import StatusSynchronizer


class StubClock(Clock):
    def now(self):
        return datetime(2024, 3, 15, 23, 59)


class TestStatusSynchronizer:

    def test_runs_both_updates_with_today(self):
        """Test overdue and reopen updates both use the business date."""
        repository = Mock()
        repository.mark_overdue.return_value = 2
        repository.mark_pending.return_value = 1

        changed = StatusSynchronizer(repository, StubClock()).sync("user-1")

        assert changed == 3
        repository.mark_overdue.assert_called_once_with("user-1", date(2024, 3, 15))
        repository.mark_pending.assert_called_once_with("user-1", date(2024, 3, 15))
