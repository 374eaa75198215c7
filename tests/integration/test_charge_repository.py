"""
Integration tests for the SQLAlchemy repositories on a SQLite database.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from app.domain.models.base import DuplicateEntityError
from app.domain.models.charge import Charge, ChargeStatus
from app.domain.services.dashboard_service import DashboardService
from app.domain.services.integration_service import IntegrationGateway
from app.domain.services.status_sync_service import StatusSynchronizer
from app.infrastructure.repositories.charge_repository import SQLAlchemyChargeRepository
from app.infrastructure.repositories.client_repository import SQLAlchemyClientRepository


TODAY = date(2024, 3, 15)


@pytest.fixture
def tenant(make_user, make_client):
    make_user("user-1")
    make_user("user-2")
    return make_client("user-1", name="Maria Silva")


class TestChargePersistence:

    def test_add_and_get_with_client(self, session, tenant):
        """Test a stored charge comes back with its client."""
        repository = SQLAlchemyChargeRepository(session)
        saved = repository.add(Charge.create(client_id=tenant.id, amount=Decimal("100.00"), due_date=TODAY))

        loaded = repository.get_for_user("user-1", saved.id)

        assert loaded.debt_amount == Decimal("100.00")
        assert loaded.client.name == "Maria Silva"

    def test_other_tenant_sees_nothing(self, session, tenant, make_charge):
        """Test charges are scoped by the client's owner."""
        charge = make_charge(tenant.id, TODAY)

        assert SQLAlchemyChargeRepository(session).get_for_user("user-2", charge.id) is None

    def test_unique_client_and_day(self, session, tenant, make_charge):
        """Test the database refuses a second charge on the same day."""
        make_charge(tenant.id, TODAY)

        with pytest.raises(DuplicateEntityError):
            SQLAlchemyChargeRepository(session).add(
                Charge.create(client_id=tenant.id, amount=Decimal("50"), due_date=TODAY)
            )

    def test_unique_violation_is_duplicate_without_lookup(self, session, tenant, make_charge):
        """Test the violation alone identifies a duplicate, whatever the existence check says."""
        make_charge(tenant.id, TODAY)
        repository = SQLAlchemyChargeRepository(session)
        repository.exists_for_client_on = lambda client_id, due_date: False

        with pytest.raises(DuplicateEntityError):
            repository.add(Charge.create(client_id=tenant.id, amount=Decimal("50"), due_date=TODAY))

    def test_moving_onto_taken_day_is_duplicate(self, session, tenant, make_charge):
        make_charge(tenant.id, TODAY)
        other = make_charge(tenant.id, date(2024, 3, 20))
        other.due_date = TODAY

        with pytest.raises(DuplicateEntityError):
            SQLAlchemyChargeRepository(session).save(other)


class TestStatusSync:

    def test_sync_is_idempotent(self, session, tenant, make_charge, clock):
        """Test overdue and reopened charges settle after one run."""
        overdue = make_charge(tenant.id, date(2024, 3, 10))
        moved = make_charge(tenant.id, date(2024, 3, 20), status=ChargeStatus.ATRASADO)
        paid = make_charge(tenant.id, date(2024, 3, 1), status=ChargeStatus.PAGO)
        repository = SQLAlchemyChargeRepository(session)
        synchronizer = StatusSynchronizer(repository, clock)

        assert synchronizer.sync("user-1") == 2
        assert synchronizer.sync("user-1") == 0

        assert repository.get_for_user("user-1", overdue.id).status == ChargeStatus.ATRASADO
        assert repository.get_for_user("user-1", moved.id).status == ChargeStatus.PENDENTE
        assert repository.get_for_user("user-1", paid.id).status == ChargeStatus.PAGO

    def test_due_today_stays_pending(self, session, tenant, make_charge, clock):
        charge = make_charge(tenant.id, TODAY)
        repository = SQLAlchemyChargeRepository(session)

        StatusSynchronizer(repository, clock).sync("user-1")

        assert repository.get_for_user("user-1", charge.id).status == ChargeStatus.PENDENTE


class TestActionableFeed:

    def _gateway(self, session, clock, **kwargs):
        charges = SQLAlchemyChargeRepository(session)
        return IntegrationGateway(
            charges,
            SQLAlchemyClientRepository(session),
            StatusSynchronizer(charges, clock),
            clock,
            **kwargs
        )

    def test_upcoming_and_overdue(self, session, tenant, make_charge, clock):
        """Test the feed has charges due within two days and overdue ones, in due order."""
        overdue = make_charge(tenant.id, date(2024, 3, 1))
        soon = make_charge(tenant.id, date(2024, 3, 17))
        make_charge(tenant.id, date(2024, 3, 18))
        make_charge(tenant.id, date(2024, 3, 16), status=ChargeStatus.PAGO)

        page = self._gateway(session, clock).list_actionable("user-1")

        assert [item.id for item in page.items] == [overdue.id, soon.id]
        assert [item.category.value for item in page.items] == ["overdue", "upcoming"]
        assert page.items[0].status == ChargeStatus.ATRASADO

    def test_keyset_pagination(self, session, tenant, make_client, make_charge, clock):
        """Test pages follow (due date, id) without gaps or repeats."""
        other = make_client("user-1", name="João Souza")
        first = make_charge(tenant.id, date(2024, 3, 16))
        second = make_charge(other.id, date(2024, 3, 16))
        third = make_charge(tenant.id, date(2024, 3, 17))
        gateway = self._gateway(session, clock, max_page_size=2)

        page_one = gateway.list_actionable("user-1")
        page_two = gateway.list_actionable("user-1", cursor=page_one.next_cursor)

        assert [item.id for item in page_one.items] == [first.id, second.id]
        assert page_one.next_cursor == str(second.id)
        assert [item.id for item in page_two.items] == [third.id]
        assert page_two.has_next_page is False

    def test_exhausted_client_leaves_the_feed(self, session, tenant, make_charge, clock):
        """Test a client with a charge at the cap is deactivated and all its charges disappear."""
        make_charge(tenant.id, date(2024, 3, 1), message_attempts=3)
        make_charge(tenant.id, date(2024, 3, 16))

        page = self._gateway(session, clock).list_actionable("user-1")

        assert page.items == []
        assert SQLAlchemyClientRepository(session).get_for_user("user-1", tenant.id).active is False

    def test_increment_never_exceeds_cap(self, session, tenant, make_charge):
        """Test the conditional update refuses to pass three attempts."""
        charge = make_charge(tenant.id, TODAY, message_attempts=2)
        repository = SQLAlchemyChargeRepository(session)

        assert repository.increment_attempts(charge.id, 1, 3) == 3
        assert repository.increment_attempts(charge.id, 1, 3) is None


class TestDashboard:

    def test_stats(self, session, tenant, make_client, make_charge, clock):
        """Test dashboard figures after a sync."""
        make_client("user-1", name="Sem Cobrança", active=False)
        make_charge(tenant.id, date(2024, 3, 10), amount="100")
        make_charge(tenant.id, date(2024, 3, 18), amount="50")
        make_charge(tenant.id, date(2024, 3, 1), amount="70", status=ChargeStatus.PAGO)
        charges = SQLAlchemyChargeRepository(session)
        clients = SQLAlchemyClientRepository(session)

        stats = DashboardService(charges, clients, StatusSynchronizer(charges, clock), clock).get_stats("user-1")

        assert stats.active_clients == 1
        assert stats.total_clients == 2
        assert stats.clients_without_charges == 1
        assert stats.pending_amount == Decimal("150")
        assert stats.overdue_amount == Decimal("100")
        assert stats.overdue_count == 1
        assert stats.charges_due_soon == 1
        assert stats.paid_this_month == Decimal("70")
