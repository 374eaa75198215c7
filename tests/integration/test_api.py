"""
HTTP tests for the FastAPI application on a SQLite database.
"""

import pytest
from datetime import date, datetime

from app.domain.models.charge import ChargeStatus
from app.domain.models.user import UserRole
from app.infrastructure.db.models import ApiTokenModel


@pytest.fixture
def seeded(make_user, make_client):
    make_user("user-1")
    make_user("user-2")
    make_user("admin", role=UserRole.ADMIN)
    return make_client("user-1", name="Maria Silva", billing_day=20, amount="100")


class TestAuthentication:

    def test_missing_credentials(self, api):
        """Test requests without credentials are rejected."""
        response = api.get("/api/clients")

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"
        assert response.json()["message"] == "Não autenticado"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_malformed_header(self, api):
        response = api.get("/api/clients", headers={"Authorization": "Token abc"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token inválido"

    def test_session_cookie(self, api, seeded, settings, auth_headers):
        """Test the session token is also read from the cookie."""
        token = auth_headers("user-1")["Authorization"].split(" ", 1)[1]
        cookie = {"Cookie": f"{settings.session_cookie_name}={token}"}

        assert api.get("/api/clients", headers=cookie).status_code == 200

    def test_inactive_user(self, api, make_user, auth_headers):
        """Test a disabled user's session is refused."""
        make_user("user-1", is_active=False)

        response = api.get("/api/clients", headers=auth_headers("user-1"))

        assert response.status_code == 401

    def test_unknown_user(self, api, auth_headers):
        response = api.get("/api/clients", headers=auth_headers("ghost"))

        assert response.status_code == 401

    def test_api_token_records_usage(self, api, seeded, make_api_token, session_factory):
        """Test an API token authenticates and its last use is stored."""
        token = make_api_token("user-1")

        response = api.get("/api/integrations/cobrancas", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        with session_factory() as session:
            stored = session.query(ApiTokenModel).one()
            assert stored.last_used_at == datetime(2024, 3, 15, 10, 0)

    def test_expired_api_token(self, api, seeded, make_api_token):
        """Test expired tokens are refused."""
        token = make_api_token("user-1", expires_at=datetime(2024, 3, 1))

        response = api.get("/api/integrations/cobrancas", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token inválido"

    def test_api_token_of_inactive_user(self, api, make_user, make_api_token):
        make_user("user-1", is_active=False)
        token = make_api_token("user-1")

        response = api.get("/api/integrations/cobrancas", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_unknown_api_token(self, api, seeded):
        response = api.get("/api/integrations/cobrancas", headers={"Authorization": "Bearer ckt_unknown"})

        assert response.status_code == 401


class TestClientsApi:

    def test_create_and_get(self, api, seeded, auth_headers):
        """Test creating a client and reading its detail."""
        headers = auth_headers("user-1")
        response = api.post(
            "/api/clients",
            json={"nome": "João Souza", "fone": "(11) 98888-7777", "vencimento": 5, "valor": 89.9},
            headers=headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["nome"] == "João Souza"
        assert body["fone"] == "11988887777"
        assert body["valor"] == 89.9
        assert body["ativo"] is True

        detail = api.get(f"/api/clients/{body['id']}", headers=headers)
        assert detail.status_code == 200
        assert detail.json()["cobrancas"] == []

    def test_duplicate_phone(self, api, seeded, auth_headers):
        """Test a phone can only be used once per user."""
        response = api.post(
            "/api/clients",
            json={"nome": "Outra Pessoa", "fone": seeded.phone, "vencimento": 5, "valor": 10},
            headers=auth_headers("user-1"),
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Telefone já cadastrado para outro cliente"

    def test_same_phone_for_another_user(self, api, seeded, auth_headers):
        response = api.post(
            "/api/clients",
            json={"nome": "Outra Pessoa", "fone": seeded.phone, "vencimento": 5, "valor": 10},
            headers=auth_headers("user-2"),
        )

        assert response.status_code == 201

    def test_validation_error(self, api, seeded, auth_headers):
        """Test body errors are 400s with the first message."""
        response = api.post(
            "/api/clients",
            json={"nome": "  a  ", "fone": "11977776666", "vencimento": 5, "valor": 10},
            headers=auth_headers("user-1"),
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["message"] == "Nome precisa de pelo menos 3 caracteres"
        assert body["details"]["errors"][0]["field"] == "nome"

    def test_toggle_status(self, api, seeded, auth_headers):
        response = api.patch(
            f"/api/clients/{seeded.id}/toggle-status",
            json={"ativo": False},
            headers=auth_headers("user-1"),
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Cliente desativado com sucesso"

        listed = api.get("/api/clients", params={"status": "inativo"}, headers=auth_headers("user-1"))
        assert [item["id"] for item in listed.json()] == [seeded.id]

    def test_partial_update(self, api, seeded, auth_headers):
        response = api.patch(
            f"/api/clients/{seeded.id}",
            json={"valor": 120},
            headers=auth_headers("user-1"),
        )

        assert response.status_code == 200
        assert response.json()["valor"] == 120.0
        assert response.json()["vencimento"] == 20

    def test_client_of_another_user(self, api, seeded, auth_headers):
        """Test other tenants' clients look absent."""
        response = api.get(f"/api/clients/{seeded.id}", headers=auth_headers("user-2"))

        assert response.status_code == 404
        assert response.json()["message"] == "Cliente não encontrado"


class TestChargesApi:

    def _create(self, api, headers, client_id, due="2024-03-20", valor=100):
        return api.post(
            "/api/cobrancas",
            json={"clientId": client_id, "valor": valor, "dataVencimento": due},
            headers=headers,
        )

    def test_create_and_pay_partially(self, api, seeded, auth_headers):
        """Test a partial payment keeps the debt and reports the difference."""
        headers = auth_headers("user-1")
        created = self._create(api, headers, seeded.id)
        assert created.status_code == 201
        assert created.json()["client"]["nome"] == "Maria Silva"

        paid = api.post(f"/api/cobrancas/{created.json()['id']}/pay", json={"valor": 80}, headers=headers)

        assert paid.status_code == 200
        body = paid.json()
        assert body["status"] == "PAGO"
        assert body["valor"] == 80.0
        assert body["valorDivida"] == 100.0
        assert body["valorPago"] == 80.0
        assert body["diferencaValor"] == -20.0
        assert body["dataPagamento"].startswith("2024-03-15T10:00")

    def test_pay_without_body_and_twice(self, api, seeded, auth_headers):
        """Test the default full payment and the guard against paying again."""
        headers = auth_headers("user-1")
        charge_id = self._create(api, headers, seeded.id).json()["id"]

        first = api.post(f"/api/cobrancas/{charge_id}/pay", headers=headers)
        second = api.post(f"/api/cobrancas/{charge_id}/pay", headers=headers)

        assert first.json()["valorPago"] == 100.0
        assert second.status_code == 400
        assert second.json()["error"] == "INVALID_STATE"

    def test_duplicate_due_date(self, api, seeded, auth_headers):
        headers = auth_headers("user-1")
        self._create(api, headers, seeded.id)

        response = self._create(api, headers, seeded.id, valor=50)

        assert response.status_code == 409
        assert response.json()["message"] == "Já existe uma cobrança para este cliente nesta data"

    def test_charge_for_foreign_client(self, api, seeded, auth_headers):
        response = self._create(api, auth_headers("user-2"), seeded.id)

        assert response.status_code == 404
        assert response.json()["message"] == "Cliente não encontrado ou não pertence ao usuário"

    def test_list_filters(self, api, seeded, make_charge, auth_headers):
        """Test the month filter and the status sync before listing."""
        make_charge(seeded.id, date(2024, 3, 10))
        make_charge(seeded.id, date(2024, 2, 10), status=ChargeStatus.PAGO)
        headers = auth_headers("user-1")

        march = api.get("/api/cobrancas", params={"month": "2024-03"}, headers=headers)
        overdue = api.get("/api/cobrancas", params={"status": "ATRASADO"}, headers=headers)
        invalid = api.get("/api/cobrancas", params={"status": "perdido"}, headers=headers)

        assert [item["dataVencimento"] for item in march.json()] == ["2024-03-10"]
        assert [item["status"] for item in overdue.json()] == ["ATRASADO"]
        assert invalid.status_code == 400

    def test_update_requires_a_field(self, api, seeded, make_charge, auth_headers):
        charge = make_charge(seeded.id, date(2024, 3, 20))

        response = api.patch(f"/api/cobrancas/{charge.id}", json={}, headers=auth_headers("user-1"))

        assert response.status_code == 400
        assert response.json()["message"] == "Informe ao menos um campo para atualizar"

    def test_integration_update_and_attempt_cap(self, api, seeded, make_charge, auth_headers):
        """Test attempts accumulate up to three and notes append."""
        charge = make_charge(seeded.id, date(2024, 3, 16), notes="Primeiro aviso")
        headers = auth_headers("user-1")

        updated = api.post(
            f"/api/cobrancas/{charge.id}/update-integration",
            json={"messageAttemptsDelta": 2, "observacoes": "Segundo aviso", "appendObservacoes": "true"},
            headers=headers,
        )
        over = api.post(
            f"/api/cobrancas/{charge.id}/update-integration",
            json={"messageAttemptsDelta": 2},
            headers=headers,
        )
        message = api.post("/api/cobrancas/message", json={"id": charge.id}, headers=headers)
        attempt = api.post(f"/api/integrations/cobrancas/{charge.id}/attempt", headers=headers)

        assert updated.status_code == 200
        assert updated.json()["data"]["messageAttempts"] == 2
        assert updated.json()["data"]["observacoes"] == "Primeiro aviso\nSegundo aviso"
        assert over.status_code == 400
        assert over.json()["error"] == "ATTEMPT_LIMIT_EXCEEDED"
        assert message.json()["data"]["messageAttempts"] == 3
        assert attempt.status_code == 400
        assert attempt.json()["message"] == "Limite de tentativas atingido"

    def test_integration_update_needs_content(self, api, seeded, make_charge, auth_headers):
        charge = make_charge(seeded.id, date(2024, 3, 16))

        response = api.post(
            f"/api/cobrancas/{charge.id}/update-integration",
            json={"observacoes": "   "},
            headers=auth_headers("user-1"),
        )

        assert response.status_code == 400


class TestIntegrationFeedApi:

    def test_feed_with_pagination(self, api, seeded, make_charge, make_api_token):
        """Test the feed payload and its cursor."""
        first = make_charge(seeded.id, date(2024, 3, 1))
        second = make_charge(seeded.id, date(2024, 3, 16))
        headers = {"Authorization": f"Bearer {make_api_token('user-1')}"}

        page = api.get("/api/integrations/cobrancas", params={"limit": 1}, headers=headers).json()

        assert page["pagination"] == {"limit": 1, "nextCursor": str(first.id), "hasNextPage": True}
        assert page["data"][0]["category"] == "overdue"
        assert page["data"][0]["client"]["nome"] == "Maria Silva"

        following = api.get(
            "/api/integrations/cobrancas",
            params={"limit": 1, "cursor": page["pagination"]["nextCursor"]},
            headers=headers,
        ).json()
        assert [item["id"] for item in following["data"]] == [second.id]
        assert following["pagination"]["hasNextPage"] is False

    def test_zero_limit_uses_default_page_size(self, api, seeded, make_charge, make_api_token):
        make_charge(seeded.id, date(2024, 3, 1))
        headers = {"Authorization": f"Bearer {make_api_token('user-1')}"}

        response = api.get("/api/integrations/cobrancas", params={"limit": 0}, headers=headers)

        assert response.status_code == 200
        assert response.json()["pagination"]["limit"] == 50

    def test_invalid_cursor(self, api, seeded, make_api_token):
        headers = {"Authorization": f"Bearer {make_api_token('user-1')}"}

        response = api.get("/api/integrations/cobrancas", params={"cursor": "abc"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Cursor inválido"


class TestAdminAndDashboardApi:

    def test_generate_bills_requires_admin(self, api, seeded, auth_headers):
        response = api.post("/api/admin/generate-bills", json={}, headers=auth_headers("user-1"))

        assert response.status_code == 403

    def test_generate_bills(self, api, seeded, auth_headers):
        """Test a manual run for an explicit month."""
        headers = auth_headers("admin")

        response = api.post("/api/admin/generate-bills", json={"month": 2, "year": 2024}, headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["period"] == {"month": 2, "year": 2024}
        assert body["result"] == {"total": 1, "created": 1, "duplicates": 0, "errors": 0, "errorDetails": []}
        assert body["message"] == "Geração concluída para 02/2024: 1 criadas, 0 duplicadas, 0 erros"

    def test_generate_bills_defaults_to_next_month(self, api, seeded, auth_headers):
        response = api.post("/api/admin/generate-bills", headers=auth_headers("admin"))

        assert response.json()["period"] == {"month": 4, "year": 2024}

    def test_generate_bills_unknown_user(self, api, seeded, auth_headers):
        response = api.post(
            "/api/admin/generate-bills",
            json={"userId": "ghost"},
            headers=auth_headers("admin"),
        )

        assert response.status_code == 404

    def test_generate_bills_invalid_month(self, api, seeded, auth_headers):
        response = api.post("/api/admin/generate-bills", json={"month": 13}, headers=auth_headers("admin"))

        assert response.status_code == 400
        assert response.json()["message"] == "Mês inválido. Deve ser entre 1 e 12"

    def test_dashboard(self, api, seeded, make_charge, auth_headers):
        make_charge(seeded.id, date(2024, 3, 10))

        response = api.get("/api/dashboard/stats", headers=auth_headers("user-1"))

        assert response.status_code == 200
        body = response.json()
        assert body["activeClients"] == 1
        assert body["overdueAmount"] == 100.0
        assert body["overdueCount"] == 1


class TestApplicationRoutes:

    def test_health(self, api):
        response = api.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_unknown_route(self, api):
        response = api.get("/api/unknown")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"
