"""
API tests for journal entry endpoints.

Tests cover:
- Recording draft and validated entries
- Balance enforcement on validation (global error handler)
- Validating and deleting drafts
- Filters and 404 responses
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from tests.conftest import api_compte_id, api_journal_id


@pytest.fixture
def entry_payload(client: TestClient, auth_headers, api_exercice_id):
    """Builder of POST /ecritures bodies on accounts 521/101."""

    def _payload(debit: str = "150000", credit: str = "150000", statut: str = "Validee") -> dict:
        return {
            "journal_id": api_journal_id(client, auth_headers, "OD"),
            "date_ecriture": "2024-02-15",
            "libelle_operation": "Apport en capital",
            "statut": statut,
            "reference_piece": "PV-001",
            "lignes": [
                {"compte_id": api_compte_id(client, auth_headers, "521"), "montant_debit": debit},
                {"compte_id": api_compte_id(client, auth_headers, "101"), "montant_credit": credit},
            ],
        }

    return _payload


class TestCreateEcritureAPI:
    """Tests for POST /ecritures."""

    def test_create_validated_entry(self, client: TestClient, auth_headers, entry_payload, api_exercice_id):
        response = client.post("/ecritures", json=entry_payload(), headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["statut"] == "Validee"
        assert data["exercice_id"] == api_exercice_id
        assert Decimal(data["total_debit"]) == Decimal("150000")
        assert Decimal(data["total_credit"]) == Decimal("150000")
        assert len(data["lignes"]) == 2

    def test_unbalanced_validated_entry_returns_400(self, client: TestClient, auth_headers, entry_payload):
        """
        GIVEN lines of 150 000 debit and 100 000 credit
        WHEN I POST them as validated
        THEN response is 400 with the UNBALANCED_ENTRY code
        """
        response = client.post("/ecritures", json=entry_payload(credit="100000"), headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "UNBALANCED_ENTRY"

    def test_unbalanced_draft_is_accepted(self, client: TestClient, auth_headers, entry_payload):
        response = client.post(
            "/ecritures", json=entry_payload(credit="100000", statut="Brouillon"), headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["statut"] == "Brouillon"

    def test_date_without_open_exercise_returns_400(self, client: TestClient, auth_headers, entry_payload):
        payload = entry_payload()
        payload["date_ecriture"] = "2019-05-01"

        response = client.post("/ecritures", json=payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "CLOSED_EXERCISE"

    def test_missing_lines_returns_400(self, client: TestClient, auth_headers, entry_payload):
        payload = entry_payload()
        payload["lignes"] = []

        response = client.post("/ecritures", json=payload, headers=auth_headers)

        assert response.status_code == 400


class TestEcritureLifecycleAPI:
    """Tests for validation, deletion and listing."""

    def test_validate_draft(self, client: TestClient, auth_headers, entry_payload):
        draft = client.post("/ecritures", json=entry_payload(statut="Brouillon"), headers=auth_headers).json()

        response = client.post(f"/ecritures/{draft['id_ecriture']}/validation", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["statut"] == "Validee"

    def test_validate_unbalanced_draft_returns_400(self, client: TestClient, auth_headers, entry_payload):
        draft = client.post(
            "/ecritures", json=entry_payload(credit="1", statut="Brouillon"), headers=auth_headers
        ).json()

        response = client.post(f"/ecritures/{draft['id_ecriture']}/validation", headers=auth_headers)

        assert response.status_code == 400

    def test_delete_draft_and_refuse_validated(self, client: TestClient, auth_headers, entry_payload):
        draft = client.post("/ecritures", json=entry_payload(statut="Brouillon"), headers=auth_headers).json()
        validated = client.post("/ecritures", json=entry_payload(), headers=auth_headers).json()

        assert client.delete(f"/ecritures/{draft['id_ecriture']}", headers=auth_headers).status_code == 204
        assert client.get(f"/ecritures/{draft['id_ecriture']}", headers=auth_headers).status_code == 404
        assert client.delete(f"/ecritures/{validated['id_ecriture']}", headers=auth_headers).status_code == 400

    def test_list_with_status_filter(self, client: TestClient, auth_headers, entry_payload, api_exercice_id):
        client.post("/ecritures", json=entry_payload(statut="Brouillon"), headers=auth_headers)
        client.post("/ecritures", json=entry_payload(), headers=auth_headers)

        drafts = client.get("/ecritures", params={"statut": "Brouillon"}, headers=auth_headers).json()
        everything = client.get(
            "/ecritures", params={"exercice_id": api_exercice_id}, headers=auth_headers
        ).json()

        assert len(drafts) == 1
        assert len(everything) == 2

    def test_unknown_entry_returns_404(self, client: TestClient, auth_headers):
        assert client.get("/ecritures/missing", headers=auth_headers).status_code == 404
