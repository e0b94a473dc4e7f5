"""
API tests for company member endpoints.

Tests cover:
- Listing and inviting members as administrator
- Role changes
- 403 for non-administrators
"""

from fastapi.testclient import TestClient

from tests.conftest import TEST_PASSWORD, sign_in_headers


class TestMembresAPI:
    """Tests for /membres endpoints."""

    def test_invite_and_list(self, client: TestClient, auth_headers):
        response = client.post("/membres", json={
            "email": "compta@example.com",
            "password": TEST_PASSWORD,
            "nom": "Ouattara",
            "role": "comptable",
        }, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["role"] == "comptable"
        members = client.get("/membres", headers=auth_headers).json()
        assert {m["email"] for m in members} == {"admin@example.com", "compta@example.com"}

    def test_invited_member_works_in_the_company(self, client: TestClient, auth_headers):
        client.post("/membres", json={"email": "compta@example.com", "password": TEST_PASSWORD}, headers=auth_headers)

        member_headers = sign_in_headers(client, "compta@example.com")
        session = client.get("/auth/session", headers=member_headers).json()

        assert session["needs_setup"] is False
        assert session["entreprise"]["nom_entreprise"] == "API Test SARL"
        assert client.get("/comptes", headers=member_headers).status_code == 200
        assert client.get("/membres", headers=member_headers).status_code == 403

    def test_change_role(self, client: TestClient, auth_headers):
        member = client.post(
            "/membres", json={"email": "m@example.com", "password": TEST_PASSWORD}, headers=auth_headers
        ).json()

        response = client.patch(
            f"/membres/{member['user_id']}/role", json={"role": "gestionnaire"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["role"] == "gestionnaire"

    def test_change_own_role_returns_400(self, client: TestClient, auth_headers):
        session = client.get("/auth/session", headers=auth_headers).json()

        response = client.patch(
            f"/membres/{session['user_id']}/role", json={"role": "utilisateur"}, headers=auth_headers
        )

        assert response.status_code == 400

    def test_invite_existing_email_returns_400(self, client: TestClient, auth_headers):
        response = client.post(
            "/membres", json={"email": "admin@example.com", "password": TEST_PASSWORD}, headers=auth_headers
        )

        assert response.status_code == 400
