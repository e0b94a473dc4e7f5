"""
API tests for third parties and invoices.

Tests cover:
- Creating and filtering tiers
- Invoice numbering endpoint
- Sales and purchase invoices with their postings
- Draft validation and deletion
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from tests.conftest import api_compte_id


@pytest.fixture
def tiers_ids(client: TestClient, auth_headers) -> dict[str, str]:
    ids = {}
    for nom, type_tiers in (("Client Bouaké", "Client"), ("Fournisseur Lomé", "Fournisseur")):
        response = client.post("/tiers", json={"nom_tiers": nom, "type_tiers": type_tiers}, headers=auth_headers)
        assert response.status_code == 201, response.text
        ids[type_tiers] = response.json()["id_tiers"]
    return ids


@pytest.fixture
def sale_payload(tiers_ids, api_exercice_id):
    def _payload(statut: str = "Validee", **overrides) -> dict:
        payload = {
            "tiers_id": tiers_ids["Client"],
            "exercice_id": api_exercice_id,
            "date_facture": "2024-04-12",
            "statut": statut,
            "lignes": [
                {"description": "Ciment 50 kg", "quantite": "20", "prix_unitaire_ht": "5000"},
                {"description": "Livraison", "quantite": "1", "prix_unitaire_ht": "10000", "taux_tva": "0"},
            ],
        }
        payload.update(overrides)
        return payload

    return _payload


class TestTiersAPI:
    """Tests for /tiers endpoints."""

    def test_filter_by_type(self, client: TestClient, auth_headers, tiers_ids):
        response = client.get("/tiers", params={"type_tiers": "Fournisseur"}, headers=auth_headers)

        assert response.status_code == 200
        assert [t["id_tiers"] for t in response.json()] == [tiers_ids["Fournisseur"]]

    def test_blank_name_returns_400(self, client: TestClient, auth_headers):
        response = client.post("/tiers", json={"nom_tiers": " ", "type_tiers": "Client"}, headers=auth_headers)

        assert response.status_code == 400


class TestFacturesAPI:
    """Tests for /factures endpoints."""

    def test_next_number(self, client: TestClient, auth_headers):
        response = client.get(
            "/factures/prochain-numero",
            params={"type_document": "ACHAT", "annee": 2024},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"numero_facture": "ACH-2024-0001"}

    def test_create_validated_sale(self, client: TestClient, auth_headers, sale_payload):
        """
        GIVEN 20 x 5 000 at 18% plus 10 000 of delivery at 0%
        WHEN I POST a validated sale
        THEN totals are 110 000 HT, 18 000 TVA, 128 000 TTC and it is posted
        """
        response = client.post("/factures/ventes", json=sale_payload(), headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["numero_facture"] == "FAC-2024-0001"
        assert data["type_document"] == "VENTE"
        assert Decimal(data["montant_ht"]) == Decimal("110000")
        assert Decimal(data["montant_tva"]) == Decimal("18000")
        assert Decimal(data["montant_ttc"]) == Decimal("128000")
        assert data["ecriture_id"] is not None

        ecriture = client.get(f"/ecritures/{data['ecriture_id']}", headers=auth_headers).json()
        assert ecriture["reference_piece"] == "FAC-2024-0001"
        assert Decimal(ecriture["total_debit"]) == Decimal("128000")

    def test_sale_to_supplier_returns_400(self, client: TestClient, auth_headers, sale_payload, tiers_ids):
        response = client.post(
            "/factures/ventes",
            json=sale_payload(tiers_id=tiers_ids["Fournisseur"]),
            headers=auth_headers,
        )

        assert response.status_code == 400

    def test_duplicate_number_returns_400(self, client: TestClient, auth_headers, sale_payload):
        client.post("/factures/ventes", json=sale_payload(numero_facture="FAC-2024-0042"), headers=auth_headers)

        response = client.post(
            "/factures/ventes", json=sale_payload(numero_facture="FAC-2024-0042"), headers=auth_headers
        )

        assert response.status_code == 400
        assert "existe déjà" in response.json()["detail"]

    def test_create_purchase(self, client: TestClient, auth_headers, tiers_ids, api_exercice_id):
        response = client.post("/factures/achats", json={
            "tiers_id": tiers_ids["Fournisseur"],
            "exercice_id": api_exercice_id,
            "date_facture": "2024-03-01",
            "statut": "Validee",
            "lignes": [{
                "description": "Fournitures de bureau",
                "prix_unitaire_ht": "25000",
                "compte_id": api_compte_id(client, auth_headers, "604"),
            }],
        }, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["numero_facture"] == "ACH-2024-0001"
        assert Decimal(data["montant_ttc"]) == Decimal("29500")

    def test_validate_and_delete(self, client: TestClient, auth_headers, sale_payload):
        first = client.post("/factures/ventes", json=sale_payload(statut="Brouillon"), headers=auth_headers).json()
        second = client.post("/factures/ventes", json=sale_payload(statut="Brouillon"), headers=auth_headers).json()

        validated = client.post(f"/factures/{first['id_facture']}/validation", headers=auth_headers)
        deleted = client.delete(f"/factures/{second['id_facture']}", headers=auth_headers)

        assert validated.status_code == 200
        assert validated.json()["statut"] == "Validee"
        assert deleted.status_code == 204
        assert client.delete(f"/factures/{first['id_facture']}", headers=auth_headers).status_code == 400
        assert client.get(f"/factures/{second['id_facture']}", headers=auth_headers).status_code == 404

    def test_list_filters(self, client: TestClient, auth_headers, sale_payload):
        client.post("/factures/ventes", json=sale_payload(statut="Brouillon"), headers=auth_headers)
        client.post("/factures/ventes", json=sale_payload(), headers=auth_headers)

        drafts = client.get("/factures", params={"statut": "Brouillon"}, headers=auth_headers).json()
        purchases = client.get("/factures", params={"type_document": "ACHAT"}, headers=auth_headers).json()

        assert len(drafts) == 1
        assert purchases == []
