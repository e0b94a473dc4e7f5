"""
Unit tests for InvoicingService.

Tests cover:
- Third parties
- Invoice numbering
- Totals (HT, TVA, TTC) and line filtering
- Automatic postings of validated sales and purchases
- Validation errors and draft lifecycle
"""

from datetime import date
from decimal import Decimal

import pytest

from comptapro.core.exceptions import AccountInUseError, NotFoundError, ValidationError
from comptapro.domain.models import StatutPiece, TypeDocument, TypeTiers
from comptapro.services import FactureCreate, FactureLigneCreate, InvoicingService


def _movements_by_account(ledger_service, chart_service, entreprise_id, ecriture_id):
    """{numero_compte: (debit, credit)} of a posted entry."""
    ecriture = ledger_service.get_entry(entreprise_id, ecriture_id)
    result = {}
    for ligne in ecriture.lignes:
        numero = chart_service.get_account(entreprise_id, ligne.compte_id).numero_compte
        result[numero] = (ligne.montant_debit, ligne.montant_credit)
    return result


# =============================================================================
# THIRD PARTY TESTS
# =============================================================================


class TestTiers:
    """Tests for customers and suppliers."""

    def test_create_and_filter_tiers(self, invoicing_service: InvoicingService, entreprise_id):
        invoicing_service.create_tiers(entreprise_id, "Client A", TypeTiers.CLIENT)
        invoicing_service.create_tiers(entreprise_id, "Fournisseur B", TypeTiers.FOURNISSEUR)

        clients = invoicing_service.list_tiers(entreprise_id, TypeTiers.CLIENT)

        assert [t.nom_tiers for t in clients] == ["Client A"]
        assert len(invoicing_service.list_tiers(entreprise_id)) == 2

    def test_create_tiers_requires_name(self, invoicing_service: InvoicingService, entreprise_id):
        with pytest.raises(ValidationError, match="nom du tiers"):
            invoicing_service.create_tiers(entreprise_id, "  ", TypeTiers.CLIENT)


# =============================================================================
# NUMBERING TESTS
# =============================================================================


class TestNumbering:
    """Tests for FAC-/ACH- numbering."""

    def test_first_number_of_the_year(self, invoicing_service: InvoicingService, entreprise_id):
        assert invoicing_service.next_numero(entreprise_id, TypeDocument.VENTE, 2024) == "FAC-2024-0001"
        assert invoicing_service.next_numero(entreprise_id, TypeDocument.ACHAT, 2024) == "ACH-2024-0001"

    def test_numbers_follow_the_highest_suffix(
        self,
        invoicing_service: InvoicingService,
        entreprise_id,
        sale_factory,
    ):
        """
        GIVEN sales FAC-2024-0001 (automatic) and FAC-2024-0007 (manual)
        WHEN I ask for the next number
        THEN FAC-2024-0008 is proposed
        """
        first = sale_factory(statut=StatutPiece.BROUILLON)
        sale_factory(statut=StatutPiece.BROUILLON, numero="FAC-2024-0007")

        assert first.numero_facture == "FAC-2024-0001"
        assert invoicing_service.next_numero(entreprise_id, TypeDocument.VENTE, 2024) == "FAC-2024-0008"

    def test_duplicate_number_raises(self, sale_factory):
        sale_factory(statut=StatutPiece.BROUILLON, numero="FAC-2024-0001")

        with pytest.raises(ValidationError, match="existe déjà"):
            sale_factory(statut=StatutPiece.BROUILLON, numero="FAC-2024-0001")


# =============================================================================
# SALES TESTS
# =============================================================================


class TestSales:
    """Tests for sales invoices."""

    def test_totals_with_default_vat(self, sale_factory):
        facture = sale_factory(prix=Decimal("100000"), quantite=Decimal("2"), statut=StatutPiece.BROUILLON)

        assert facture.montant_ht == Decimal("200000.00")
        assert facture.montant_tva == Decimal("36000.00")
        assert facture.montant_ttc == Decimal("236000.00")
        assert facture.lignes[0].taux_tva == Decimal("18")
        assert facture.ecriture_id is None

    def test_validated_sale_posts_in_vt(
        self,
        sale_factory,
        ledger_service,
        chart_service,
        journal,
        entreprise_id,
    ):
        """
        GIVEN a sale of 2 x 100 000 HT at 18%
        WHEN it is created as validated
        THEN VT receives debit 411 236 000, credit 701 200 000, credit 443 36 000
        """
        facture = sale_factory(prix=Decimal("100000"), quantite=Decimal("2"))

        assert facture.statut == StatutPiece.VALIDEE
        movements = _movements_by_account(ledger_service, chart_service, entreprise_id, facture.ecriture_id)
        assert movements == {
            "411": (Decimal("236000.00"), Decimal("0.00")),
            "701": (Decimal("0.00"), Decimal("200000.00")),
            "443": (Decimal("0.00"), Decimal("36000.00")),
        }
        ecriture = ledger_service.get_entry(entreprise_id, facture.ecriture_id)
        assert ecriture.journal_id == journal("VT").id_journal
        assert ecriture.reference_piece == facture.numero_facture

    def test_zero_vat_sale_posts_two_lines(
        self,
        sale_factory,
        ledger_service,
        entreprise_id,
    ):
        facture = sale_factory(prix=Decimal("50000"), taux_tva=Decimal("0"))

        ecriture = ledger_service.get_entry(entreprise_id, facture.ecriture_id)
        assert facture.montant_tva == Decimal("0.00")
        assert len(ecriture.lignes) == 2

    def test_validate_draft_sale(
        self,
        invoicing_service: InvoicingService,
        sale_factory,
        entreprise_id,
    ):
        draft = sale_factory(statut=StatutPiece.BROUILLON)

        validated = invoicing_service.validate_facture(entreprise_id, draft.id_facture)

        assert validated.statut == StatutPiece.VALIDEE
        assert validated.ecriture_id is not None
        with pytest.raises(ValidationError, match="déjà validée"):
            invoicing_service.validate_facture(entreprise_id, draft.id_facture)

    def test_sale_to_a_supplier_raises(
        self,
        invoicing_service: InvoicingService,
        entreprise_id,
        fournisseur_tiers,
        exercice_2024,
    ):
        with pytest.raises(ValidationError, match="n'est pas un client"):
            invoicing_service.create_facture(entreprise_id, TypeDocument.VENTE, FactureCreate(
                tiers_id=fournisseur_tiers.id_tiers,
                exercice_id=exercice_2024.id_exercice,
                date_facture=date(2024, 5, 10),
                lignes=[FactureLigneCreate(description="Marchandises", prix_unitaire_ht=Decimal("10"))],
            ))

    def test_missing_customer_raises(
        self,
        invoicing_service: InvoicingService,
        entreprise_id,
        exercice_2024,
    ):
        with pytest.raises(ValidationError, match="Client, numéro et exercice obligatoires"):
            invoicing_service.create_facture(entreprise_id, TypeDocument.VENTE, FactureCreate(
                tiers_id=None,
                exercice_id=exercice_2024.id_exercice,
                date_facture=date(2024, 5, 10),
            ))

    def test_date_outside_exercise_raises(self, sale_factory):
        with pytest.raises(ValidationError, match="comprise dans l'exercice"):
            sale_factory(day=date(2025, 2, 1))

    def test_only_complete_lines_are_kept(
        self,
        invoicing_service: InvoicingService,
        entreprise_id,
        client_tiers,
        exercice_2024,
    ):
        facture = invoicing_service.create_facture(entreprise_id, TypeDocument.VENTE, FactureCreate(
            tiers_id=client_tiers.id_tiers,
            exercice_id=exercice_2024.id_exercice,
            date_facture=date(2024, 5, 10),
            lignes=[
                FactureLigneCreate(description="Riz", quantite=Decimal("10"), prix_unitaire_ht=Decimal("1500")),
                FactureLigneCreate(description="", quantite=Decimal("1"), prix_unitaire_ht=Decimal("99")),
                FactureLigneCreate(description="Gratuit", quantite=Decimal("1"), prix_unitaire_ht=Decimal("0")),
            ],
        ))

        assert len(facture.lignes) == 1
        assert facture.montant_ht == Decimal("15000.00")

    def test_no_valid_line_raises(self, sale_factory):
        with pytest.raises(ValidationError, match="Au moins une ligne valide requise"):
            sale_factory(prix=Decimal("0"))

    def test_validated_sale_with_incomplete_setup_creates_nothing(
        self,
        invoicing_service: InvoicingService,
        chart_service,
        sale_factory,
        entreprise_id,
        compte,
    ):
        """
        GIVEN the company chart lacks account 443
        WHEN a validated sale is created
        THEN it is refused and no invoice is stored
        """
        chart_service.delete_account(entreprise_id, compte("443").id_compte)

        with pytest.raises(ValidationError, match="443"):
            sale_factory()

        assert invoicing_service.list_factures(entreprise_id) == []


# =============================================================================
# PURCHASE TESTS
# =============================================================================


class TestPurchases:
    """Tests for purchase invoices."""

    def test_validated_purchase_posts_in_ac(
        self,
        invoicing_service: InvoicingService,
        ledger_service,
        chart_service,
        entreprise_id,
        fournisseur_tiers,
        exercice_2024,
        compte,
    ):
        """
        GIVEN a purchase of 50 000 HT on account 601 at 18%
        WHEN it is created as validated
        THEN AC receives debit 601 50 000, debit 445 9 000, credit 401 59 000
        """
        facture = invoicing_service.create_facture(entreprise_id, TypeDocument.ACHAT, FactureCreate(
            tiers_id=fournisseur_tiers.id_tiers,
            exercice_id=exercice_2024.id_exercice,
            date_facture=date(2024, 4, 2),
            statut=StatutPiece.VALIDEE,
            lignes=[FactureLigneCreate(
                description="Stock de riz",
                quantite=Decimal("3"),
                prix_unitaire_ht=Decimal("50000"),
                compte_id=compte("601").id_compte,
            )],
        ))

        assert facture.numero_facture == "ACH-2024-0001"
        assert facture.montant_ttc == Decimal("59000.00")
        movements = _movements_by_account(ledger_service, chart_service, entreprise_id, facture.ecriture_id)
        assert movements == {
            "601": (Decimal("50000.00"), Decimal("0.00")),
            "445": (Decimal("9000.00"), Decimal("0.00")),
            "401": (Decimal("0.00"), Decimal("59000.00")),
        }

    def test_purchase_line_without_account_is_skipped(
        self,
        invoicing_service: InvoicingService,
        entreprise_id,
        fournisseur_tiers,
        exercice_2024,
    ):
        with pytest.raises(ValidationError, match="Au moins une ligne valide requise"):
            invoicing_service.create_facture(entreprise_id, TypeDocument.ACHAT, FactureCreate(
                tiers_id=fournisseur_tiers.id_tiers,
                exercice_id=exercice_2024.id_exercice,
                date_facture=date(2024, 4, 2),
                lignes=[FactureLigneCreate(description="Sans compte", prix_unitaire_ht=Decimal("100"))],
            ))

    def test_purchase_line_on_a_non_expense_account_raises(
        self,
        invoicing_service: InvoicingService,
        entreprise_id,
        fournisseur_tiers,
        exercice_2024,
        compte,
    ):
        with pytest.raises(ValidationError, match="521 n'est pas un compte de charge"):
            invoicing_service.create_facture(entreprise_id, TypeDocument.ACHAT, FactureCreate(
                tiers_id=fournisseur_tiers.id_tiers,
                exercice_id=exercice_2024.id_exercice,
                date_facture=date(2024, 4, 2),
                lignes=[FactureLigneCreate(
                    description="Frais bancaires",
                    prix_unitaire_ht=Decimal("2500"),
                    compte_id=compte("521").id_compte,
                )],
            ))

        assert invoicing_service.list_factures(entreprise_id) == []

    def test_sale_line_on_a_non_revenue_account_raises(
        self,
        invoicing_service: InvoicingService,
        entreprise_id,
        client_tiers,
        exercice_2024,
        compte,
    ):
        with pytest.raises(ValidationError, match="601 n'est pas un compte de produit"):
            invoicing_service.create_facture(entreprise_id, TypeDocument.VENTE, FactureCreate(
                tiers_id=client_tiers.id_tiers,
                exercice_id=exercice_2024.id_exercice,
                date_facture=date(2024, 4, 2),
                lignes=[FactureLigneCreate(
                    description="Marchandises",
                    quantite=Decimal("1"),
                    prix_unitaire_ht=Decimal("1000"),
                    compte_id=compte("601").id_compte,
                )],
            ))

    def test_account_of_a_draft_purchase_line_cannot_be_deleted(
        self,
        invoicing_service: InvoicingService,
        chart_service,
        entreprise_id,
        fournisseur_tiers,
        exercice_2024,
        compte,
    ):
        invoicing_service.create_facture(entreprise_id, TypeDocument.ACHAT, FactureCreate(
            tiers_id=fournisseur_tiers.id_tiers,
            exercice_id=exercice_2024.id_exercice,
            date_facture=date(2024, 4, 2),
            lignes=[FactureLigneCreate(
                description="Fournitures de bureau",
                prix_unitaire_ht=Decimal("12000"),
                compte_id=compte("604").id_compte,
            )],
        ))

        with pytest.raises(AccountInUseError):
            chart_service.delete_account(entreprise_id, compte("604").id_compte)


# =============================================================================
# DELETE TESTS
# =============================================================================


class TestDeleteInvoice:
    """Tests for invoice deletion."""

    def test_delete_draft(self, invoicing_service: InvoicingService, sale_factory, entreprise_id):
        draft = sale_factory(statut=StatutPiece.BROUILLON)

        invoicing_service.delete_facture(entreprise_id, draft.id_facture)

        with pytest.raises(NotFoundError):
            invoicing_service.get_facture(entreprise_id, draft.id_facture)

    def test_delete_validated_raises(self, invoicing_service: InvoicingService, sale_factory, entreprise_id):
        facture = sale_factory()

        with pytest.raises(ValidationError, match="validée ne peut pas être supprimée"):
            invoicing_service.delete_facture(entreprise_id, facture.id_facture)
