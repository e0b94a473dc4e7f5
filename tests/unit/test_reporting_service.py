"""
Unit tests for the financial statements and the dashboard.

Tests cover:
- compute_compte_de_resultat rubrics by account prefix
- compute_bilan classification and equilibrium
- ReportingService on recorded entries
- Dashboard figures of the current exercise
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from comptapro.core.exceptions import NotFoundError
from comptapro.domain.models import StatutPiece, TypeDocument
from comptapro.domain.views import BalanceLine
from comptapro.services import FactureCreate, FactureLigneCreate, ReportingService
from comptapro.services.reporting_service import compute_bilan, compute_compte_de_resultat


def _line(numero: str, debit: str = "0", credit: str = "0") -> BalanceLine:
    return BalanceLine(
        id_exercice="ex-1",
        id_compte=f"c-{numero}",
        numero_compte=numero,
        libelle_compte=f"Compte {numero}",
        classe_compte=int(numero[0]),
        total_debit=Decimal(debit),
        total_credit=Decimal(credit),
    )


# =============================================================================
# INCOME STATEMENT COMPUTATION TESTS
# =============================================================================


class TestComputeCompteDeResultat:
    """Tests for the income statement rubrics."""

    def test_rubrics_by_prefix(self):
        balance = [
            _line("701", credit="1000000"),
            _line("706", credit="200000"),
            _line("601", debit="400000"),
            _line("6031", credit="50000"),
            _line("622", debit="100000"),
            _line("771", credit="30000"),
            _line("671", debit="20000"),
            _line("822", credit="80000"),
            _line("812", debit="60000"),
        ]

        cr = compute_compte_de_resultat(balance)

        assert cr.ventes_marchandises == Decimal("1000000")
        assert cr.achats_marchandises == Decimal("350000")
        assert cr.marge_commerciale == Decimal("650000")
        assert cr.autres_produits_exploitation == Decimal("200000")
        assert cr.autres_charges_exploitation == Decimal("100000")
        assert cr.resultat_exploitation == Decimal("750000")
        assert cr.resultat_financier == Decimal("10000")
        assert cr.resultat_activites_ordinaires == Decimal("760000")
        assert cr.resultat_hao == Decimal("20000")
        assert cr.resultat_net == Decimal("780000")

    def test_balance_sheet_accounts_are_ignored(self):
        cr = compute_compte_de_resultat([_line("521", debit="500"), _line("101", credit="500")])

        assert cr.resultat_net == Decimal("0")

    def test_empty_balance(self):
        assert compute_compte_de_resultat([]).resultat_net == Decimal("0")


# =============================================================================
# BALANCE SHEET COMPUTATION TESTS
# =============================================================================


class TestComputeBilan:
    """Tests for the balance sheet classification."""

    def test_classification(self):
        balance = [
            _line("101", credit="1000000"),
            _line("162", credit="500000"),
            _line("245", debit="600000"),
            _line("2845", credit="120000"),
            _line("411", debit="300000"),
            _line("401", credit="250000"),
            _line("521", debit="970000"),
            _line("701", credit="300000"),
            _line("681", debit="120000"),
            _line("601", debit="180000", credit="0"),
        ]

        bilan = compute_bilan(balance)

        assert bilan.capitaux_propres == Decimal("1000000")
        assert bilan.dettes_long_terme == Decimal("500000")
        assert bilan.actif_immobilise == Decimal("480000")
        assert bilan.actif_circulant == Decimal("300000")
        assert bilan.passif_circulant == Decimal("250000")
        assert bilan.tresorerie_actif == Decimal("970000")
        assert bilan.resultat == Decimal("0")
        assert bilan.total_actif == bilan.total_passif

    def test_bank_overdraft_goes_to_passif(self):
        bilan = compute_bilan([_line("521", credit="5000"), _line("411", debit="5000")])

        assert bilan.tresorerie_passif == Decimal("5000")
        assert bilan.tresorerie_actif == Decimal("0")
        assert bilan.total_actif == bilan.total_passif


# =============================================================================
# SERVICE TESTS
# =============================================================================


class TestReportingService:
    """Tests for statements computed from recorded entries."""

    def test_bilan_balances_after_activity(
        self,
        reporting_service: ReportingService,
        entry_factory,
        entreprise_id,
        exercice_2024,
    ):
        """
        GIVEN capital, a sale and a purchase recorded in 2024
        WHEN I compute the bilan
        THEN the result is added to equity and both sides are equal
        """
        entry_factory("521", "101", Decimal("1000000"))
        entry_factory("411", "701", Decimal("500000"))
        entry_factory("601", "401", Decimal("200000"))

        bilan = reporting_service.get_bilan(entreprise_id, exercice_2024.id_exercice)

        assert bilan.resultat == Decimal("300000")
        assert bilan.capitaux_propres == Decimal("1300000")
        assert bilan.total_actif == Decimal("1500000")
        assert bilan.total_passif == Decimal("1500000")

    def test_drafts_are_excluded(
        self,
        reporting_service: ReportingService,
        entry_factory,
        entreprise_id,
        exercice_2024,
    ):
        entry_factory("411", "701", Decimal("500000"), statut=StatutPiece.BROUILLON)

        cr = reporting_service.get_compte_de_resultat(entreprise_id, exercice_2024.id_exercice)

        assert cr.ventes_marchandises == Decimal("0")

    def test_unknown_exercise_raises(self, reporting_service: ReportingService, entreprise_id):
        with pytest.raises(NotFoundError):
            reporting_service.get_bilan(entreprise_id, "missing")


# =============================================================================
# DASHBOARD TESTS
# =============================================================================


class TestDashboard:
    """Tests for the dashboard of the current exercise."""

    def test_dashboard_figures(
        self,
        reporting_service: ReportingService,
        invoicing_service,
        exercise_service,
        entry_factory,
        client_tiers,
        entreprise_id,
    ):
        """
        GIVEN a validated sale, a draft sale and a cash deposit in the current exercise
        WHEN I read the dashboard
        THEN revenue counts the validated TTC only and treasury reads 52/57 accounts
        """
        exercice = exercise_service.get_current_open(entreprise_id)
        day = exercice.date_debut + timedelta(days=10)
        entry_factory("571", "101", Decimal("250000"), day=day)

        for statut in (StatutPiece.VALIDEE, StatutPiece.BROUILLON):
            invoicing_service.create_facture(entreprise_id, TypeDocument.VENTE, FactureCreate(
                tiers_id=client_tiers.id_tiers,
                exercice_id=exercice.id_exercice,
                date_facture=day,
                statut=statut,
                lignes=[FactureLigneCreate(description="Prestation", prix_unitaire_ht=Decimal("100000"))],
            ))

        kpis = reporting_service.get_dashboard(entreprise_id)

        assert kpis.id_exercice == exercice.id_exercice
        assert kpis.chiffre_affaires == Decimal("118000")
        assert kpis.total_achats == Decimal("0")
        assert kpis.resultat_net == Decimal("100000")
        assert kpis.tresorerie == Decimal("250000")
        assert kpis.factures_brouillon == 1
