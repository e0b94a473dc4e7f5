"""
Unit tests for PayrollService.

Tests cover:
- Employee CRUD and validation
- Payslip amounts and period checks
- PA postings of validated payslips
"""

from datetime import date
from decimal import Decimal

import pytest

from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.domain.models import StatutPiece
from comptapro.services import BulletinCreate, EmployeCreate, PayrollService


@pytest.fixture
def employe(payroll_service: PayrollService, entreprise_id):
    return payroll_service.create_employe(entreprise_id, EmployeCreate(
        nom="Koné",
        prenom="Awa",
        poste="Comptable",
        salaire_de_base=Decimal("350000"),
    ))


@pytest.fixture
def bulletin_factory(payroll_service: PayrollService, entreprise_id, employe, exercice_2024):
    def _create(
        salaire_brut=None,
        salariales: Decimal = Decimal("22050"),
        patronales: Decimal = Decimal("57400"),
        statut: StatutPiece = StatutPiece.BROUILLON,
        periode_fin: date = date(2024, 3, 31),
    ):
        return payroll_service.create_bulletin(entreprise_id, BulletinCreate(
            employe_id=employe.id_employe,
            exercice_id=exercice_2024.id_exercice,
            periode_fin=periode_fin,
            salaire_brut=salaire_brut,
            cotisations_salariales=salariales,
            cotisations_patronales=patronales,
            statut=statut,
        ))

    return _create


# =============================================================================
# EMPLOYEE TESTS
# =============================================================================


class TestEmployes:
    """Tests for the employee register."""

    def test_create_employe(self, employe, payroll_service: PayrollService, entreprise_id):
        assert employe.salaire_de_base == Decimal("350000.00")
        assert [e.id_employe for e in payroll_service.list_employes(entreprise_id)] == [employe.id_employe]

    def test_names_are_required(self, payroll_service: PayrollService, entreprise_id):
        with pytest.raises(ValidationError, match="Nom et prénom obligatoires"):
            payroll_service.create_employe(entreprise_id, EmployeCreate(nom="Koné", prenom=" "))

    def test_update_employe(self, employe, payroll_service: PayrollService, entreprise_id):
        updated = payroll_service.update_employe(entreprise_id, employe.id_employe, EmployeCreate(
            nom="Koné",
            prenom="Awa",
            poste="Chef comptable",
            salaire_de_base=Decimal("420000"),
        ))

        assert updated.poste == "Chef comptable"
        assert payroll_service.get_employe(entreprise_id, employe.id_employe).salaire_de_base == Decimal("420000.00")

    def test_delete_employe_without_payslips(self, employe, payroll_service: PayrollService, entreprise_id):
        payroll_service.delete_employe(entreprise_id, employe.id_employe)

        with pytest.raises(NotFoundError):
            payroll_service.get_employe(entreprise_id, employe.id_employe)

    def test_delete_employe_with_payslips_raises(
        self,
        employe,
        bulletin_factory,
        payroll_service: PayrollService,
        entreprise_id,
    ):
        bulletin_factory()

        with pytest.raises(ValidationError, match="bulletins de paie"):
            payroll_service.delete_employe(entreprise_id, employe.id_employe)


# =============================================================================
# PAYSLIP TESTS
# =============================================================================


class TestBulletins:
    """Tests for payslips and their postings."""

    def test_draft_defaults_to_base_salary(self, bulletin_factory):
        bulletin = bulletin_factory()

        assert bulletin.statut == StatutPiece.BROUILLON
        assert bulletin.salaire_brut == Decimal("350000.00")
        assert bulletin.salaire_net == Decimal("327950.00")
        assert bulletin.periode_debut == date(2024, 3, 1)
        assert bulletin.ecriture_id is None

    def test_validated_payslip_posts_in_pa(
        self,
        bulletin_factory,
        ledger_service,
        chart_service,
        journal,
        entreprise_id,
    ):
        """
        GIVEN a payslip of 350 000 brut, 22 050 employee and 57 400 employer contributions
        WHEN it is validated
        THEN PA receives 661/664 debits and 422/431 credits
        """
        bulletin = bulletin_factory(statut=StatutPiece.VALIDEE)

        ecriture = ledger_service.get_entry(entreprise_id, bulletin.ecriture_id)
        movements = {
            chart_service.get_account(entreprise_id, ligne.compte_id).numero_compte:
                (ligne.montant_debit, ligne.montant_credit)
            for ligne in ecriture.lignes
        }
        assert ecriture.journal_id == journal("PA").id_journal
        assert ecriture.libelle_operation == "Salaire 03/2024 Awa Koné"
        assert ecriture.date_ecriture == date(2024, 3, 31)
        assert movements == {
            "661": (Decimal("350000"), Decimal("0")),
            "664": (Decimal("57400"), Decimal("0")),
            "422": (Decimal("0"), Decimal("327950")),
            "431": (Decimal("0"), Decimal("79450")),
        }

    def test_validate_twice_raises(self, bulletin_factory, payroll_service: PayrollService, entreprise_id):
        bulletin = bulletin_factory()
        payroll_service.validate_bulletin(entreprise_id, bulletin.id_bulletin)

        with pytest.raises(ValidationError, match="déjà validé"):
            payroll_service.validate_bulletin(entreprise_id, bulletin.id_bulletin)

    def test_contributions_above_brut_raise(self, bulletin_factory):
        with pytest.raises(ValidationError, match="dépassent le salaire brut"):
            bulletin_factory(salaire_brut=Decimal("100000"), salariales=Decimal("100001"))

    def test_zero_brut_raises(self, bulletin_factory):
        with pytest.raises(ValidationError, match="salaire brut doit être positif"):
            bulletin_factory(salaire_brut=Decimal("0"), salariales=Decimal("0"))

    def test_validated_payslip_with_incomplete_setup_creates_nothing(
        self,
        bulletin_factory,
        payroll_service: PayrollService,
        chart_service,
        entreprise_id,
        compte,
    ):
        """
        GIVEN a chart without account 664
        WHEN a payslip is created as validated
        THEN the posting setup error is raised and no draft payslip is left
        """
        chart_service.delete_account(entreprise_id, compte("664").id_compte)

        with pytest.raises(ValidationError, match="Le compte 664 est absent"):
            bulletin_factory(
                salaire_brut=Decimal("100000"),
                salariales=Decimal("0"),
                patronales=Decimal("1000"),
                statut=StatutPiece.VALIDEE,
            )

        assert payroll_service.list_bulletins(entreprise_id) == []

    def test_period_outside_exercise_raises(self, bulletin_factory):
        with pytest.raises(ValidationError, match="comprise dans l'exercice"):
            bulletin_factory(periode_fin=date(2025, 1, 31))

    def test_list_filters(
        self,
        bulletin_factory,
        payroll_service: PayrollService,
        entreprise_id,
        employe,
        exercice_2024,
    ):
        bulletin_factory(periode_fin=date(2024, 1, 31))
        bulletin_factory(periode_fin=date(2024, 2, 29))

        by_employe = payroll_service.list_bulletins(entreprise_id, employe_id=employe.id_employe)
        by_exercice = payroll_service.list_bulletins(entreprise_id, exercice_id=exercice_2024.id_exercice)

        assert len(by_employe) == 2
        assert len(by_exercice) == 2
        assert payroll_service.list_bulletins(entreprise_id, exercice_id="other") == []
