"""
Unit tests for AssetService.

Tests cover:
- Asset registration and account checks
- compute_dotation prorata and capping
- Depreciation runs and their postings
"""

from datetime import date
from decimal import Decimal

import pytest

from comptapro.core.exceptions import AccountInUseError, ClosedExerciseError, ValidationError
from comptapro.domain.models import Exercice, Immobilisation
from comptapro.services import AssetService, ImmobilisationCreate
from comptapro.services.asset_service import compute_dotation


@pytest.fixture
def immo_factory(asset_service: AssetService, entreprise_id, compte):
    """Factory registering a vehicle (245 / 2845)."""

    def _create(
        valeur: Decimal = Decimal("5000000"),
        mise_en_service: date = date(2024, 1, 1),
        duree: int = 5,
    ) -> Immobilisation:
        return asset_service.create_immobilisation(entreprise_id, ImmobilisationCreate(
            libelle="Véhicule de livraison",
            date_achat=mise_en_service,
            date_mise_en_service=mise_en_service,
            valeur_origine=valeur,
            duree_amortissement=duree,
            compte_immo_id=compte("245").id_compte,
            compte_amort_id=compte("2845").id_compte,
        ))

    return _create


def _exercice(debut: date, fin: date) -> Exercice:
    return Exercice(
        id_exercice="ex",
        entreprise_id="e",
        libelle="Exercice",
        date_debut=debut,
        date_fin=fin,
    )


def _immo(valeur: str, mise_en_service: date, duree: int = 5, cumul: str = "0") -> Immobilisation:
    return Immobilisation(
        id_immo="i",
        entreprise_id="e",
        libelle="Matériel",
        date_achat=mise_en_service,
        date_mise_en_service=mise_en_service,
        valeur_origine=Decimal(valeur),
        compte_immo_id="c1",
        compte_amort_id="c2",
        duree_amortissement=duree,
        cumul_amortissements=Decimal(cumul),
    )


# =============================================================================
# COMPUTATION TESTS
# =============================================================================


class TestComputeDotation:
    """Tests for the straight-line allowance."""

    def test_full_year(self):
        exercice = _exercice(date(2023, 1, 1), date(2023, 12, 31))

        assert compute_dotation(_immo("1000000", date(2022, 6, 1)), exercice) == Decimal("200000.00")

    def test_prorata_for_the_first_year(self):
        """
        GIVEN an asset put in service on 2023-07-01 (184 days left of 365)
        WHEN I compute its 2023 allowance
        THEN it is 200 000 x 184 / 365
        """
        exercice = _exercice(date(2023, 1, 1), date(2023, 12, 31))

        assert compute_dotation(_immo("1000000", date(2023, 7, 1)), exercice) == Decimal("100821.92")

    def test_capped_to_net_book_value(self):
        exercice = _exercice(date(2023, 1, 1), date(2023, 12, 31))

        immo = _immo("1000000", date(2018, 1, 1), cumul="950000")

        assert compute_dotation(immo, exercice) == Decimal("50000.00")

    def test_nothing_before_service_or_when_fully_depreciated(self):
        exercice = _exercice(date(2023, 1, 1), date(2023, 12, 31))

        assert compute_dotation(_immo("1000000", date(2024, 2, 1)), exercice) == Decimal("0")
        assert compute_dotation(_immo("1000000", date(2015, 1, 1), cumul="1000000"), exercice) == Decimal("0")


# =============================================================================
# REGISTRATION TESTS
# =============================================================================


class TestCreateImmobilisation:
    """Tests for asset registration."""

    def test_create(self, immo_factory, asset_service: AssetService, entreprise_id):
        immo = immo_factory()

        assert immo.valeur_origine == Decimal("5000000.00")
        assert immo.valeur_nette == Decimal("5000000.00")
        assert [i.id_immo for i in asset_service.list_immobilisations(entreprise_id)] == [immo.id_immo]

    def test_rejects_depreciation_account_as_asset(
        self,
        asset_service: AssetService,
        entreprise_id,
        compte,
    ):
        with pytest.raises(ValidationError, match="compte de classe 2"):
            asset_service.create_immobilisation(entreprise_id, ImmobilisationCreate(
                libelle="Erreur",
                date_achat=date(2024, 1, 1),
                valeur_origine=Decimal("1000"),
                compte_immo_id=compte("2845").id_compte,
                compte_amort_id=compte("2845").id_compte,
            ))

    def test_rejects_non_28_depreciation_account(
        self,
        asset_service: AssetService,
        entreprise_id,
        compte,
    ):
        with pytest.raises(ValidationError, match="compte 28"):
            asset_service.create_immobilisation(entreprise_id, ImmobilisationCreate(
                libelle="Erreur",
                date_achat=date(2024, 1, 1),
                valeur_origine=Decimal("1000"),
                compte_immo_id=compte("245").id_compte,
                compte_amort_id=compte("681").id_compte,
            ))

    @pytest.mark.parametrize("valeur,duree", [
        (Decimal("0"), 5),
        (Decimal("-10"), 5),
        (Decimal("1000"), 0),
    ])
    def test_rejects_invalid_amounts(self, immo_factory, valeur, duree):
        with pytest.raises(ValidationError):
            immo_factory(valeur=valeur, duree=duree)


# =============================================================================
# DEPRECIATION RUN TESTS
# =============================================================================


class TestGenererAmortissements:
    """Tests for the depreciation run of an exercise."""

    def test_run_posts_allowances(
        self,
        asset_service: AssetService,
        ledger_service,
        immo_factory,
        entreprise_id,
        exercice_2024,
        compte,
    ):
        """
        GIVEN a 5 000 000 vehicle over 5 years in service since 2024-01-01
        WHEN I run the 2024 depreciation
        THEN 1 000 000 is posted debit 681 / credit 2845 on 2024-12-31
        """
        immo = immo_factory()

        message = asset_service.generer_amortissements_exercice(entreprise_id, exercice_2024.id_exercice)

        assert message == "1 dotation(s) générée(s) pour un total de 1000000.00"
        balance = {
            line.numero_compte: line
            for line in ledger_service.get_balance(entreprise_id, exercice_2024.id_exercice)
        }
        assert balance["681"].total_debit == Decimal("1000000.00")
        assert balance["2845"].total_credit == Decimal("1000000.00")

        dotations = asset_service.list_dotations(entreprise_id, immo.id_immo)
        assert len(dotations) == 1
        ecriture = ledger_service.get_entry(entreprise_id, dotations[0].ecriture_id)
        assert ecriture.date_ecriture == date(2024, 12, 31)
        assert asset_service.get_immobilisation(entreprise_id, immo.id_immo).valeur_nette == Decimal("4000000.00")

    def test_second_run_is_a_no_op(
        self,
        asset_service: AssetService,
        immo_factory,
        entreprise_id,
        exercice_2024,
    ):
        immo_factory()
        asset_service.generer_amortissements_exercice(entreprise_id, exercice_2024.id_exercice)

        message = asset_service.generer_amortissements_exercice(entreprise_id, exercice_2024.id_exercice)

        assert message == "Aucune dotation à générer."

    def test_run_on_closed_exercise_raises(
        self,
        asset_service: AssetService,
        exercise_service,
        immo_factory,
        entreprise_id,
        exercice_2024,
    ):
        immo_factory()
        exercise_service.close_exercice(entreprise_id, exercice_2024.id_exercice)

        with pytest.raises(ClosedExerciseError):
            asset_service.generer_amortissements_exercice(entreprise_id, exercice_2024.id_exercice)

    def test_accounts_of_a_registered_asset_cannot_be_deleted(
        self,
        asset_service: AssetService,
        chart_service,
        ledger_service,
        immo_factory,
        entreprise_id,
        exercice_2024,
        compte,
    ):
        """
        GIVEN a vehicle registered on 245 / 2845
        WHEN I try to delete 2845 then run the 2024 depreciation
        THEN the deletion is refused and the posted ledger stays balanced
        """
        immo_factory()

        for numero in ("245", "2845"):
            with pytest.raises(AccountInUseError):
                chart_service.delete_account(entreprise_id, compte(numero).id_compte)

        asset_service.generer_amortissements_exercice(entreprise_id, exercice_2024.id_exercice)

        balance = ledger_service.get_balance(entreprise_id, exercice_2024.id_exercice)
        assert sum(line.total_debit for line in balance) == sum(line.total_credit for line in balance)
        assert sum(line.total_debit for line in balance) == Decimal("1000000.00")

    def test_failed_allowance_leaves_no_entry_behind(
        self,
        asset_service: AssetService,
        ledger_service,
        immo_factory,
        entreprise_id,
        exercice_2024,
        test_session,
        monkeypatch,
    ):
        """
        GIVEN a registered vehicle
        WHEN saving the 2024 allowance fails
        THEN no depreciation entry is left and a new run posts it once
        """
        immo = immo_factory()

        def failing_commit():
            raise RuntimeError("database is locked")

        with monkeypatch.context() as patch:
            patch.setattr(test_session, "commit", failing_commit)
            with pytest.raises(RuntimeError):
                asset_service.generer_amortissements_exercice(entreprise_id, exercice_2024.id_exercice)

        assert ledger_service.list_entries(entreprise_id, exercice_id=exercice_2024.id_exercice) == []
        assert asset_service.list_dotations(entreprise_id, immo.id_immo) == []

        message = asset_service.generer_amortissements_exercice(entreprise_id, exercice_2024.id_exercice)

        assert message == "1 dotation(s) générée(s) pour un total de 1000000.00"
        assert len(ledger_service.list_entries(entreprise_id, exercice_id=exercice_2024.id_exercice)) == 1
