"""Fixed assets and straight-line depreciation."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.core.money import ZERO, round_money, to_decimal
from comptapro.domain.models import DotationAmortissement, Exercice, Immobilisation
from comptapro.repositories.protocols import (
    AssetRepository,
    ChartRepository,
    ExerciseRepository,
    JournalRepository,
    LedgerRepository,
)
from comptapro.services.exercise_service import ExerciseService
from comptapro.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

COMPTE_DOTATIONS = "681"
JOURNAL_DOTATIONS = "OD"


@dataclass
class ImmobilisationCreate:
    """Input data for a fixed asset."""

    libelle: str
    date_achat: date
    valeur_origine: Decimal
    compte_immo_id: str
    compte_amort_id: str
    duree_amortissement: int = 5
    date_mise_en_service: Optional[date] = None


def compute_dotation(immo: Immobilisation, exercice: Exercice) -> Decimal:
    """
    Allowance of an asset for an exercise.

    Annual allowance prorated by the days in service within the exercise,
    capped to the net book value.
    """
    if immo.date_mise_en_service > exercice.date_fin or immo.valeur_nette <= ZERO:
        return ZERO
    debut = max(immo.date_mise_en_service, exercice.date_debut)
    jours = (exercice.date_fin - debut).days + 1
    montant = immo.dotation_annuelle * Decimal(jours) / Decimal(exercice.nb_jours)
    return round_money(min(montant, immo.valeur_nette))


class AssetService:
    """Service for the fixed asset register and depreciation runs."""

    def __init__(
        self,
        asset_repo: AssetRepository,
        ledger_repo: LedgerRepository,
        chart_repo: ChartRepository,
        journal_repo: JournalRepository,
        exercise_repo: ExerciseRepository,
    ):
        self._asset_repo = asset_repo
        self._chart_repo = chart_repo
        self._ledger = LedgerService(ledger_repo, chart_repo, journal_repo, exercise_repo)
        self._exercises = ExerciseService(exercise_repo)

    def create_immobilisation(self, entreprise_id: str, data: ImmobilisationCreate) -> Immobilisation:
        """Register an asset on a 2x account depreciated through a 28x account."""
        libelle = (data.libelle or "").strip()
        if not libelle:
            raise ValidationError("Le libellé de l'immobilisation est obligatoire.")
        valeur = to_decimal(data.valeur_origine)
        if valeur <= ZERO:
            raise ValidationError("La valeur d'origine doit être positive.")
        if data.duree_amortissement is None or data.duree_amortissement <= 0:
            raise ValidationError("La durée d'amortissement doit être positive.")
        mise_en_service = data.date_mise_en_service or data.date_achat
        if mise_en_service < data.date_achat:
            raise ValidationError("La mise en service ne peut pas précéder l'achat.")

        compte_immo = self._chart_repo.get_account(entreprise_id, data.compte_immo_id)
        if not compte_immo:
            raise NotFoundError("Compte", data.compte_immo_id)
        if compte_immo.classe_compte != 2 or compte_immo.has_prefix("28", "29"):
            raise ValidationError("Le compte d'immobilisation doit être un compte de classe 2 (hors 28).")
        compte_amort = self._chart_repo.get_account(entreprise_id, data.compte_amort_id)
        if not compte_amort:
            raise NotFoundError("Compte", data.compte_amort_id)
        if not compte_amort.has_prefix("28"):
            raise ValidationError("Le compte d'amortissement doit être un compte 28.")

        return self._asset_repo.create(Immobilisation(
            id_immo=str(uuid.uuid4()),
            entreprise_id=entreprise_id,
            libelle=libelle,
            date_achat=data.date_achat,
            date_mise_en_service=mise_en_service,
            valeur_origine=round_money(valeur),
            compte_immo_id=compte_immo.id_compte,
            compte_amort_id=compte_amort.id_compte,
            duree_amortissement=data.duree_amortissement,
        ))

    def get_immobilisation(self, entreprise_id: str, id_immo: str) -> Immobilisation:
        immo = self._asset_repo.get_by_id(entreprise_id, id_immo)
        if not immo:
            raise NotFoundError("Immobilisation", id_immo)
        return immo

    def list_immobilisations(self, entreprise_id: str) -> list[Immobilisation]:
        return self._asset_repo.list_all(entreprise_id)

    def list_dotations(self, entreprise_id: str, id_immo: str) -> list[DotationAmortissement]:
        self.get_immobilisation(entreprise_id, id_immo)
        return self._asset_repo.list_dotations(id_immo)

    def generer_amortissements_exercice(self, entreprise_id: str, exercice_id: str) -> str:
        """
        Post the depreciation of every asset for an open exercise.

        Assets already depreciated for the exercise are skipped, so running
        it twice posts nothing new.

        Returns:
            Summary message for the user
        """
        exercice = self._exercises.require_open(entreprise_id, exercice_id)

        a_generer = []
        for immo in self._asset_repo.list_all(entreprise_id):
            if self._asset_repo.get_dotation(immo.id_immo, exercice.id_exercice):
                continue
            montant = compute_dotation(immo, exercice)
            if montant > ZERO:
                a_generer.append((immo, montant))
        if not a_generer:
            return "Aucune dotation à générer."

        compte_dotations = self._ledger.require_account(entreprise_id, COMPTE_DOTATIONS)
        total = ZERO
        for immo, montant in a_generer:
            ecriture = self._ledger.build_validated(
                entreprise_id,
                exercice.id_exercice,
                JOURNAL_DOTATIONS,
                exercice.date_fin,
                f"Dotation aux amortissements {immo.libelle}",
                [
                    (compte_dotations.id_compte, montant, ZERO),
                    (immo.compte_amort_id, ZERO, montant),
                ],
            )
            dotation = DotationAmortissement(
                id_dotation=str(uuid.uuid4()),
                immo_id=immo.id_immo,
                exercice_id=exercice.id_exercice,
                montant=montant,
                entreprise_id=entreprise_id,
                ecriture_id=ecriture.id_ecriture,
            )
            self._asset_repo.create_dotation(dotation, ecriture)
            total += montant

        logger.info(
            "Posted %d depreciation allowance(s) for exercise %s", len(a_generer), exercice.libelle
        )
        return f"{len(a_generer)} dotation(s) générée(s) pour un total de {total:.2f}"
