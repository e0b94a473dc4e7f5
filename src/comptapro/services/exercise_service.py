"""Accounting period (exercice) management."""

import logging
import uuid
from datetime import date
from typing import Optional

from comptapro.core.exceptions import (
    ClosedExerciseError,
    NotFoundError,
    OverlappingExerciseError,
    ValidationError,
)
from comptapro.domain.models import Exercice, StatutExercice
from comptapro.repositories.protocols import ExerciseRepository

logger = logging.getLogger(__name__)

NO_OPEN_EXERCISE_MESSAGE = "Aucun exercice comptable ouvert. Veuillez en créer un."


class ExerciseService:
    """
    Service for opening, listing and closing exercises.

    Exercises of a company never overlap; a closed exercise accepts no new
    postings.
    """

    def __init__(self, exercise_repo: ExerciseRepository):
        self._exercise_repo = exercise_repo

    def create_exercice(
        self,
        entreprise_id: str,
        libelle: str,
        date_debut: date,
        date_fin: date,
    ) -> Exercice:
        """Open a new exercise after checking dates and overlaps."""
        libelle = (libelle or "").strip()
        if not libelle:
            raise ValidationError("Le libellé de l'exercice est obligatoire.")
        if date_debut >= date_fin:
            raise ValidationError("La date de début doit être antérieure à la date de fin.")

        for existing in self._exercise_repo.list_all(entreprise_id):
            if existing.overlaps(date_debut, date_fin):
                raise OverlappingExerciseError()

        exercice = Exercice(
            id_exercice=str(uuid.uuid4()),
            libelle=libelle,
            date_debut=date_debut,
            date_fin=date_fin,
            entreprise_id=entreprise_id,
            statut=StatutExercice.OUVERT,
        )
        created = self._exercise_repo.create(exercice)
        logger.info("Opened exercise %s for company %s", libelle, entreprise_id)
        return created

    def get_exercice(self, entreprise_id: str, id_exercice: str) -> Exercice:
        exercice = self._exercise_repo.get_by_id(entreprise_id, id_exercice)
        if not exercice:
            raise NotFoundError("Exercice", id_exercice)
        return exercice

    def list_exercices(
        self,
        entreprise_id: str,
        statut: Optional[StatutExercice] = None,
    ) -> list[Exercice]:
        return self._exercise_repo.list_all(entreprise_id, statut=statut)

    def list_open(self, entreprise_id: str) -> list[Exercice]:
        return self._exercise_repo.list_all(entreprise_id, statut=StatutExercice.OUVERT)

    def get_current_open(self, entreprise_id: str) -> Exercice:
        """Most recent open exercise; raises when there is none."""
        open_exercices = self.list_open(entreprise_id)
        if not open_exercices:
            raise ValidationError(NO_OPEN_EXERCISE_MESSAGE)
        return open_exercices[0]

    def require_open(self, entreprise_id: str, id_exercice: str) -> Exercice:
        """Return the exercise if it exists and is open."""
        exercice = self.get_exercice(entreprise_id, id_exercice)
        if not exercice.is_open:
            raise ClosedExerciseError(f"L'exercice {exercice.libelle} est clôturé.")
        return exercice

    def find_open_for_date(self, entreprise_id: str, day: date) -> Exercice:
        """Open exercise containing a date."""
        for exercice in self.list_open(entreprise_id):
            if exercice.contains(day):
                return exercice
        raise ClosedExerciseError(
            f"Aucun exercice ouvert ne couvre la date du {day.strftime('%d/%m/%Y')}."
        )

    def close_exercice(self, entreprise_id: str, id_exercice: str) -> Exercice:
        """Close an exercise; postings into it are refused afterwards."""
        exercice = self.get_exercice(entreprise_id, id_exercice)
        if not exercice.is_open:
            raise ValidationError(f"L'exercice {exercice.libelle} est déjà clôturé.")
        exercice.statut = StatutExercice.CLOTURE
        closed = self._exercise_repo.update(exercice)
        logger.info("Closed exercise %s for company %s", exercice.libelle, entreprise_id)
        return closed
