"""Exercise repository protocol."""

from typing import Protocol, Optional

from comptapro.domain.models import Exercice, StatutExercice


class ExerciseRepository(Protocol):
    """Interface for accounting period data access."""

    def create(self, exercice: Exercice) -> Exercice:
        ...

    def get_by_id(self, entreprise_id: str, id_exercice: str) -> Optional[Exercice]:
        ...

    def list_all(
        self,
        entreprise_id: str,
        statut: Optional[StatutExercice] = None,
    ) -> list[Exercice]:
        """List a company's exercises, most recent first."""
        ...

    def update(self, exercice: Exercice) -> Exercice:
        ...
