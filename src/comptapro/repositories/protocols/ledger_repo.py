"""Ledger repository protocol."""

from typing import Protocol, Optional

from comptapro.domain.models import Ecriture, StatutPiece
from comptapro.domain.views import ActivityLogEntry, BalanceLine, GrandLivreLine, SyntheseLine


class LedgerRepository(Protocol):
    """Interface for journal entries and the ledger views computed from them."""

    def create(self, ecriture: Ecriture) -> Ecriture:
        """Persist an entry with its lines."""
        ...

    def get_by_id(self, entreprise_id: str, id_ecriture: str) -> Optional[Ecriture]:
        ...

    def query(
        self,
        entreprise_id: str,
        exercice_id: Optional[str] = None,
        journal_id: Optional[str] = None,
        statut: Optional[StatutPiece] = None,
    ) -> list[Ecriture]:
        ...

    def update_status(self, entreprise_id: str, id_ecriture: str, statut: StatutPiece) -> Ecriture:
        ...

    def delete(self, entreprise_id: str, id_ecriture: str) -> None:
        ...

    def balance(self, entreprise_id: str, exercice_id: str) -> list[BalanceLine]:
        """Trial balance of validated entries."""
        ...

    def grand_livre(
        self,
        entreprise_id: str,
        exercice_id: str,
        compte_id: Optional[str] = None,
    ) -> list[GrandLivreLine]:
        """General ledger of validated entries."""
        ...

    def activity_log(self, limit: int) -> list[ActivityLogEntry]:
        """Cross-tenant entry lines, most recent first."""
        ...

    def synthese(self) -> list[SyntheseLine]:
        """Cross-tenant totals per company and account class."""
        ...
