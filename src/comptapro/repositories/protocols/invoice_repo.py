"""Invoice repository protocol."""

from typing import Protocol, Optional

from comptapro.domain.models import Facture, StatutPiece, Tiers, TypeDocument, TypeTiers


class InvoiceRepository(Protocol):
    """Interface for third parties and invoices."""

    def create_tiers(self, tiers: Tiers) -> Tiers:
        ...

    def get_tiers(self, entreprise_id: str, id_tiers: str) -> Optional[Tiers]:
        ...

    def list_tiers(self, entreprise_id: str, type_tiers: Optional[TypeTiers] = None) -> list[Tiers]:
        ...

    def create(self, facture: Facture) -> Facture:
        """Persist an invoice with its lines."""
        ...

    def get_by_id(self, entreprise_id: str, id_facture: str) -> Optional[Facture]:
        ...

    def get_by_numero(self, entreprise_id: str, numero_facture: str) -> Optional[Facture]:
        ...

    def query(
        self,
        entreprise_id: str,
        type_document: Optional[TypeDocument] = None,
        exercice_id: Optional[str] = None,
        statut: Optional[StatutPiece] = None,
    ) -> list[Facture]:
        ...

    def list_numeros(self, entreprise_id: str, prefix: str) -> list[str]:
        """Invoice numbers starting with a prefix."""
        ...

    def mark_validated(self, entreprise_id: str, id_facture: str, ecriture_id: str) -> Facture:
        ...

    def delete(self, entreprise_id: str, id_facture: str) -> None:
        ...
