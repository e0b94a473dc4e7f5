"""Chart of accounts repository protocol."""

from typing import Protocol, Optional

from comptapro.domain.models import Compte, CompteModele


class ChartRepository(Protocol):
    """Interface for the master plan and company charts of accounts."""

    def list_master(self, search: Optional[str] = None) -> list[CompteModele]:
        """List master accounts, optionally filtered by number or label."""
        ...

    def get_master(self, id_modele: str) -> Optional[CompteModele]:
        ...

    def get_master_by_numero(self, numero_compte: str) -> Optional[CompteModele]:
        ...

    def create_master(self, modele: CompteModele) -> CompteModele:
        ...

    def update_master(self, modele: CompteModele) -> CompteModele:
        ...

    def delete_master(self, id_modele: str) -> None:
        ...

    def list_accounts(
        self,
        entreprise_id: str,
        prefix: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Compte]:
        """List a company's accounts by number."""
        ...

    def get_account(self, entreprise_id: str, id_compte: str) -> Optional[Compte]:
        ...

    def get_account_by_numero(self, entreprise_id: str, numero_compte: str) -> Optional[Compte]:
        ...

    def create_account(self, compte: Compte) -> Compte:
        ...

    def create_accounts(self, comptes: list[Compte]) -> int:
        """Persist several accounts at once; returns the count."""
        ...

    def update_account(self, compte: Compte) -> Compte:
        ...

    def delete_account(self, entreprise_id: str, id_compte: str) -> None:
        ...

    def count_references(self, id_compte: str) -> int:
        """Number of entry lines, assets and invoice lines using an account."""
        ...
