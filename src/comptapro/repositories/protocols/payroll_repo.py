"""Payroll repository protocol."""

from typing import Protocol, Optional

from comptapro.domain.models import BulletinPaie, Employe


class PayrollRepository(Protocol):
    """Interface for employees and payslips."""

    def create_employe(self, employe: Employe) -> Employe:
        ...

    def get_employe(self, entreprise_id: str, id_employe: str) -> Optional[Employe]:
        ...

    def list_employes(self, entreprise_id: str) -> list[Employe]:
        ...

    def update_employe(self, employe: Employe) -> Employe:
        ...

    def delete_employe(self, entreprise_id: str, id_employe: str) -> None:
        ...

    def count_bulletins(self, id_employe: str) -> int:
        ...

    def create_bulletin(self, bulletin: BulletinPaie) -> BulletinPaie:
        ...

    def get_bulletin(self, entreprise_id: str, id_bulletin: str) -> Optional[BulletinPaie]:
        ...

    def list_bulletins(
        self,
        entreprise_id: str,
        exercice_id: Optional[str] = None,
        employe_id: Optional[str] = None,
    ) -> list[BulletinPaie]:
        ...

    def mark_validated(self, entreprise_id: str, id_bulletin: str, ecriture_id: str) -> BulletinPaie:
        ...
