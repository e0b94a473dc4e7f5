"""Chart of accounts: SYSCOHADA master plan and company charts."""

import logging
import uuid
from typing import Optional

from comptapro.core.exceptions import (
    AccountInUseError,
    DuplicateAccountError,
    NotFoundError,
    ValidationError,
)
from comptapro.domain.models import Compte, CompteModele, classe_from_numero
from comptapro.repositories.protocols import ChartRepository

logger = logging.getLogger(__name__)


def _clean_account_fields(numero_compte: str, libelle_compte: str) -> tuple[str, str]:
    numero = (numero_compte or "").strip()
    libelle = (libelle_compte or "").strip()
    if not numero or not libelle:
        raise ValidationError("Numéro et libellé obligatoires")
    if not numero.isdigit() or numero[0] == "0":
        raise ValidationError(f"Numéro de compte invalide : {numero}")
    return numero, libelle


class ChartService:
    """
    Service for the shared master plan and each company's chart.

    A company chart starts as a copy of the master plan and may then be
    extended; an account's class is always the first digit of its number.
    """

    def __init__(self, chart_repo: ChartRepository):
        self._chart_repo = chart_repo

    # -------------------------------------------------------------------------
    # Master plan (super-admin)
    # -------------------------------------------------------------------------

    def list_master(self, search: Optional[str] = None) -> list[CompteModele]:
        return self._chart_repo.list_master(search=(search or "").strip() or None)

    def add_master_account(self, numero_compte: str, libelle_compte: str) -> CompteModele:
        numero, libelle = _clean_account_fields(numero_compte, libelle_compte)
        if self._chart_repo.get_master_by_numero(numero):
            raise DuplicateAccountError(numero)
        return self._chart_repo.create_master(CompteModele(
            id_modele=str(uuid.uuid4()),
            numero_compte=numero,
            libelle_compte=libelle,
            classe_compte=classe_from_numero(numero),
        ))

    def edit_master_account(self, id_modele: str, numero_compte: str, libelle_compte: str) -> CompteModele:
        modele = self._chart_repo.get_master(id_modele)
        if not modele:
            raise NotFoundError("Compte modèle", id_modele)
        numero, libelle = _clean_account_fields(numero_compte, libelle_compte)
        other = self._chart_repo.get_master_by_numero(numero)
        if other and other.id_modele != id_modele:
            raise DuplicateAccountError(numero)
        modele.numero_compte = numero
        modele.libelle_compte = libelle
        modele.classe_compte = classe_from_numero(numero)
        return self._chart_repo.update_master(modele)

    def delete_master_account(self, id_modele: str) -> None:
        if not self._chart_repo.get_master(id_modele):
            raise NotFoundError("Compte modèle", id_modele)
        self._chart_repo.delete_master(id_modele)

    def copier_plan_comptable_pour_entreprise(self, entreprise_id: str) -> int:
        """
        Seed a company chart from the master plan.

        Accounts whose number already exists in the company chart are kept
        untouched. Returns the number of accounts copied.
        """
        existing = {c.numero_compte for c in self._chart_repo.list_accounts(entreprise_id)}
        to_copy = [
            Compte(
                id_compte=str(uuid.uuid4()),
                numero_compte=modele.numero_compte,
                libelle_compte=modele.libelle_compte,
                classe_compte=modele.classe_compte,
                entreprise_id=entreprise_id,
            )
            for modele in self._chart_repo.list_master()
            if modele.numero_compte not in existing
        ]
        if not to_copy:
            return 0
        copied = self._chart_repo.create_accounts(to_copy)
        logger.info("Copied %d master accounts to company %s", copied, entreprise_id)
        return copied

    # -------------------------------------------------------------------------
    # Company chart
    # -------------------------------------------------------------------------

    def list_accounts(
        self,
        entreprise_id: str,
        prefix: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Compte]:
        return self._chart_repo.list_accounts(entreprise_id, prefix=prefix, search=search)

    def get_account(self, entreprise_id: str, id_compte: str) -> Compte:
        compte = self._chart_repo.get_account(entreprise_id, id_compte)
        if not compte:
            raise NotFoundError("Compte", id_compte)
        return compte

    def get_account_by_numero(self, entreprise_id: str, numero_compte: str) -> Compte:
        """Account required by an automatic posting."""
        compte = self._chart_repo.get_account_by_numero(entreprise_id, numero_compte)
        if not compte:
            raise ValidationError(
                f"Le compte {numero_compte} est absent du plan comptable. "
                "Complétez la configuration comptable."
            )
        return compte

    def add_account(self, entreprise_id: str, numero_compte: str, libelle_compte: str) -> Compte:
        numero, libelle = _clean_account_fields(numero_compte, libelle_compte)
        if self._chart_repo.get_account_by_numero(entreprise_id, numero):
            raise DuplicateAccountError(numero)
        return self._chart_repo.create_account(Compte(
            id_compte=str(uuid.uuid4()),
            numero_compte=numero,
            libelle_compte=libelle,
            classe_compte=classe_from_numero(numero),
            entreprise_id=entreprise_id,
        ))

    def rename_account(self, entreprise_id: str, id_compte: str, libelle_compte: str) -> Compte:
        compte = self.get_account(entreprise_id, id_compte)
        libelle = (libelle_compte or "").strip()
        if not libelle:
            raise ValidationError("Numéro et libellé obligatoires")
        compte.libelle_compte = libelle
        return self._chart_repo.update_account(compte)

    def delete_account(self, entreprise_id: str, id_compte: str) -> None:
        """Delete an account that no entry, asset or invoice line references."""
        self.get_account(entreprise_id, id_compte)
        if self._chart_repo.count_references(id_compte) > 0:
            raise AccountInUseError()
        self._chart_repo.delete_account(entreprise_id, id_compte)
