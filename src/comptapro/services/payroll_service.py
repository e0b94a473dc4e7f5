"""Employees and payslips."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.core.money import ZERO, round_money, to_decimal
from comptapro.domain.models import BulletinPaie, Employe, StatutPiece
from comptapro.repositories.protocols import (
    ChartRepository,
    ExerciseRepository,
    JournalRepository,
    LedgerRepository,
    PayrollRepository,
)
from comptapro.services.exercise_service import ExerciseService
from comptapro.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

JOURNAL_PAIE = "PA"
COMPTE_APPOINTEMENTS = "661"
COMPTE_CHARGES_SOCIALES = "664"
COMPTE_PERSONNEL_REMUNERATIONS = "422"
COMPTE_ORGANISMES_SOCIAUX = "431"
PAYROLL_ACCOUNTS = [
    COMPTE_APPOINTEMENTS,
    COMPTE_CHARGES_SOCIALES,
    COMPTE_PERSONNEL_REMUNERATIONS,
    COMPTE_ORGANISMES_SOCIAUX,
]


@dataclass
class EmployeCreate:
    """Input data for an employee."""

    nom: str
    prenom: str
    poste: Optional[str] = None
    salaire_de_base: Decimal = Decimal("0")


@dataclass
class BulletinCreate:
    """Input data for a monthly payslip; brut defaults to the base salary."""

    employe_id: str
    exercice_id: str
    periode_fin: date
    salaire_brut: Optional[Decimal] = None
    cotisations_salariales: Decimal = Decimal("0")
    cotisations_patronales: Decimal = Decimal("0")
    statut: StatutPiece = StatutPiece.BROUILLON


class PayrollService:
    """
    Service for employees and payslips.

    A validated payslip posts in PA: debit 661 (brut) and 664 (employer
    contributions), credit 422 (net) and 431 (all contributions).
    """

    def __init__(
        self,
        payroll_repo: PayrollRepository,
        ledger_repo: LedgerRepository,
        chart_repo: ChartRepository,
        journal_repo: JournalRepository,
        exercise_repo: ExerciseRepository,
    ):
        self._payroll_repo = payroll_repo
        self._ledger = LedgerService(ledger_repo, chart_repo, journal_repo, exercise_repo)
        self._exercises = ExerciseService(exercise_repo)

    # -------------------------------------------------------------------------
    # Employees
    # -------------------------------------------------------------------------

    def create_employe(self, entreprise_id: str, data: EmployeCreate) -> Employe:
        employe = Employe(
            id_employe=str(uuid.uuid4()),
            entreprise_id=entreprise_id,
            nom="",
            prenom="",
        )
        self._apply(employe, data)
        return self._payroll_repo.create_employe(employe)

    def get_employe(self, entreprise_id: str, id_employe: str) -> Employe:
        employe = self._payroll_repo.get_employe(entreprise_id, id_employe)
        if not employe:
            raise NotFoundError("Employé", id_employe)
        return employe

    def list_employes(self, entreprise_id: str) -> list[Employe]:
        return self._payroll_repo.list_employes(entreprise_id)

    def update_employe(self, entreprise_id: str, id_employe: str, data: EmployeCreate) -> Employe:
        employe = self.get_employe(entreprise_id, id_employe)
        self._apply(employe, data)
        return self._payroll_repo.update_employe(employe)

    def delete_employe(self, entreprise_id: str, id_employe: str) -> None:
        """Delete an employee without payslips."""
        self.get_employe(entreprise_id, id_employe)
        if self._payroll_repo.count_bulletins(id_employe) > 0:
            raise ValidationError("Impossible de supprimer : l'employé possède des bulletins de paie.")
        self._payroll_repo.delete_employe(entreprise_id, id_employe)

    # -------------------------------------------------------------------------
    # Payslips
    # -------------------------------------------------------------------------

    def create_bulletin(self, entreprise_id: str, data: BulletinCreate) -> BulletinPaie:
        """
        Create a payslip for the month ending at periode_fin.

        Args:
            entreprise_id: Company of the caller
            data: Employee, exercise, period end and amounts; statut Validee
                posts the payslip at once

        Returns:
            Created BulletinPaie
        """
        employe = self.get_employe(entreprise_id, data.employe_id)
        exercice = self._exercises.require_open(entreprise_id, data.exercice_id)
        if not exercice.contains(data.periode_fin):
            raise ValidationError(
                f"La période doit être comprise dans l'exercice {exercice.libelle}."
            )

        brut = round_money(
            employe.salaire_de_base if data.salaire_brut is None else to_decimal(data.salaire_brut)
        )
        salariales = round_money(to_decimal(data.cotisations_salariales))
        patronales = round_money(to_decimal(data.cotisations_patronales))
        if brut <= ZERO:
            raise ValidationError("Le salaire brut doit être positif.")
        if salariales < ZERO or patronales < ZERO:
            raise ValidationError("Les cotisations doivent être positives.")
        if salariales > brut:
            raise ValidationError("Les cotisations salariales dépassent le salaire brut.")
        if StatutPiece(data.statut) == StatutPiece.VALIDEE:
            self._require_posting_setup(entreprise_id)

        bulletin = self._payroll_repo.create_bulletin(BulletinPaie(
            id_bulletin=str(uuid.uuid4()),
            entreprise_id=entreprise_id,
            employe_id=employe.id_employe,
            exercice_id=exercice.id_exercice,
            periode_debut=data.periode_fin.replace(day=1),
            periode_fin=data.periode_fin,
            salaire_brut=brut,
            cotisations_salariales=salariales,
            cotisations_patronales=patronales,
        ))
        if StatutPiece(data.statut) == StatutPiece.VALIDEE:
            return self.validate_bulletin(entreprise_id, bulletin.id_bulletin)
        return bulletin

    def get_bulletin(self, entreprise_id: str, id_bulletin: str) -> BulletinPaie:
        bulletin = self._payroll_repo.get_bulletin(entreprise_id, id_bulletin)
        if not bulletin:
            raise NotFoundError("Bulletin de paie", id_bulletin)
        return bulletin

    def list_bulletins(
        self,
        entreprise_id: str,
        exercice_id: Optional[str] = None,
        employe_id: Optional[str] = None,
    ) -> list[BulletinPaie]:
        return self._payroll_repo.list_bulletins(
            entreprise_id, exercice_id=exercice_id, employe_id=employe_id
        )

    def validate_bulletin(self, entreprise_id: str, id_bulletin: str) -> BulletinPaie:
        """Post a draft payslip in the PA journal."""
        bulletin = self.get_bulletin(entreprise_id, id_bulletin)
        if bulletin.statut == StatutPiece.VALIDEE:
            raise ValidationError("Ce bulletin est déjà validé.")
        employe = self.get_employe(entreprise_id, bulletin.employe_id)

        appointements = self._ledger.require_account(entreprise_id, COMPTE_APPOINTEMENTS)
        charges_sociales = self._ledger.require_account(entreprise_id, COMPTE_CHARGES_SOCIALES)
        personnel = self._ledger.require_account(entreprise_id, COMPTE_PERSONNEL_REMUNERATIONS)
        organismes = self._ledger.require_account(entreprise_id, COMPTE_ORGANISMES_SOCIAUX)

        ecriture = self._ledger.post_validated(
            entreprise_id,
            bulletin.exercice_id,
            JOURNAL_PAIE,
            bulletin.periode_fin,
            f"Salaire {bulletin.periode_fin.strftime('%m/%Y')} {employe.prenom} {employe.nom}",
            [
                (appointements.id_compte, bulletin.salaire_brut, ZERO),
                (charges_sociales.id_compte, bulletin.cotisations_patronales, ZERO),
                (personnel.id_compte, ZERO, bulletin.salaire_net),
                (
                    organismes.id_compte,
                    ZERO,
                    bulletin.cotisations_salariales + bulletin.cotisations_patronales,
                ),
            ],
        )
        return self._payroll_repo.mark_validated(entreprise_id, id_bulletin, ecriture.id_ecriture)

    def _require_posting_setup(self, entreprise_id: str) -> None:
        self._ledger.require_journal(entreprise_id, JOURNAL_PAIE)
        for numero in PAYROLL_ACCOUNTS:
            self._ledger.require_account(entreprise_id, numero)

    @staticmethod
    def _apply(employe: Employe, data: EmployeCreate) -> None:
        nom = (data.nom or "").strip()
        prenom = (data.prenom or "").strip()
        if not nom or not prenom:
            raise ValidationError("Nom et prénom obligatoires")
        salaire = to_decimal(data.salaire_de_base)
        if salaire < ZERO:
            raise ValidationError("Le salaire de base doit être positif.")
        employe.nom = nom
        employe.prenom = prenom
        employe.poste = (data.poste or "").strip() or None
        employe.salaire_de_base = round_money(salaire)
