"""Ledger service: double-entry journal entries and ledger views."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from comptapro.core.exceptions import (
    ClosedExerciseError,
    NotFoundError,
    UnbalancedEntryError,
    ValidationError,
)
from comptapro.core.money import ZERO, round_money, to_decimal
from comptapro.core.timezone import now_local
from comptapro.domain.models import Compte, Ecriture, Journal, LigneEcriture, StatutPiece
from comptapro.domain.views import BalanceLine, GrandLivreLine
from comptapro.repositories.protocols import (
    ChartRepository,
    ExerciseRepository,
    JournalRepository,
    LedgerRepository,
)
from comptapro.services.exercise_service import ExerciseService

logger = logging.getLogger(__name__)


@dataclass
class LigneCreate:
    """Input data for one entry line."""

    compte_id: Optional[str] = None
    montant_debit: Decimal = Decimal("0")
    montant_credit: Decimal = Decimal("0")


@dataclass
class EcritureCreate:
    """Input data for a manual journal entry (saisie)."""

    journal_id: Optional[str]
    date_ecriture: date
    libelle_operation: str
    lignes: list[LigneCreate] = field(default_factory=list)
    statut: StatutPiece = StatutPiece.BROUILLON
    reference_piece: Optional[str] = None
    exercice_id: Optional[str] = None


class LedgerService:
    """
    Service for journal entries and the ledger views.

    Entries are recorded in an open exercise of the company. A validated
    entry is balanced and never modified again; drafts may be validated or
    deleted. Other services post their automatic entries through
    post_validated().
    """

    def __init__(
        self,
        ledger_repo: LedgerRepository,
        chart_repo: ChartRepository,
        journal_repo: JournalRepository,
        exercise_repo: ExerciseRepository,
    ):
        self._ledger_repo = ledger_repo
        self._chart_repo = chart_repo
        self._journal_repo = journal_repo
        self._exercises = ExerciseService(exercise_repo)

    # -------------------------------------------------------------------------
    # Entries
    # -------------------------------------------------------------------------

    def create_entry(self, entreprise_id: str, data: EcritureCreate) -> Ecriture:
        """
        Record a manual entry.

        Args:
            entreprise_id: Company of the caller
            data: Journal, date, label and lines; statut Validee requires a
                balanced entry

        Returns:
            Created Ecriture with its lines
        """
        libelle = (data.libelle_operation or "").strip()
        if not data.journal_id or not libelle:
            raise ValidationError("Veuillez remplir le journal et le libellé")
        journal = self._journal_repo.get_by_id(entreprise_id, data.journal_id)
        if not journal:
            raise NotFoundError("Journal", data.journal_id)

        lignes = self._build_lines(entreprise_id, data.lignes)
        exercice_id = self._resolve_exercice(entreprise_id, data.exercice_id, data.date_ecriture)

        ecriture = Ecriture(
            id_ecriture=str(uuid.uuid4()),
            entreprise_id=entreprise_id,
            exercice_id=exercice_id,
            journal_id=journal.id_journal,
            date_ecriture=data.date_ecriture,
            libelle_operation=libelle,
            statut=StatutPiece(data.statut),
            reference_piece=(data.reference_piece or "").strip() or None,
            lignes=lignes,
            created_at=now_local(),
        )
        if ecriture.is_validated and not ecriture.is_balanced:
            raise UnbalancedEntryError(ecriture.total_debit, ecriture.total_credit)
        created = self._ledger_repo.create(ecriture)
        logger.info(
            "Recorded %s entry %s in journal %s",
            created.statut.value, created.id_ecriture, journal.code_journal,
        )
        return created

    def build_validated(
        self,
        entreprise_id: str,
        exercice_id: str,
        journal_code: str,
        date_ecriture: date,
        libelle_operation: str,
        mouvements: list[tuple[str, Decimal, Decimal]],
        reference_piece: Optional[str] = None,
    ) -> Ecriture:
        """
        Build an automatic, validated entry without persisting it.

        Args:
            mouvements: (compte_id, debit, credit) triples; zero lines are
                skipped

        Raises:
            UnbalancedEntryError: when debits and credits differ
        """
        self._exercises.require_open(entreprise_id, exercice_id)
        journal = self.require_journal(entreprise_id, journal_code)
        lignes = [
            LigneEcriture(
                id_ligne=str(uuid.uuid4()),
                compte_id=compte_id,
                montant_debit=round_money(debit),
                montant_credit=round_money(credit),
            )
            for compte_id, debit, credit in mouvements
            if round_money(debit) > ZERO or round_money(credit) > ZERO
        ]
        ecriture = Ecriture(
            id_ecriture=str(uuid.uuid4()),
            entreprise_id=entreprise_id,
            exercice_id=exercice_id,
            journal_id=journal.id_journal,
            date_ecriture=date_ecriture,
            libelle_operation=libelle_operation,
            statut=StatutPiece.VALIDEE,
            reference_piece=reference_piece,
            lignes=lignes,
            created_at=now_local(),
        )
        if len(lignes) < 2 or not ecriture.is_balanced:
            raise UnbalancedEntryError(ecriture.total_debit, ecriture.total_credit)
        return ecriture

    def post_validated(
        self,
        entreprise_id: str,
        exercice_id: str,
        journal_code: str,
        date_ecriture: date,
        libelle_operation: str,
        mouvements: list[tuple[str, Decimal, Decimal]],
        reference_piece: Optional[str] = None,
    ) -> Ecriture:
        """Post an automatic, validated entry (see build_validated)."""
        ecriture = self.build_validated(
            entreprise_id, exercice_id, journal_code, date_ecriture,
            libelle_operation, mouvements, reference_piece,
        )
        created = self._ledger_repo.create(ecriture)
        logger.info("Posted %s entry %s (%s)", journal_code, created.id_ecriture, libelle_operation)
        return created

    def get_entry(self, entreprise_id: str, id_ecriture: str) -> Ecriture:
        ecriture = self._ledger_repo.get_by_id(entreprise_id, id_ecriture)
        if not ecriture:
            raise NotFoundError("Ecriture", id_ecriture)
        return ecriture

    def list_entries(
        self,
        entreprise_id: str,
        exercice_id: Optional[str] = None,
        journal_id: Optional[str] = None,
        statut: Optional[StatutPiece] = None,
    ) -> list[Ecriture]:
        return self._ledger_repo.query(
            entreprise_id,
            exercice_id=exercice_id,
            journal_id=journal_id,
            statut=statut,
        )

    def validate_entry(self, entreprise_id: str, id_ecriture: str) -> Ecriture:
        """Validate a draft; it must be balanced and its exercise still open."""
        ecriture = self.get_entry(entreprise_id, id_ecriture)
        if ecriture.is_validated:
            raise ValidationError("Cette écriture est déjà validée.")
        self._exercises.require_open(entreprise_id, ecriture.exercice_id)
        if not ecriture.is_balanced:
            raise UnbalancedEntryError(ecriture.total_debit, ecriture.total_credit)
        return self._ledger_repo.update_status(entreprise_id, id_ecriture, StatutPiece.VALIDEE)

    def delete_entry(self, entreprise_id: str, id_ecriture: str) -> None:
        """Delete a draft entry."""
        ecriture = self.get_entry(entreprise_id, id_ecriture)
        if ecriture.is_validated:
            raise ValidationError("Une écriture validée ne peut pas être supprimée.")
        self._ledger_repo.delete(entreprise_id, id_ecriture)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def get_balance(self, entreprise_id: str, exercice_id: str) -> list[BalanceLine]:
        """Trial balance of an exercise (validated entries only)."""
        self._exercises.get_exercice(entreprise_id, exercice_id)
        return self._ledger_repo.balance(entreprise_id, exercice_id)

    def get_grand_livre(
        self,
        entreprise_id: str,
        exercice_id: str,
        compte_id: Optional[str] = None,
    ) -> list[GrandLivreLine]:
        """General ledger of an exercise, optionally for one account."""
        self._exercises.get_exercice(entreprise_id, exercice_id)
        return self._ledger_repo.grand_livre(entreprise_id, exercice_id, compte_id=compte_id)

    # -------------------------------------------------------------------------
    # Lookups used by automatic postings
    # -------------------------------------------------------------------------

    def require_account(self, entreprise_id: str, numero_compte: str) -> Compte:
        compte = self._chart_repo.get_account_by_numero(entreprise_id, numero_compte)
        if not compte:
            raise ValidationError(
                f"Le compte {numero_compte} est absent du plan comptable. "
                "Complétez la configuration comptable."
            )
        return compte

    def require_journal(self, entreprise_id: str, code_journal: str) -> Journal:
        journal = self._journal_repo.get_by_code(entreprise_id, code_journal)
        if not journal:
            raise ValidationError(
                f"Le journal {code_journal} est introuvable. "
                "Complétez la configuration comptable."
            )
        return journal

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _build_lines(self, entreprise_id: str, lignes: list[LigneCreate]) -> list[LigneEcriture]:
        built = []
        for ligne in lignes:
            debit = round_money(to_decimal(ligne.montant_debit))
            credit = round_money(to_decimal(ligne.montant_credit))
            if not ligne.compte_id or (debit == ZERO and credit == ZERO):
                continue
            if debit < ZERO or credit < ZERO:
                raise ValidationError("Les montants doivent être positifs.")
            if debit > ZERO and credit > ZERO:
                raise ValidationError("Une ligne ne peut pas être à la fois au débit et au crédit.")
            if not self._chart_repo.get_account(entreprise_id, ligne.compte_id):
                raise NotFoundError("Compte", ligne.compte_id)
            built.append(LigneEcriture(
                id_ligne=str(uuid.uuid4()),
                compte_id=ligne.compte_id,
                montant_debit=debit,
                montant_credit=credit,
            ))
        if len(built) < 2:
            raise ValidationError("Une écriture doit comporter au moins deux lignes.")
        return built

    def _resolve_exercice(
        self,
        entreprise_id: str,
        exercice_id: Optional[str],
        date_ecriture: date,
    ) -> str:
        if not exercice_id:
            return self._exercises.find_open_for_date(entreprise_id, date_ecriture).id_exercice
        exercice = self._exercises.require_open(entreprise_id, exercice_id)
        if not exercice.contains(date_ecriture):
            raise ClosedExerciseError(
                f"La date doit être comprise dans l'exercice {exercice.libelle}."
            )
        return exercice.id_exercice
