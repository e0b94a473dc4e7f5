"""Journal entry domain models (double-entry)."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from comptapro.core.money import BALANCE_TOLERANCE, ZERO
from comptapro.domain.models.enums import StatutPiece


@dataclass
class LigneEcriture:
    """One debit or credit line of an entry."""

    id_ligne: str
    compte_id: str
    montant_debit: Decimal = field(default_factory=lambda: Decimal("0"))
    montant_credit: Decimal = field(default_factory=lambda: Decimal("0"))
    ecriture_id: Optional[str] = None


@dataclass
class Ecriture:
    """
    Journal entry.

    A validated entry is immutable and always balanced; drafts may be
    unbalanced and are excluded from every ledger view and report.
    """

    id_ecriture: str
    entreprise_id: str
    exercice_id: str
    journal_id: str
    date_ecriture: date
    libelle_operation: str
    statut: StatutPiece = StatutPiece.BROUILLON
    reference_piece: Optional[str] = None
    lignes: list[LigneEcriture] = field(default_factory=list)
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if isinstance(self.statut, str):
            self.statut = StatutPiece(self.statut)

    @property
    def total_debit(self) -> Decimal:
        return sum((ligne.montant_debit for ligne in self.lignes), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((ligne.montant_credit for ligne in self.lignes), ZERO)

    @property
    def is_balanced(self) -> bool:
        return abs(self.total_debit - self.total_credit) <= BALANCE_TOLERANCE

    @property
    def is_validated(self) -> bool:
        return self.statut == StatutPiece.VALIDEE
