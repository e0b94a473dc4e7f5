"""View models for the trial balance and general ledger."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class BalanceLine:
    """One account of the trial balance (vue_balance)."""

    id_exercice: str
    id_compte: str
    numero_compte: str
    libelle_compte: str
    classe_compte: int
    total_debit: Decimal
    total_credit: Decimal

    @property
    def solde(self) -> Decimal:
        """Signed balance, positive when debit."""
        return self.total_debit - self.total_credit

    @property
    def solde_debit(self) -> Decimal:
        return self.solde if self.solde > 0 else Decimal("0")

    @property
    def solde_credit(self) -> Decimal:
        return -self.solde if self.solde < 0 else Decimal("0")


@dataclass
class GrandLivreLine:
    """One validated entry line of the general ledger (vue_grandlivre)."""

    id_exercice: str
    id_compte: str
    numero_compte: str
    libelle_compte: str
    date_ecriture: date
    libelle_operation: str
    montant_debit: Decimal
    montant_credit: Decimal
    reference_piece: Optional[str] = None
    journal_code: Optional[str] = None
    solde_cumule: Decimal = field(default_factory=lambda: Decimal("0"))
