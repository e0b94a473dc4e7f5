"""View models for the super-admin console."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass
class ActivityLogEntry:
    """Cross-tenant audit row for one entry line."""

    date_op: date
    journal_code: str
    libelle_op: str
    montant_debit: Decimal
    montant_credit: Decimal
    nom_ent: str
    num_compte: str
    statut: str


@dataclass
class SyntheseLine:
    """Balances of one account class for one company."""

    id_entreprise: str
    nom_entreprise: str
    classe_compte: int
    total_debit: Decimal
    total_credit: Decimal

    @property
    def solde_debit(self) -> Decimal:
        diff = self.total_debit - self.total_credit
        return diff if diff > 0 else Decimal("0")

    @property
    def solde_credit(self) -> Decimal:
        diff = self.total_credit - self.total_debit
        return diff if diff > 0 else Decimal("0")


@dataclass
class PlatformStat:
    """Row count of one table."""

    table_name: str
    row_count: int


@dataclass
class CompanySummary:
    """Company with its plan and member count."""

    id_entreprise: str
    nom_entreprise: str
    plan_id: int
    nom_plan: Optional[str] = None
    date_creation: Optional[datetime] = None
    member_count: int = 0


@dataclass
class GlobalUser:
    """User profile with the name of its company."""

    user_id: str
    email: str
    role: str
    nom: Optional[str] = None
    prenom: Optional[str] = None
    entreprise_id: Optional[str] = None
    nom_entreprise: Optional[str] = None
    is_superadmin: bool = False
