"""Chart of accounts, journals and accounting periods."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from comptapro.domain.models.enums import StatutExercice


def classe_from_numero(numero_compte: str) -> int:
    """SYSCOHADA class of an account: its first digit."""
    return int(numero_compte[0])


@dataclass
class CompteModele:
    """Account of the shared SYSCOHADA master plan."""

    id_modele: str
    numero_compte: str
    libelle_compte: str
    classe_compte: int


@dataclass
class Compte:
    """Account of a company's own chart."""

    id_compte: str
    numero_compte: str
    libelle_compte: str
    classe_compte: int
    entreprise_id: str

    def has_prefix(self, *prefixes: str) -> bool:
        return self.numero_compte.startswith(prefixes)


@dataclass
class Journal:
    """Journal (VT, AC, BQ, OD, PA...)."""

    id_journal: str
    code_journal: str
    libelle_journal: str
    entreprise_id: str


@dataclass
class Exercice:
    """Accounting period (fiscal year)."""

    id_exercice: str
    libelle: str
    date_debut: date
    date_fin: date
    entreprise_id: str
    statut: StatutExercice = StatutExercice.OUVERT

    def __post_init__(self) -> None:
        if isinstance(self.statut, str):
            self.statut = StatutExercice(self.statut)

    @property
    def is_open(self) -> bool:
        return self.statut == StatutExercice.OUVERT

    def contains(self, day: date) -> bool:
        return self.date_debut <= day <= self.date_fin

    def overlaps(self, date_debut: date, date_fin: date, exclude_id: Optional[str] = None) -> bool:
        if exclude_id is not None and self.id_exercice == exclude_id:
            return False
        return date_debut <= self.date_fin and self.date_debut <= date_fin

    @property
    def nb_jours(self) -> int:
        return (self.date_fin - self.date_debut).days + 1
