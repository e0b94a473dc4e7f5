"""Employees and payslips."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from comptapro.domain.models.enums import StatutPiece


@dataclass
class Employe:
    """Company employee."""

    id_employe: str
    entreprise_id: str
    nom: str
    prenom: str
    poste: Optional[str] = None
    salaire_de_base: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class BulletinPaie:
    """Monthly payslip; net = brut - cotisations salariales."""

    id_bulletin: str
    entreprise_id: str
    employe_id: str
    exercice_id: str
    periode_debut: date
    periode_fin: date
    salaire_brut: Decimal
    cotisations_salariales: Decimal
    cotisations_patronales: Decimal
    statut: StatutPiece = StatutPiece.BROUILLON
    ecriture_id: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.statut, str):
            self.statut = StatutPiece(self.statut)

    @property
    def salaire_net(self) -> Decimal:
        return self.salaire_brut - self.cotisations_salariales

    @property
    def cout_employeur(self) -> Decimal:
        return self.salaire_brut + self.cotisations_patronales
