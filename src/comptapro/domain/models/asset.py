"""Fixed assets and their depreciation allowances."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class Immobilisation:
    """
    Fixed asset depreciated on a straight-line basis.

    compte_immo_id points to a 2x account (never 28x), compte_amort_id to the
    matching 28x accumulated depreciation account.
    """

    id_immo: str
    entreprise_id: str
    libelle: str
    date_achat: date
    date_mise_en_service: date
    valeur_origine: Decimal
    compte_immo_id: str
    compte_amort_id: str
    duree_amortissement: int = 5
    cumul_amortissements: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def dotation_annuelle(self) -> Decimal:
        return self.valeur_origine / Decimal(self.duree_amortissement)

    @property
    def valeur_nette(self) -> Decimal:
        return self.valeur_origine - self.cumul_amortissements


@dataclass
class DotationAmortissement:
    """Depreciation posted for one asset in one exercise."""

    id_dotation: str
    immo_id: str
    exercice_id: str
    montant: Decimal
    entreprise_id: str
    ecriture_id: Optional[str] = None
