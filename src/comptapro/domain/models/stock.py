"""Stock articles and movements (weighted-average cost)."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from comptapro.domain.models.enums import TypeMouvement


@dataclass
class Article:
    """Stocked item with running quantity and value."""

    id_article: str
    entreprise_id: str
    reference: str
    denomination: str
    unite_stockage: str = "unité"
    quantite_en_stock: Decimal = field(default_factory=lambda: Decimal("0"))
    valeur_stock: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def cmp(self) -> Decimal:
        """Current weighted-average unit cost (coût moyen pondéré)."""
        if self.quantite_en_stock <= 0:
            return Decimal("0")
        return self.valeur_stock / self.quantite_en_stock


@dataclass
class MouvementStock:
    """Stock entry or exit, valued at its unit cost."""

    id_mouvement: str
    entreprise_id: str
    article_id: str
    type_mouvement: TypeMouvement
    quantite: Decimal
    cout_unitaire: Decimal
    valeur: Decimal
    libelle: Optional[str] = None
    date_mouvement: Optional[datetime] = None

    def __post_init__(self) -> None:
        if isinstance(self.type_mouvement, str):
            self.type_mouvement = TypeMouvement(self.type_mouvement)
