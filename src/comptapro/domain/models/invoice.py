"""Third parties and invoices."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from comptapro.domain.models.enums import StatutPiece, TypeDocument, TypeTiers


@dataclass
class Tiers:
    """Customer or supplier."""

    id_tiers: str
    nom_tiers: str
    type_tiers: TypeTiers
    entreprise_id: str

    def __post_init__(self) -> None:
        if isinstance(self.type_tiers, str):
            self.type_tiers = TypeTiers(self.type_tiers)


@dataclass
class FactureLigne:
    """Invoice line; total_ht = quantite * prix_unitaire_ht."""

    id_ligne: str
    description: str
    quantite: Decimal
    prix_unitaire_ht: Decimal
    taux_tva: Decimal
    total_ht: Decimal
    compte_id: Optional[str] = None
    facture_id: Optional[str] = None


@dataclass
class Facture:
    """Sales (VENTE) or purchase (ACHAT) invoice."""

    id_facture: str
    entreprise_id: str
    tiers_id: str
    exercice_id: str
    numero_facture: str
    date_facture: date
    type_document: TypeDocument
    montant_ht: Decimal = field(default_factory=lambda: Decimal("0"))
    montant_tva: Decimal = field(default_factory=lambda: Decimal("0"))
    montant_ttc: Decimal = field(default_factory=lambda: Decimal("0"))
    statut: StatutPiece = StatutPiece.BROUILLON
    date_echeance: Optional[date] = None
    ecriture_id: Optional[str] = None
    lignes: list[FactureLigne] = field(default_factory=list)
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if isinstance(self.type_document, str):
            self.type_document = TypeDocument(self.type_document)
        if isinstance(self.statut, str):
            self.statut = StatutPiece(self.statut)
