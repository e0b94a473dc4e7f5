"""Pydantic schemas for third parties and invoices."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from comptapro.domain.models.enums import StatutPiece, TypeDocument, TypeTiers


class TiersCreate(BaseModel):
    """Request schema for a customer or supplier."""

    nom_tiers: str = Field(..., max_length=255)
    type_tiers: TypeTiers


class TiersResponse(BaseModel):
    """Response schema for a third party."""

    model_config = {"from_attributes": True}

    id_tiers: str
    nom_tiers: str
    type_tiers: TypeTiers


class FactureLigneRequest(BaseModel):
    """One invoice line; incomplete lines are ignored."""

    description: str = ""
    quantite: Decimal = Decimal("1")
    prix_unitaire_ht: Decimal = Decimal("0")
    taux_tva: Optional[Decimal] = None
    compte_id: Optional[str] = None


class FactureCreateRequest(BaseModel):
    """Request schema for a sales or purchase invoice."""

    tiers_id: Optional[str] = None
    exercice_id: Optional[str] = None
    date_facture: date
    date_echeance: Optional[date] = None
    numero_facture: Optional[str] = Field(None, max_length=50)
    statut: StatutPiece = StatutPiece.BROUILLON
    lignes: list[FactureLigneRequest] = Field(default_factory=list)


class FactureLigneResponse(BaseModel):
    """Response schema for an invoice line."""

    model_config = {"from_attributes": True}

    id_ligne: str
    description: str
    quantite: Decimal
    prix_unitaire_ht: Decimal
    taux_tva: Decimal
    total_ht: Decimal
    compte_id: Optional[str] = None


class FactureResponse(BaseModel):
    """Response schema for an invoice."""

    model_config = {"from_attributes": True}

    id_facture: str
    tiers_id: str
    exercice_id: str
    numero_facture: str
    date_facture: date
    date_echeance: Optional[date] = None
    type_document: TypeDocument
    montant_ht: Decimal
    montant_tva: Decimal
    montant_ttc: Decimal
    statut: StatutPiece
    ecriture_id: Optional[str] = None
    lignes: list[FactureLigneResponse]
    created_at: Optional[datetime] = None


class NextNumeroResponse(BaseModel):
    """Response schema for the next free invoice number."""

    numero_facture: str
