"""Pydantic schemas for fixed assets, payroll and stock."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from comptapro.domain.models.enums import StatutPiece, TypeMouvement


# =============================================================================
# Fixed assets
# =============================================================================


class ImmobilisationCreateRequest(BaseModel):
    """Request schema for a fixed asset."""

    libelle: str = Field(..., max_length=255)
    date_achat: date
    date_mise_en_service: Optional[date] = None
    valeur_origine: Decimal
    duree_amortissement: int = 5
    compte_immo_id: str
    compte_amort_id: str


class ImmobilisationResponse(BaseModel):
    """Response schema for a fixed asset with its net book value."""

    model_config = {"from_attributes": True}

    id_immo: str
    libelle: str
    date_achat: date
    date_mise_en_service: date
    valeur_origine: Decimal
    duree_amortissement: int
    compte_immo_id: str
    compte_amort_id: str
    cumul_amortissements: Decimal
    valeur_nette: Decimal


class AmortissementRequest(BaseModel):
    """Request schema for a depreciation run."""

    exercice_id: str


class MessageResponse(BaseModel):
    """Plain message returned by procedure-like endpoints."""

    message: str


# =============================================================================
# Payroll
# =============================================================================


class EmployeRequest(BaseModel):
    """Request schema for creating or updating an employee."""

    nom: str = Field(..., max_length=100)
    prenom: str = Field(..., max_length=100)
    poste: Optional[str] = Field(None, max_length=100)
    salaire_de_base: Decimal = Decimal("0")


class EmployeResponse(BaseModel):
    """Response schema for an employee."""

    model_config = {"from_attributes": True}

    id_employe: str
    nom: str
    prenom: str
    poste: Optional[str] = None
    salaire_de_base: Decimal


class BulletinCreateRequest(BaseModel):
    """Request schema for a payslip."""

    employe_id: str
    exercice_id: str
    periode_fin: date
    salaire_brut: Optional[Decimal] = None
    cotisations_salariales: Decimal = Decimal("0")
    cotisations_patronales: Decimal = Decimal("0")
    statut: StatutPiece = StatutPiece.BROUILLON


class BulletinResponse(BaseModel):
    """Response schema for a payslip."""

    model_config = {"from_attributes": True}

    id_bulletin: str
    employe_id: str
    exercice_id: str
    periode_debut: date
    periode_fin: date
    salaire_brut: Decimal
    cotisations_salariales: Decimal
    cotisations_patronales: Decimal
    salaire_net: Decimal
    statut: StatutPiece
    ecriture_id: Optional[str] = None


# =============================================================================
# Stock
# =============================================================================


class ArticleCreate(BaseModel):
    """Request schema for a stock article."""

    reference: str = Field(..., max_length=50)
    denomination: str = Field(..., max_length=255)
    unite_stockage: Optional[str] = Field(None, max_length=30)


class ArticleResponse(BaseModel):
    """Response schema for an article with its current CMP."""

    model_config = {"from_attributes": True}

    id_article: str
    reference: str
    denomination: str
    unite_stockage: str
    quantite_en_stock: Decimal
    valeur_stock: Decimal
    cmp: Decimal


class MouvementRequest(BaseModel):
    """Request schema for a stock movement."""

    article_id: str
    type_mouvement: TypeMouvement
    quantite: Decimal
    cout_unitaire: Optional[Decimal] = None
    libelle: Optional[str] = Field(None, max_length=255)


class MouvementResponse(BaseModel):
    """Response schema for a stock movement."""

    model_config = {"from_attributes": True}

    id_mouvement: str
    article_id: str
    type_mouvement: TypeMouvement
    quantite: Decimal
    cout_unitaire: Decimal
    valeur: Decimal
    libelle: Optional[str] = None
    date_mouvement: Optional[datetime] = None
