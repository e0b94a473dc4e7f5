"""Pydantic schemas for journal entries and ledger views."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from comptapro.domain.models.enums import StatutPiece


class LigneCreateRequest(BaseModel):
    """One line of an entry request; blank lines are ignored."""

    compte_id: Optional[str] = None
    montant_debit: Decimal = Decimal("0")
    montant_credit: Decimal = Decimal("0")


class EcritureCreateRequest(BaseModel):
    """Request schema for a manual entry."""

    journal_id: Optional[str] = None
    date_ecriture: date
    libelle_operation: str = Field("", max_length=500)
    lignes: list[LigneCreateRequest] = Field(default_factory=list)
    statut: StatutPiece = StatutPiece.BROUILLON
    reference_piece: Optional[str] = Field(None, max_length=100)
    exercice_id: Optional[str] = None


class LigneResponse(BaseModel):
    """Response schema for an entry line."""

    model_config = {"from_attributes": True}

    id_ligne: str
    compte_id: str
    montant_debit: Decimal
    montant_credit: Decimal


class EcritureResponse(BaseModel):
    """Response schema for an entry."""

    model_config = {"from_attributes": True}

    id_ecriture: str
    exercice_id: str
    journal_id: str
    date_ecriture: date
    libelle_operation: str
    statut: StatutPiece
    reference_piece: Optional[str] = None
    total_debit: Decimal
    total_credit: Decimal
    lignes: list[LigneResponse]
    created_at: Optional[datetime] = None


class BalanceLineResponse(BaseModel):
    """Response schema for a trial balance line."""

    model_config = {"from_attributes": True}

    id_exercice: str
    id_compte: str
    numero_compte: str
    libelle_compte: str
    classe_compte: int
    total_debit: Decimal
    total_credit: Decimal
    solde_debit: Decimal
    solde_credit: Decimal


class GrandLivreLineResponse(BaseModel):
    """Response schema for a general ledger line."""

    model_config = {"from_attributes": True}

    id_exercice: str
    id_compte: str
    numero_compte: str
    libelle_compte: str
    date_ecriture: date
    libelle_operation: str
    reference_piece: Optional[str] = None
    journal_code: Optional[str] = None
    montant_debit: Decimal
    montant_credit: Decimal
    solde_cumule: Decimal
