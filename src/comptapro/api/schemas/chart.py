"""Pydantic schemas for accounts, journals and exercises."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from comptapro.domain.models.enums import StatutExercice


class CompteCreate(BaseModel):
    """Request schema for adding an account (company chart or master plan)."""

    numero_compte: str = Field(..., max_length=20)
    libelle_compte: str = Field(..., max_length=255)


class CompteRename(BaseModel):
    """Request schema for renaming a company account."""

    libelle_compte: str = Field(..., max_length=255)


class CompteResponse(BaseModel):
    """Response schema for a company account."""

    model_config = {"from_attributes": True}

    id_compte: str
    numero_compte: str
    libelle_compte: str
    classe_compte: int


class CompteModeleResponse(BaseModel):
    """Response schema for a master plan account."""

    model_config = {"from_attributes": True}

    id_modele: str
    numero_compte: str
    libelle_compte: str
    classe_compte: int


class CopyPlanResponse(BaseModel):
    """Response schema for copying the master plan."""

    comptes_copies: int


class JournalCreate(BaseModel):
    """Request schema for creating a journal."""

    code_journal: str = Field(..., max_length=10)
    libelle_journal: str = Field(..., max_length=255)


class JournalResponse(BaseModel):
    """Response schema for a journal."""

    model_config = {"from_attributes": True}

    id_journal: str
    code_journal: str
    libelle_journal: str


class ConfigurationCheckResponse(BaseModel):
    """Response schema for the configuration check."""

    model_config = {"from_attributes": True}

    is_complete: bool
    missing_journaux: list[str]
    missing_comptes: list[str]
    message: Optional[str] = None


class ExerciceCreate(BaseModel):
    """Request schema for opening an exercise."""

    libelle: str = Field(..., max_length=255)
    date_debut: date
    date_fin: date


class ExerciceResponse(BaseModel):
    """Response schema for an exercise."""

    model_config = {"from_attributes": True}

    id_exercice: str
    libelle: str
    date_debut: date
    date_fin: date
    statut: StatutExercice
