"""Pydantic schemas for members and the super-admin console."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field

from comptapro.domain.models.enums import Role


class MemberInvite(BaseModel):
    """Request schema for inviting a member."""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)
    nom: Optional[str] = Field(None, max_length=100)
    prenom: Optional[str] = Field(None, max_length=100)
    role: Role = Role.UTILISATEUR


class RoleUpdate(BaseModel):
    """Request schema for changing a member's role."""

    role: Role


class CompanySummaryResponse(BaseModel):
    """Response schema for a company of the console."""

    model_config = {"from_attributes": True}

    id_entreprise: str
    nom_entreprise: str
    plan_id: int
    nom_plan: Optional[str] = None
    date_creation: Optional[datetime] = None
    member_count: int


class GlobalUserResponse(BaseModel):
    """Response schema for a user of the console."""

    model_config = {"from_attributes": True}

    user_id: str
    email: str
    role: str
    nom: Optional[str] = None
    prenom: Optional[str] = None
    entreprise_id: Optional[str] = None
    nom_entreprise: Optional[str] = None
    is_superadmin: bool


class PlanResponse(BaseModel):
    """Response schema for a subscription plan."""

    model_config = {"from_attributes": True}

    id_plan: int
    nom_plan: str
    niveau: int
    prix_mensuel: Decimal


class PlanPriceUpdate(BaseModel):
    """Request schema for a plan price; validated by the service."""

    prix_mensuel: Optional[Union[Decimal, str]] = None


class ActivityLogResponse(BaseModel):
    """Response schema for an activity log row."""

    model_config = {"from_attributes": True}

    date_op: date
    journal_code: str
    libelle_op: str
    montant_debit: Decimal
    montant_credit: Decimal
    nom_ent: str
    num_compte: str
    statut: str


class SyntheseResponse(BaseModel):
    """Response schema for a synthese row."""

    model_config = {"from_attributes": True}

    id_entreprise: str
    nom_entreprise: str
    classe_compte: int
    total_debit: Decimal
    total_credit: Decimal
    solde_debit: Decimal
    solde_credit: Decimal


class PlatformStatResponse(BaseModel):
    """Response schema for a table row count."""

    model_config = {"from_attributes": True}

    table_name: str
    row_count: int
