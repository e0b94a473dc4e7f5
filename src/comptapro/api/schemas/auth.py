"""Pydantic schemas for authentication and onboarding endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from comptapro.domain.models.enums import Role


class Credentials(BaseModel):
    """Request schema for sign-up and sign-in."""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)


class UserResponse(BaseModel):
    """Response schema for a created identity."""

    model_config = {"from_attributes": True}

    user_id: str
    email: str
    created_at: Optional[datetime] = None


class ProfilResponse(BaseModel):
    """Response schema for a member profile."""

    model_config = {"from_attributes": True}

    id_profil: str
    user_id: str
    email: str
    nom: Optional[str] = None
    prenom: Optional[str] = None
    role: Role
    entreprise_id: Optional[str] = None


class EntrepriseResponse(BaseModel):
    """Response schema for a company."""

    model_config = {"from_attributes": True}

    id_entreprise: str
    nom_entreprise: str
    plan_id: int
    date_creation: Optional[datetime] = None


class SessionResponse(BaseModel):
    """Response schema for a signed-in session."""

    model_config = {"from_attributes": True}

    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    expires_at: datetime
    is_superadmin: bool = False
    needs_setup: bool
    profil: Optional[ProfilResponse] = None
    entreprise: Optional[EntrepriseResponse] = None


class SetupRequest(BaseModel):
    """Request schema for the first-login company setup."""

    nom_entreprise: str = Field(..., max_length=255)


class SetupResponse(BaseModel):
    """Response schema for the company setup."""

    model_config = {"from_attributes": True}

    entreprise: EntrepriseResponse
    profil: ProfilResponse
    comptes_copies: int
    journaux_crees: int
    id_exercice: str
    message: str
