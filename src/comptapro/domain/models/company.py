"""Tenant, identity and subscription domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from comptapro.domain.models.enums import Role

# Name given to the placeholder company created at sign-up; a profile still
# attached to it has not completed onboarding.
DEFAULT_COMPANY_NAME = "__DEFAULT_NAME__"

# Free plan assigned to new companies
DEFAULT_PLAN_ID = 1


@dataclass
class Plan:
    """Subscription plan (Gratuit, Starter, Pro, Entreprise)."""

    id_plan: int
    nom_plan: str
    niveau: int
    prix_mensuel: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class Entreprise:
    """A tenant company; every bookkeeping row belongs to exactly one."""

    id_entreprise: str
    nom_entreprise: str
    plan_id: int = DEFAULT_PLAN_ID
    date_creation: Optional[datetime] = None

    @property
    def is_placeholder(self) -> bool:
        return self.nom_entreprise == DEFAULT_COMPANY_NAME


@dataclass
class User:
    """Identity record (email + password hash)."""

    user_id: str
    email: str
    password_hash: str
    created_at: Optional[datetime] = None
    token_version: int = 0


@dataclass
class Profil:
    """A user's membership in a company."""

    id_profil: str
    user_id: str
    email: str
    nom: Optional[str] = None
    prenom: Optional[str] = None
    role: Role = Role.UTILISATEUR
    entreprise_id: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.role, str):
            self.role = Role(self.role)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN_ENTITE
