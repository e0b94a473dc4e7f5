"""Authenticated session view."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from comptapro.domain.models import Entreprise, Profil


@dataclass
class AuthSession:
    """
    Signed-in session returned by sign-in and session retrieval.

    needs_setup is True until the company has been named during onboarding.
    """

    access_token: str
    user_id: str
    email: str
    expires_at: datetime
    profil: Optional[Profil] = None
    entreprise: Optional[Entreprise] = None
    is_superadmin: bool = False
    token_type: str = "bearer"

    @property
    def needs_setup(self) -> bool:
        if self.profil is None or self.profil.entreprise_id is None:
            return True
        return self.entreprise is None or self.entreprise.is_placeholder
