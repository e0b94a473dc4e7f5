"""Company members management (admin_entite only)."""

import logging
from typing import Optional

from comptapro.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from comptapro.domain.models import Profil, Role
from comptapro.repositories.protocols import (
    CompanyRepository,
    PlatformRepository,
    UserRepository,
)
from comptapro.services.auth_service import AuthService

logger = logging.getLogger(__name__)


def require_admin(profil: Optional[Profil]) -> Profil:
    """Return the profile if it administers a company."""
    if profil is None or profil.entreprise_id is None or not profil.is_admin:
        raise PermissionDeniedError("Seul un administrateur peut gérer les membres.")
    return profil


class MemberService:
    """Service letting a company administrator invite members and set their role."""

    def __init__(
        self,
        user_repo: UserRepository,
        company_repo: CompanyRepository,
        platform_repo: PlatformRepository,
    ):
        self._user_repo = user_repo
        self._company_repo = company_repo
        self._platform_repo = platform_repo
        self._auth = AuthService(user_repo, company_repo)

    def list_members(self, admin: Profil) -> list[Profil]:
        admin = require_admin(admin)
        return self._user_repo.list_profiles(entreprise_id=admin.entreprise_id)

    def invite_member(
        self,
        admin: Profil,
        email: str,
        password: str,
        nom: Optional[str] = None,
        prenom: Optional[str] = None,
        role: Role = Role.UTILISATEUR,
    ) -> Profil:
        """
        Create an identity and attach it to the administrator's company.

        The placeholder company the sign-up creates for the new user is
        deleted once the profile has moved.
        """
        admin = require_admin(admin)
        user = self._auth.sign_up(email, password)

        profil = self._user_repo.get_profile(user.user_id)
        orphan_id = profil.entreprise_id
        profil.entreprise_id = admin.entreprise_id
        profil.role = Role(role)
        profil.nom = (nom or "").strip() or None
        profil.prenom = (prenom or "").strip() or None
        profil = self._user_repo.update_profile(profil)

        if orphan_id and orphan_id != admin.entreprise_id:
            orphan = self._company_repo.get_by_id(orphan_id)
            if orphan and orphan.is_placeholder:
                self._platform_repo.delete_company(orphan_id)

        logger.info("User %s joined company %s as %s", user.email, admin.entreprise_id, profil.role.value)
        return profil

    def change_role(self, admin: Profil, user_id: str, role: Role) -> Profil:
        """Change the role of a member of the administrator's company."""
        admin = require_admin(admin)
        if user_id == admin.user_id:
            raise ValidationError("Vous ne pouvez pas modifier votre propre rôle.")
        profil = self._user_repo.get_profile(user_id)
        if not profil or profil.entreprise_id != admin.entreprise_id:
            raise NotFoundError("Membre", user_id)
        profil.role = Role(role)
        return self._user_repo.update_profile(profil)
