"""Super-admin console: companies, users, plans and platform aggregates."""

import logging
from decimal import InvalidOperation
from typing import Optional

from comptapro.config.settings import get_settings
from comptapro.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from comptapro.core.money import ZERO, round_money, to_decimal
from comptapro.domain.models import Plan
from comptapro.domain.views import (
    ActivityLogEntry,
    CompanySummary,
    GlobalUser,
    PlatformStat,
    SyntheseLine,
)
from comptapro.repositories.protocols import (
    CompanyRepository,
    LedgerRepository,
    PlatformRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

SUPERADMIN_DENIED = "Accès refusé : vous n'êtes pas autorisé en tant que Super Administrateur."


class AdminService:
    """
    Service for the cross-tenant console.

    Every operation is reserved to members of the superadmins table; the
    API layer checks it with require_superadmin() before calling.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        company_repo: CompanyRepository,
        ledger_repo: LedgerRepository,
        platform_repo: PlatformRepository,
    ):
        self._user_repo = user_repo
        self._company_repo = company_repo
        self._ledger_repo = ledger_repo
        self._platform_repo = platform_repo

    def require_superadmin(self, user_id: str) -> None:
        if not self._user_repo.is_superadmin(user_id):
            raise PermissionDeniedError(SUPERADMIN_DENIED)

    # -------------------------------------------------------------------------
    # Companies and users
    # -------------------------------------------------------------------------

    def list_companies(self) -> list[CompanySummary]:
        """Companies with their plan name and member count."""
        plans = {p.id_plan: p.nom_plan for p in self._company_repo.list_plans()}
        counts = self._company_repo.member_counts()
        return [
            CompanySummary(
                id_entreprise=e.id_entreprise,
                nom_entreprise=e.nom_entreprise,
                plan_id=e.plan_id,
                nom_plan=plans.get(e.plan_id),
                date_creation=e.date_creation,
                member_count=counts.get(e.id_entreprise, 0),
            )
            for e in self._company_repo.list_all()
        ]

    def list_global_users(self, search: Optional[str] = None) -> list[GlobalUser]:
        """Every profile, filtered on email, company name or last name."""
        companies = {e.id_entreprise: e.nom_entreprise for e in self._company_repo.list_all()}
        superadmins = self._user_repo.list_superadmin_ids()
        term = (search or "").strip().lower()

        users = []
        for profil in self._user_repo.list_profiles():
            nom_entreprise = companies.get(profil.entreprise_id) if profil.entreprise_id else None
            if term:
                haystack = [profil.email, nom_entreprise or "", profil.nom or ""]
                if not any(term in value.lower() for value in haystack):
                    continue
            users.append(GlobalUser(
                user_id=profil.user_id,
                email=profil.email,
                role=profil.role.value,
                nom=profil.nom,
                prenom=profil.prenom,
                entreprise_id=profil.entreprise_id,
                nom_entreprise=nom_entreprise,
                is_superadmin=profil.user_id in superadmins,
            ))
        return users

    def delete_company(self, entreprise_id: str) -> str:
        """Delete a company and all of its data."""
        entreprise = self._company_repo.get_by_id(entreprise_id)
        if not entreprise:
            raise NotFoundError("Entreprise", entreprise_id)
        self._platform_repo.delete_company(entreprise_id)
        return f'Entreprise "{entreprise.nom_entreprise}" supprimée avec succès (et toutes ses données)'

    # -------------------------------------------------------------------------
    # Plans
    # -------------------------------------------------------------------------

    def list_plans(self) -> list[Plan]:
        return self._company_repo.list_plans()

    def update_plan_price(self, id_plan: int, prix_mensuel) -> Plan:
        plan = self._company_repo.get_plan(id_plan)
        if not plan:
            raise NotFoundError("Plan", str(id_plan))
        try:
            prix = to_decimal(prix_mensuel)
        except (InvalidOperation, ValueError):
            raise ValidationError("Veuillez entrer un prix valide")
        if prix_mensuel in (None, "") or not prix.is_finite() or prix < ZERO:
            raise ValidationError("Veuillez entrer un prix valide")
        plan.prix_mensuel = round_money(prix)
        updated = self._company_repo.update_plan(plan)
        logger.info("Plan %s price set to %s", plan.nom_plan, updated.prix_mensuel)
        return updated

    # -------------------------------------------------------------------------
    # Aggregates
    # -------------------------------------------------------------------------

    def get_global_activity_log(self, limit: Optional[int] = None) -> list[ActivityLogEntry]:
        return self._ledger_repo.activity_log(limit or get_settings().activity_log_limit)

    def get_synthese_super_admin(self) -> list[SyntheseLine]:
        return self._ledger_repo.synthese()

    def get_platform_stats(self) -> list[PlatformStat]:
        return self._platform_repo.table_row_counts()
