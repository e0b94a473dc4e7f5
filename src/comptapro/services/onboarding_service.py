"""First-login company setup."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date

from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.core.timezone import now_local, today_local
from comptapro.domain.models import (
    DEFAULT_PLAN_ID,
    Entreprise,
    Exercice,
    Profil,
    Role,
)
from comptapro.repositories.protocols import (
    ChartRepository,
    CompanyRepository,
    ExerciseRepository,
    JournalRepository,
    UserRepository,
)
from comptapro.services.chart_service import ChartService
from comptapro.services.exercise_service import ExerciseService
from comptapro.services.journal_service import JournalService

logger = logging.getLogger(__name__)


@dataclass
class SetupResult:
    """Outcome of a company setup."""

    entreprise: Entreprise
    profil: Profil
    exercice: Exercice
    comptes_copies: int
    journaux_crees: int


class OnboardingService:
    """
    Service turning a freshly signed-up user into a company administrator.

    The placeholder company created at sign-up is renamed, its chart is
    seeded from the master plan, the current calendar year is opened and
    the standard journals are created.
    """

    def __init__(
        self,
        company_repo: CompanyRepository,
        user_repo: UserRepository,
        chart_repo: ChartRepository,
        journal_repo: JournalRepository,
        exercise_repo: ExerciseRepository,
    ):
        self._company_repo = company_repo
        self._user_repo = user_repo
        self._chart = ChartService(chart_repo)
        self._journals = JournalService(journal_repo, chart_repo)
        self._exercises = ExerciseService(exercise_repo)

    def setup_company(self, user_id: str, nom_entreprise: str) -> SetupResult:
        """
        Complete onboarding for a user.

        Args:
            user_id: The signed-in user
            nom_entreprise: Company name chosen by the user

        Returns:
            SetupResult with the company, the updated profile and the opened
            exercise
        """
        nom = (nom_entreprise or "").strip()
        if not nom:
            raise ValidationError("Veuillez saisir le nom de votre entreprise")

        profil = self._user_repo.get_profile(user_id)
        if not profil:
            raise NotFoundError("Profil", user_id)

        entreprise = (
            self._company_repo.get_by_id(profil.entreprise_id)
            if profil.entreprise_id
            else None
        )
        if entreprise is None:
            entreprise = self._company_repo.create(Entreprise(
                id_entreprise=str(uuid.uuid4()),
                nom_entreprise=nom,
                plan_id=DEFAULT_PLAN_ID,
                date_creation=now_local(),
            ))
        else:
            entreprise.nom_entreprise = nom
            entreprise = self._company_repo.update(entreprise)

        profil.entreprise_id = entreprise.id_entreprise
        profil.role = Role.ADMIN_ENTITE
        profil.nom = profil.nom or "Admin"
        profil.prenom = profil.prenom or "Principal"
        profil = self._user_repo.update_profile(profil)

        comptes_copies = self._chart.copier_plan_comptable_pour_entreprise(entreprise.id_entreprise)
        exercice = self._open_current_year(entreprise.id_entreprise)
        journaux = self._journals.create_default_journals(entreprise.id_entreprise)

        logger.info("Company %s set up by user %s", nom, user_id)
        return SetupResult(
            entreprise=entreprise,
            profil=profil,
            exercice=exercice,
            comptes_copies=comptes_copies,
            journaux_crees=len(journaux),
        )

    def _open_current_year(self, entreprise_id: str) -> Exercice:
        year = today_local().year
        debut, fin = date(year, 1, 1), date(year, 12, 31)
        for exercice in self._exercises.list_exercices(entreprise_id):
            if exercice.overlaps(debut, fin):
                return exercice
        return self._exercises.create_exercice(entreprise_id, f"Exercice {year}", debut, fin)
