"""
Unit tests for OnboardingService.

Tests cover:
- Company setup renames the placeholder company
- Master plan copy, default journals and current exercise
- Re-running setup is idempotent
"""

import pytest

from comptapro.core.exceptions import ValidationError
from comptapro.core.timezone import today_local
from comptapro.domain.models import Role
from comptapro.repositories.sqlalchemy.seed import SYSCOHADA_MASTER_PLAN
from comptapro.services import AuthService, OnboardingService
from comptapro.services.journal_service import DEFAULT_JOURNALS


class TestSetupCompany:
    """Tests for setup_company."""

    def test_setup_renames_placeholder_and_promotes_admin(
        self,
        auth_service: AuthService,
        onboarding_service: OnboardingService,
        user_repo,
    ):
        """
        GIVEN a signed-up user attached to a placeholder company
        WHEN they set up "Boulangerie Kone"
        THEN the same company is renamed and the user becomes admin_entite
        """
        user = auth_service.sign_up("kone@example.com", "secret123")
        placeholder_id = user_repo.get_profile(user.user_id).entreprise_id

        result = onboarding_service.setup_company(user.user_id, "  Boulangerie Kone ")

        assert result.entreprise.id_entreprise == placeholder_id
        assert result.entreprise.nom_entreprise == "Boulangerie Kone"
        assert result.profil.role == Role.ADMIN_ENTITE
        assert result.profil.nom == "Admin"
        assert result.profil.prenom == "Principal"

    def test_setup_seeds_chart_journals_and_exercise(
        self,
        auth_service: AuthService,
        onboarding_service: OnboardingService,
    ):
        user = auth_service.sign_up("kone@example.com", "secret123")

        result = onboarding_service.setup_company(user.user_id, "Boulangerie Kone")

        year = today_local().year
        assert result.comptes_copies == len(SYSCOHADA_MASTER_PLAN)
        assert result.journaux_crees == len(DEFAULT_JOURNALS)
        assert result.exercice.libelle == f"Exercice {year}"
        assert result.exercice.date_debut.year == year
        assert result.exercice.is_open

    def test_setup_twice_does_not_duplicate(
        self,
        auth_service: AuthService,
        onboarding_service: OnboardingService,
    ):
        user = auth_service.sign_up("kone@example.com", "secret123")
        first = onboarding_service.setup_company(user.user_id, "Boulangerie Kone")

        second = onboarding_service.setup_company(user.user_id, "Boulangerie Kone & Fils")

        assert second.comptes_copies == 0
        assert second.journaux_crees == 0
        assert second.exercice.id_exercice == first.exercice.id_exercice
        assert second.entreprise.nom_entreprise == "Boulangerie Kone & Fils"

    def test_session_no_longer_needs_setup(
        self,
        auth_service: AuthService,
        onboarding_service: OnboardingService,
    ):
        user = auth_service.sign_up("kone@example.com", "secret123")
        onboarding_service.setup_company(user.user_id, "Boulangerie Kone")

        session = auth_service.sign_in("kone@example.com", "secret123")

        assert session.needs_setup is False
        assert session.entreprise.nom_entreprise == "Boulangerie Kone"

    def test_setup_with_blank_name_raises(
        self,
        auth_service: AuthService,
        onboarding_service: OnboardingService,
    ):
        user = auth_service.sign_up("kone@example.com", "secret123")

        with pytest.raises(ValidationError, match="nom de votre entreprise"):
            onboarding_service.setup_company(user.user_id, "   ")
