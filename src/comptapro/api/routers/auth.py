"""Sign-up, sign-in, session and onboarding endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from comptapro.api.deps import (
    get_auth_service,
    get_current_session,
    get_onboarding_service,
    oauth2_scheme,
)
from comptapro.api.schemas import (
    Credentials,
    EntrepriseResponse,
    ProfilResponse,
    SessionResponse,
    SetupRequest,
    SetupResponse,
    UserResponse,
)
from comptapro.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from comptapro.domain.views import AuthSession
from comptapro.services import AuthService, OnboardingService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-up", response_model=UserResponse, status_code=201)
def sign_up(
    data: Credentials,
    service: AuthService = Depends(get_auth_service),
):
    """Register an email/password identity."""
    try:
        user = service.sign_up(data.email, data.password)
        return UserResponse.model_validate(user)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/sign-in", response_model=SessionResponse)
def sign_in(
    data: Credentials,
    service: AuthService = Depends(get_auth_service),
):
    """Exchange credentials for a bearer token."""
    try:
        session = service.sign_in(data.email, data.password)
        return SessionResponse.model_validate(session)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.message)


@router.get("/session", response_model=SessionResponse)
def get_session(session: AuthSession = Depends(get_current_session)):
    """Current session, including whether company setup is pending."""
    return SessionResponse.model_validate(session)


@router.post("/sign-out", status_code=204)
def sign_out(
    token: str = Depends(oauth2_scheme),
    service: AuthService = Depends(get_auth_service),
):
    """Revoke every token of the current user."""
    try:
        service.sign_out(token)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.message)


@router.post("/setup", response_model=SetupResponse)
def setup_company(
    data: SetupRequest,
    session: AuthSession = Depends(get_current_session),
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Name the company and initialise its chart, exercise and journals."""
    try:
        result = service.setup_company(session.user_id, data.nom_entreprise)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return SetupResponse(
        entreprise=EntrepriseResponse.model_validate(result.entreprise),
        profil=ProfilResponse.model_validate(result.profil),
        comptes_copies=result.comptes_copies,
        journaux_crees=result.journaux_crees,
        id_exercice=result.exercice.id_exercice,
        message=f'Entreprise "{result.entreprise.nom_entreprise}" configurée avec succès !',
    )
