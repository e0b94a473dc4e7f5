"""Company chart of accounts, journals and exercises endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from comptapro.api.deps import (
    get_chart_service,
    get_entreprise_id,
    get_exercise_service,
    get_journal_service,
)
from comptapro.api.schemas import (
    CompteCreate,
    CompteRename,
    CompteResponse,
    ConfigurationCheckResponse,
    CopyPlanResponse,
    ExerciceCreate,
    ExerciceResponse,
    JournalCreate,
    JournalResponse,
)
from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.domain.models import StatutExercice
from comptapro.services import ChartService, ExerciseService, JournalService

router = APIRouter(tags=["configuration"])


# =============================================================================
# Chart of accounts
# =============================================================================


@router.get("/comptes", response_model=list[CompteResponse])
def list_comptes(
    prefix: Optional[str] = Query(None, description="Account number prefix, e.g. 28"),
    search: Optional[str] = Query(None, description="Number or label fragment"),
    entreprise_id: str = Depends(get_entreprise_id),
    service: ChartService = Depends(get_chart_service),
):
    """List the company chart."""
    comptes = service.list_accounts(entreprise_id, prefix=prefix, search=search)
    return [CompteResponse.model_validate(c) for c in comptes]


@router.post("/comptes", response_model=CompteResponse, status_code=201)
def create_compte(
    data: CompteCreate,
    entreprise_id: str = Depends(get_entreprise_id),
    service: ChartService = Depends(get_chart_service),
):
    """Add an account to the company chart."""
    try:
        compte = service.add_account(entreprise_id, data.numero_compte, data.libelle_compte)
        return CompteResponse.model_validate(compte)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.patch("/comptes/{id_compte}", response_model=CompteResponse)
def rename_compte(
    id_compte: str,
    data: CompteRename,
    entreprise_id: str = Depends(get_entreprise_id),
    service: ChartService = Depends(get_chart_service),
):
    """Change an account label."""
    try:
        compte = service.rename_account(entreprise_id, id_compte, data.libelle_compte)
        return CompteResponse.model_validate(compte)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.delete("/comptes/{id_compte}", status_code=204)
def delete_compte(
    id_compte: str,
    entreprise_id: str = Depends(get_entreprise_id),
    service: ChartService = Depends(get_chart_service),
):
    """Delete an account no entry uses."""
    try:
        service.delete_account(entreprise_id, id_compte)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/comptes/copier-plan", response_model=CopyPlanResponse)
def copier_plan(
    entreprise_id: str = Depends(get_entreprise_id),
    service: ChartService = Depends(get_chart_service),
):
    """Copy the master plan accounts the company does not have yet."""
    return CopyPlanResponse(comptes_copies=service.copier_plan_comptable_pour_entreprise(entreprise_id))


# =============================================================================
# Journals
# =============================================================================


@router.get("/journaux", response_model=list[JournalResponse])
def list_journaux(
    entreprise_id: str = Depends(get_entreprise_id),
    service: JournalService = Depends(get_journal_service),
):
    """List the company journals."""
    return [JournalResponse.model_validate(j) for j in service.list_journals(entreprise_id)]


@router.post("/journaux", response_model=JournalResponse, status_code=201)
def create_journal(
    data: JournalCreate,
    entreprise_id: str = Depends(get_entreprise_id),
    service: JournalService = Depends(get_journal_service),
):
    """Create a journal."""
    try:
        journal = service.create_journal(entreprise_id, data.code_journal, data.libelle_journal)
        return JournalResponse.model_validate(journal)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/journaux/configuration", response_model=ConfigurationCheckResponse)
def check_configuration(
    entreprise_id: str = Depends(get_entreprise_id),
    service: JournalService = Depends(get_journal_service),
):
    """Journals and accounts missing for automatic postings."""
    return ConfigurationCheckResponse.model_validate(service.check_configuration(entreprise_id))


# =============================================================================
# Exercises
# =============================================================================


@router.get("/exercices", response_model=list[ExerciceResponse])
def list_exercices(
    statut: Optional[StatutExercice] = Query(None),
    entreprise_id: str = Depends(get_entreprise_id),
    service: ExerciseService = Depends(get_exercise_service),
):
    """List exercises, most recent first."""
    exercices = service.list_exercices(entreprise_id, statut=statut)
    return [ExerciceResponse.model_validate(e) for e in exercices]


@router.post("/exercices", response_model=ExerciceResponse, status_code=201)
def create_exercice(
    data: ExerciceCreate,
    entreprise_id: str = Depends(get_entreprise_id),
    service: ExerciseService = Depends(get_exercise_service),
):
    """Open an exercise."""
    try:
        exercice = service.create_exercice(entreprise_id, data.libelle, data.date_debut, data.date_fin)
        return ExerciceResponse.model_validate(exercice)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/exercices/{id_exercice}/cloture", response_model=ExerciceResponse)
def close_exercice(
    id_exercice: str,
    entreprise_id: str = Depends(get_entreprise_id),
    service: ExerciseService = Depends(get_exercise_service),
):
    """Close an exercise."""
    try:
        return ExerciceResponse.model_validate(service.close_exercice(entreprise_id, id_exercice))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
