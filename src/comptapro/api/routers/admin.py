"""Super-admin console endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from comptapro.api.deps import get_admin_service, get_chart_service, get_superadmin_session
from comptapro.api.routers.reports import csv_response
from comptapro.api.schemas import (
    ActivityLogResponse,
    CompanySummaryResponse,
    CompteCreate,
    CompteModeleResponse,
    GlobalUserResponse,
    MessageResponse,
    PlanPriceUpdate,
    PlanResponse,
    PlatformStatResponse,
    SyntheseResponse,
)
from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.csv import activity_log_csv
from comptapro.services import AdminService, ChartService

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(get_superadmin_session)],
)


# =============================================================================
# Companies and users
# =============================================================================


@router.get("/entreprises", response_model=list[CompanySummaryResponse])
def list_entreprises(service: AdminService = Depends(get_admin_service)):
    """All companies with plan and member count."""
    return [CompanySummaryResponse.model_validate(c) for c in service.list_companies()]


@router.delete("/entreprises/{id_entreprise}", response_model=MessageResponse)
def delete_entreprise(
    id_entreprise: str,
    service: AdminService = Depends(get_admin_service),
):
    """Delete a company and everything it owns."""
    try:
        return MessageResponse(message=service.delete_company(id_entreprise))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/utilisateurs", response_model=list[GlobalUserResponse])
def list_utilisateurs(
    search: Optional[str] = Query(None, description="Email, name or company fragment"),
    service: AdminService = Depends(get_admin_service),
):
    """Users across every company."""
    return [GlobalUserResponse.model_validate(u) for u in service.list_global_users(search)]


# =============================================================================
# Master chart of accounts
# =============================================================================


@router.get("/plan-modele", response_model=list[CompteModeleResponse])
def list_plan_modele(
    search: Optional[str] = Query(None),
    service: ChartService = Depends(get_chart_service),
):
    """Accounts of the master SYSCOHADA plan."""
    return [CompteModeleResponse.model_validate(c) for c in service.list_master(search)]


@router.post("/plan-modele", response_model=CompteModeleResponse, status_code=201)
def add_compte_modele(
    data: CompteCreate,
    service: ChartService = Depends(get_chart_service),
):
    try:
        compte = service.add_master_account(data.numero_compte, data.libelle_compte)
        return CompteModeleResponse.model_validate(compte)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.put("/plan-modele/{id_modele}", response_model=CompteModeleResponse)
def edit_compte_modele(
    id_modele: str,
    data: CompteCreate,
    service: ChartService = Depends(get_chart_service),
):
    try:
        compte = service.edit_master_account(id_modele, data.numero_compte, data.libelle_compte)
        return CompteModeleResponse.model_validate(compte)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.delete("/plan-modele/{id_modele}", status_code=204)
def delete_compte_modele(
    id_modele: str,
    service: ChartService = Depends(get_chart_service),
):
    try:
        service.delete_master_account(id_modele)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


# =============================================================================
# Plans
# =============================================================================


@router.get("/plans", response_model=list[PlanResponse])
def list_plans(service: AdminService = Depends(get_admin_service)):
    """Subscription plans."""
    return [PlanResponse.model_validate(p) for p in service.list_plans()]


@router.put("/plans/{id_plan}/prix", response_model=PlanResponse)
def update_plan_price(
    id_plan: int,
    data: PlanPriceUpdate,
    service: AdminService = Depends(get_admin_service),
):
    """Set the monthly price of a plan."""
    try:
        return PlanResponse.model_validate(service.update_plan_price(id_plan, data.prix_mensuel))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


# =============================================================================
# Aggregates
# =============================================================================


@router.get("/activite", response_model=list[ActivityLogResponse])
def get_activite(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    service: AdminService = Depends(get_admin_service),
):
    """Most recent entry lines across every company."""
    return [ActivityLogResponse.model_validate(a) for a in service.get_global_activity_log(limit)]


@router.get("/activite.csv")
def export_activite(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    service: AdminService = Depends(get_admin_service),
):
    """Download the activity log as CSV."""
    return csv_response(activity_log_csv(service.get_global_activity_log(limit)), "activite.csv")


@router.get("/synthese", response_model=list[SyntheseResponse])
def get_synthese(service: AdminService = Depends(get_admin_service)):
    """Validated totals per company and account class."""
    return [SyntheseResponse.model_validate(s) for s in service.get_synthese_super_admin()]


@router.get("/stats", response_model=list[PlatformStatResponse])
def get_stats(service: AdminService = Depends(get_admin_service)):
    """Row count of every table."""
    return [PlatformStatResponse.model_validate(s) for s in service.get_platform_stats()]
