"""Ledger views, financial statements, dashboard and CSV exports."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from comptapro.api.deps import (
    get_csv_exporter,
    get_entreprise_id,
    get_ledger_service,
    get_reporting_service,
)
from comptapro.api.schemas import (
    BalanceLineResponse,
    BilanResponse,
    CompteDeResultatResponse,
    DashboardResponse,
    GrandLivreLineResponse,
)
from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.csv import CsvExporter
from comptapro.services import LedgerService, ReportingService

router = APIRouter(prefix="/rapports", tags=["rapports"])


def csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/balance", response_model=list[BalanceLineResponse])
def get_balance(
    exercice_id: str = Query(...),
    entreprise_id: str = Depends(get_entreprise_id),
    service: LedgerService = Depends(get_ledger_service),
):
    """Trial balance of an exercise (vue_balance)."""
    try:
        return [BalanceLineResponse.model_validate(b) for b in service.get_balance(entreprise_id, exercice_id)]
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/grand-livre", response_model=list[GrandLivreLineResponse])
def get_grand_livre(
    exercice_id: str = Query(...),
    compte_id: Optional[str] = Query(None),
    entreprise_id: str = Depends(get_entreprise_id),
    service: LedgerService = Depends(get_ledger_service),
):
    """General ledger of an exercise (vue_grandlivre)."""
    try:
        lines = service.get_grand_livre(entreprise_id, exercice_id, compte_id=compte_id)
        return [GrandLivreLineResponse.model_validate(line) for line in lines]
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/bilan", response_model=BilanResponse)
def get_bilan(
    exercice_id: str = Query(...),
    entreprise_id: str = Depends(get_entreprise_id),
    service: ReportingService = Depends(get_reporting_service),
):
    """SYSCOHADA balance sheet."""
    try:
        return BilanResponse.model_validate(service.get_bilan(entreprise_id, exercice_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/compte-de-resultat", response_model=CompteDeResultatResponse)
def get_compte_de_resultat(
    exercice_id: str = Query(...),
    entreprise_id: str = Depends(get_entreprise_id),
    service: ReportingService = Depends(get_reporting_service),
):
    """SYSCOHADA income statement."""
    try:
        return CompteDeResultatResponse.model_validate(
            service.get_compte_de_resultat(entreprise_id, exercice_id)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    entreprise_id: str = Depends(get_entreprise_id),
    service: ReportingService = Depends(get_reporting_service),
):
    """Headline figures of the current open exercise."""
    try:
        return DashboardResponse.model_validate(service.get_dashboard(entreprise_id))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/balance.csv")
def export_balance(
    exercice_id: str = Query(...),
    entreprise_id: str = Depends(get_entreprise_id),
    exporter: CsvExporter = Depends(get_csv_exporter),
):
    """Download the trial balance as CSV."""
    try:
        content = exporter.balance_csv(entreprise_id, exercice_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return csv_response(content, "balance.csv")


@router.get("/grand-livre.csv")
def export_grand_livre(
    exercice_id: str = Query(...),
    compte_id: Optional[str] = Query(None),
    entreprise_id: str = Depends(get_entreprise_id),
    exporter: CsvExporter = Depends(get_csv_exporter),
):
    """Download the general ledger as CSV."""
    try:
        content = exporter.grand_livre_csv(entreprise_id, exercice_id, compte_id=compte_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return csv_response(content, "grand_livre.csv")
