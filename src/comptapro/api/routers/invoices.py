"""Third parties, sales and purchase invoices endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from comptapro.api.deps import get_entreprise_id, get_invoicing_service
from comptapro.api.schemas import (
    FactureCreateRequest,
    FactureResponse,
    NextNumeroResponse,
    TiersCreate,
    TiersResponse,
)
from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.core.timezone import today_local
from comptapro.domain.models import StatutPiece, TypeDocument, TypeTiers
from comptapro.services import FactureCreate, FactureLigneCreate, InvoicingService

router = APIRouter(tags=["facturation"])


def _to_create(data: FactureCreateRequest) -> FactureCreate:
    return FactureCreate(
        tiers_id=data.tiers_id,
        exercice_id=data.exercice_id,
        date_facture=data.date_facture,
        date_echeance=data.date_echeance,
        numero_facture=data.numero_facture,
        statut=data.statut,
        lignes=[
            FactureLigneCreate(
                description=ligne.description,
                quantite=ligne.quantite,
                prix_unitaire_ht=ligne.prix_unitaire_ht,
                taux_tva=ligne.taux_tva,
                compte_id=ligne.compte_id,
            )
            for ligne in data.lignes
        ],
    )


def _create(
    service: InvoicingService,
    entreprise_id: str,
    type_document: TypeDocument,
    data: FactureCreateRequest,
) -> FactureResponse:
    try:
        facture = service.create_facture(entreprise_id, type_document, _to_create(data))
        return FactureResponse.model_validate(facture)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


# =============================================================================
# Third parties
# =============================================================================


@router.get("/tiers", response_model=list[TiersResponse])
def list_tiers(
    type_tiers: Optional[TypeTiers] = Query(None),
    entreprise_id: str = Depends(get_entreprise_id),
    service: InvoicingService = Depends(get_invoicing_service),
):
    """List customers and/or suppliers."""
    return [TiersResponse.model_validate(t) for t in service.list_tiers(entreprise_id, type_tiers)]


@router.post("/tiers", response_model=TiersResponse, status_code=201)
def create_tiers(
    data: TiersCreate,
    entreprise_id: str = Depends(get_entreprise_id),
    service: InvoicingService = Depends(get_invoicing_service),
):
    """Create a customer or supplier."""
    try:
        tiers = service.create_tiers(entreprise_id, data.nom_tiers, data.type_tiers)
        return TiersResponse.model_validate(tiers)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


# =============================================================================
# Invoices
# =============================================================================


@router.get("/factures", response_model=list[FactureResponse])
def list_factures(
    type_document: Optional[TypeDocument] = Query(None),
    exercice_id: Optional[str] = Query(None),
    statut: Optional[StatutPiece] = Query(None),
    entreprise_id: str = Depends(get_entreprise_id),
    service: InvoicingService = Depends(get_invoicing_service),
):
    """List invoices with optional filters."""
    factures = service.list_factures(
        entreprise_id,
        type_document=type_document,
        exercice_id=exercice_id,
        statut=statut,
    )
    return [FactureResponse.model_validate(f) for f in factures]


@router.get("/factures/prochain-numero", response_model=NextNumeroResponse)
def next_numero(
    type_document: TypeDocument = Query(...),
    annee: Optional[int] = Query(None, ge=1900, le=9999),
    entreprise_id: str = Depends(get_entreprise_id),
    service: InvoicingService = Depends(get_invoicing_service),
):
    """Next free invoice number for a year (current year by default)."""
    year = annee or today_local().year
    return NextNumeroResponse(numero_facture=service.next_numero(entreprise_id, type_document, year))


@router.post("/factures/ventes", response_model=FactureResponse, status_code=201)
def create_facture_vente(
    data: FactureCreateRequest,
    entreprise_id: str = Depends(get_entreprise_id),
    service: InvoicingService = Depends(get_invoicing_service),
):
    """Create a sales invoice."""
    return _create(service, entreprise_id, TypeDocument.VENTE, data)


@router.post("/factures/achats", response_model=FactureResponse, status_code=201)
def create_facture_achat(
    data: FactureCreateRequest,
    entreprise_id: str = Depends(get_entreprise_id),
    service: InvoicingService = Depends(get_invoicing_service),
):
    """Create a purchase invoice."""
    return _create(service, entreprise_id, TypeDocument.ACHAT, data)


@router.get("/factures/{id_facture}", response_model=FactureResponse)
def get_facture(
    id_facture: str,
    entreprise_id: str = Depends(get_entreprise_id),
    service: InvoicingService = Depends(get_invoicing_service),
):
    """Get an invoice with its lines."""
    try:
        return FactureResponse.model_validate(service.get_facture(entreprise_id, id_facture))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/factures/{id_facture}/validation", response_model=FactureResponse)
def validate_facture(
    id_facture: str,
    entreprise_id: str = Depends(get_entreprise_id),
    service: InvoicingService = Depends(get_invoicing_service),
):
    """Validate a draft invoice and post it."""
    try:
        return FactureResponse.model_validate(service.validate_facture(entreprise_id, id_facture))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.delete("/factures/{id_facture}", status_code=204)
def delete_facture(
    id_facture: str,
    entreprise_id: str = Depends(get_entreprise_id),
    service: InvoicingService = Depends(get_invoicing_service),
):
    """Delete a draft invoice."""
    try:
        service.delete_facture(entreprise_id, id_facture)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
