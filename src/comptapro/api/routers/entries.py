"""Journal entry (saisie) endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from comptapro.api.deps import get_entreprise_id, get_ledger_service
from comptapro.api.schemas import EcritureCreateRequest, EcritureResponse
from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.domain.models import StatutPiece
from comptapro.services import EcritureCreate, LedgerService, LigneCreate

router = APIRouter(prefix="/ecritures", tags=["ecritures"])


@router.get("", response_model=list[EcritureResponse])
def list_ecritures(
    exercice_id: Optional[str] = Query(None),
    journal_id: Optional[str] = Query(None),
    statut: Optional[StatutPiece] = Query(None),
    entreprise_id: str = Depends(get_entreprise_id),
    service: LedgerService = Depends(get_ledger_service),
):
    """List entries with optional filters."""
    ecritures = service.list_entries(
        entreprise_id,
        exercice_id=exercice_id,
        journal_id=journal_id,
        statut=statut,
    )
    return [EcritureResponse.model_validate(e) for e in ecritures]


@router.post("", response_model=EcritureResponse, status_code=201)
def create_ecriture(
    data: EcritureCreateRequest,
    entreprise_id: str = Depends(get_entreprise_id),
    service: LedgerService = Depends(get_ledger_service),
):
    """Record an entry as a draft or validated."""
    try:
        ecriture = service.create_entry(entreprise_id, EcritureCreate(
            journal_id=data.journal_id,
            date_ecriture=data.date_ecriture,
            libelle_operation=data.libelle_operation,
            lignes=[
                LigneCreate(
                    compte_id=ligne.compte_id,
                    montant_debit=ligne.montant_debit,
                    montant_credit=ligne.montant_credit,
                )
                for ligne in data.lignes
            ],
            statut=data.statut,
            reference_piece=data.reference_piece,
            exercice_id=data.exercice_id,
        ))
        return EcritureResponse.model_validate(ecriture)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/{id_ecriture}", response_model=EcritureResponse)
def get_ecriture(
    id_ecriture: str,
    entreprise_id: str = Depends(get_entreprise_id),
    service: LedgerService = Depends(get_ledger_service),
):
    """Get an entry with its lines."""
    try:
        return EcritureResponse.model_validate(service.get_entry(entreprise_id, id_ecriture))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/{id_ecriture}/validation", response_model=EcritureResponse)
def validate_ecriture(
    id_ecriture: str,
    entreprise_id: str = Depends(get_entreprise_id),
    service: LedgerService = Depends(get_ledger_service),
):
    """Validate a balanced draft."""
    try:
        return EcritureResponse.model_validate(service.validate_entry(entreprise_id, id_ecriture))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.delete("/{id_ecriture}", status_code=204)
def delete_ecriture(
    id_ecriture: str,
    entreprise_id: str = Depends(get_entreprise_id),
    service: LedgerService = Depends(get_ledger_service),
):
    """Delete a draft entry."""
    try:
        service.delete_entry(entreprise_id, id_ecriture)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
