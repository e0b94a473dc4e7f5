"""Fixed assets, payroll and stock endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from comptapro.api.deps import (
    get_asset_service,
    get_entreprise_id,
    get_payroll_service,
    get_stock_service,
)
from comptapro.api.schemas import (
    AmortissementRequest,
    ArticleCreate,
    ArticleResponse,
    BulletinCreateRequest,
    BulletinResponse,
    EmployeRequest,
    EmployeResponse,
    ImmobilisationCreateRequest,
    ImmobilisationResponse,
    MessageResponse,
    MouvementRequest,
    MouvementResponse,
)
from comptapro.core.exceptions import NotFoundError, ValidationError
from comptapro.services import (
    AssetService,
    BulletinCreate,
    EmployeCreate,
    ImmobilisationCreate,
    PayrollService,
    StockService,
)

router = APIRouter(tags=["operations"])


# =============================================================================
# Fixed assets
# =============================================================================


@router.get("/immobilisations", response_model=list[ImmobilisationResponse])
def list_immobilisations(
    entreprise_id: str = Depends(get_entreprise_id),
    service: AssetService = Depends(get_asset_service),
):
    """List assets with their net book value."""
    return [ImmobilisationResponse.model_validate(i) for i in service.list_immobilisations(entreprise_id)]


@router.post("/immobilisations", response_model=ImmobilisationResponse, status_code=201)
def create_immobilisation(
    data: ImmobilisationCreateRequest,
    entreprise_id: str = Depends(get_entreprise_id),
    service: AssetService = Depends(get_asset_service),
):
    """Register a fixed asset."""
    try:
        immo = service.create_immobilisation(entreprise_id, ImmobilisationCreate(
            libelle=data.libelle,
            date_achat=data.date_achat,
            date_mise_en_service=data.date_mise_en_service,
            valeur_origine=data.valeur_origine,
            duree_amortissement=data.duree_amortissement,
            compte_immo_id=data.compte_immo_id,
            compte_amort_id=data.compte_amort_id,
        ))
        return ImmobilisationResponse.model_validate(immo)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/immobilisations/amortissements", response_model=MessageResponse)
def generer_amortissements(
    data: AmortissementRequest,
    entreprise_id: str = Depends(get_entreprise_id),
    service: AssetService = Depends(get_asset_service),
):
    """Post the depreciation of the exercise for every asset."""
    try:
        return MessageResponse(message=service.generer_amortissements_exercice(entreprise_id, data.exercice_id))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


# =============================================================================
# Payroll
# =============================================================================


def _employe_data(data: EmployeRequest) -> EmployeCreate:
    return EmployeCreate(
        nom=data.nom,
        prenom=data.prenom,
        poste=data.poste,
        salaire_de_base=data.salaire_de_base,
    )


@router.get("/paie/employes", response_model=list[EmployeResponse])
def list_employes(
    entreprise_id: str = Depends(get_entreprise_id),
    service: PayrollService = Depends(get_payroll_service),
):
    """List employees."""
    return [EmployeResponse.model_validate(e) for e in service.list_employes(entreprise_id)]


@router.post("/paie/employes", response_model=EmployeResponse, status_code=201)
def create_employe(
    data: EmployeRequest,
    entreprise_id: str = Depends(get_entreprise_id),
    service: PayrollService = Depends(get_payroll_service),
):
    """Create an employee."""
    try:
        return EmployeResponse.model_validate(service.create_employe(entreprise_id, _employe_data(data)))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.put("/paie/employes/{id_employe}", response_model=EmployeResponse)
def update_employe(
    id_employe: str,
    data: EmployeRequest,
    entreprise_id: str = Depends(get_entreprise_id),
    service: PayrollService = Depends(get_payroll_service),
):
    """Update an employee."""
    try:
        employe = service.update_employe(entreprise_id, id_employe, _employe_data(data))
        return EmployeResponse.model_validate(employe)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.delete("/paie/employes/{id_employe}", status_code=204)
def delete_employe(
    id_employe: str,
    entreprise_id: str = Depends(get_entreprise_id),
    service: PayrollService = Depends(get_payroll_service),
):
    """Delete an employee without payslips."""
    try:
        service.delete_employe(entreprise_id, id_employe)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/paie/bulletins", response_model=list[BulletinResponse])
def list_bulletins(
    exercice_id: Optional[str] = Query(None),
    employe_id: Optional[str] = Query(None),
    entreprise_id: str = Depends(get_entreprise_id),
    service: PayrollService = Depends(get_payroll_service),
):
    """List payslips."""
    bulletins = service.list_bulletins(entreprise_id, exercice_id=exercice_id, employe_id=employe_id)
    return [BulletinResponse.model_validate(b) for b in bulletins]


@router.post("/paie/bulletins", response_model=BulletinResponse, status_code=201)
def create_bulletin(
    data: BulletinCreateRequest,
    entreprise_id: str = Depends(get_entreprise_id),
    service: PayrollService = Depends(get_payroll_service),
):
    """Create a payslip, posted at once when statut is Validee."""
    try:
        bulletin = service.create_bulletin(entreprise_id, BulletinCreate(
            employe_id=data.employe_id,
            exercice_id=data.exercice_id,
            periode_fin=data.periode_fin,
            salaire_brut=data.salaire_brut,
            cotisations_salariales=data.cotisations_salariales,
            cotisations_patronales=data.cotisations_patronales,
            statut=data.statut,
        ))
        return BulletinResponse.model_validate(bulletin)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/paie/bulletins/{id_bulletin}/validation", response_model=BulletinResponse)
def validate_bulletin(
    id_bulletin: str,
    entreprise_id: str = Depends(get_entreprise_id),
    service: PayrollService = Depends(get_payroll_service),
):
    """Validate a payslip and post it in the PA journal."""
    try:
        return BulletinResponse.model_validate(service.validate_bulletin(entreprise_id, id_bulletin))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


# =============================================================================
# Stock
# =============================================================================


@router.get("/stock/articles", response_model=list[ArticleResponse])
def list_articles(
    entreprise_id: str = Depends(get_entreprise_id),
    service: StockService = Depends(get_stock_service),
):
    """List articles with quantity, value and CMP."""
    return [ArticleResponse.model_validate(a) for a in service.list_articles(entreprise_id)]


@router.post("/stock/articles", response_model=ArticleResponse, status_code=201)
def create_article(
    data: ArticleCreate,
    entreprise_id: str = Depends(get_entreprise_id),
    service: StockService = Depends(get_stock_service),
):
    """Create an article."""
    try:
        article = service.create_article(
            entreprise_id, data.reference, data.denomination, data.unite_stockage
        )
        return ArticleResponse.model_validate(article)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/stock/mouvements", response_model=list[MouvementResponse])
def list_mouvements(
    article_id: Optional[str] = Query(None),
    entreprise_id: str = Depends(get_entreprise_id),
    service: StockService = Depends(get_stock_service),
):
    """Movement history, most recent first."""
    try:
        mouvements = service.list_mouvements(entreprise_id, article_id=article_id)
        return [MouvementResponse.model_validate(m) for m in mouvements]
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/stock/mouvements", response_model=ArticleResponse, status_code=201)
def enregistrer_mouvement(
    data: MouvementRequest,
    entreprise_id: str = Depends(get_entreprise_id),
    service: StockService = Depends(get_stock_service),
):
    """Record a stock entry or exit valued at CMP."""
    try:
        article = service.enregistrer_mouvement_stock(
            entreprise_id,
            data.article_id,
            data.type_mouvement,
            data.quantite,
            cout_unitaire=data.cout_unitaire,
            libelle=data.libelle,
        )
        return ArticleResponse.model_validate(article)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
