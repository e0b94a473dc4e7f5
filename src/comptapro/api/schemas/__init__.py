"""Pydantic schemas for API request/response."""

from comptapro.api.schemas.auth import (
    Credentials,
    UserResponse,
    ProfilResponse,
    EntrepriseResponse,
    SessionResponse,
    SetupRequest,
    SetupResponse,
)
from comptapro.api.schemas.chart import (
    CompteCreate,
    CompteRename,
    CompteResponse,
    CompteModeleResponse,
    CopyPlanResponse,
    JournalCreate,
    JournalResponse,
    ConfigurationCheckResponse,
    ExerciceCreate,
    ExerciceResponse,
)
from comptapro.api.schemas.ledger import (
    LigneCreateRequest,
    EcritureCreateRequest,
    EcritureResponse,
    BalanceLineResponse,
    GrandLivreLineResponse,
)
from comptapro.api.schemas.invoice import (
    TiersCreate,
    TiersResponse,
    FactureLigneRequest,
    FactureCreateRequest,
    FactureResponse,
    NextNumeroResponse,
)
from comptapro.api.schemas.operations import (
    ImmobilisationCreateRequest,
    ImmobilisationResponse,
    AmortissementRequest,
    MessageResponse,
    EmployeRequest,
    EmployeResponse,
    BulletinCreateRequest,
    BulletinResponse,
    ArticleCreate,
    ArticleResponse,
    MouvementRequest,
    MouvementResponse,
)
from comptapro.api.schemas.reports import (
    BilanResponse,
    CompteDeResultatResponse,
    DashboardResponse,
)
from comptapro.api.schemas.admin import (
    MemberInvite,
    RoleUpdate,
    CompanySummaryResponse,
    GlobalUserResponse,
    PlanResponse,
    PlanPriceUpdate,
    ActivityLogResponse,
    SyntheseResponse,
    PlatformStatResponse,
)

__all__ = [
    "Credentials",
    "UserResponse",
    "ProfilResponse",
    "EntrepriseResponse",
    "SessionResponse",
    "SetupRequest",
    "SetupResponse",
    "CompteCreate",
    "CompteRename",
    "CompteResponse",
    "CompteModeleResponse",
    "CopyPlanResponse",
    "JournalCreate",
    "JournalResponse",
    "ConfigurationCheckResponse",
    "ExerciceCreate",
    "ExerciceResponse",
    "LigneCreateRequest",
    "EcritureCreateRequest",
    "EcritureResponse",
    "BalanceLineResponse",
    "GrandLivreLineResponse",
    "TiersCreate",
    "TiersResponse",
    "FactureLigneRequest",
    "FactureCreateRequest",
    "FactureResponse",
    "NextNumeroResponse",
    "ImmobilisationCreateRequest",
    "ImmobilisationResponse",
    "AmortissementRequest",
    "MessageResponse",
    "EmployeRequest",
    "EmployeResponse",
    "BulletinCreateRequest",
    "BulletinResponse",
    "ArticleCreate",
    "ArticleResponse",
    "MouvementRequest",
    "MouvementResponse",
    "BilanResponse",
    "CompteDeResultatResponse",
    "DashboardResponse",
    "MemberInvite",
    "RoleUpdate",
    "CompanySummaryResponse",
    "GlobalUserResponse",
    "PlanResponse",
    "PlanPriceUpdate",
    "ActivityLogResponse",
    "SyntheseResponse",
    "PlatformStatResponse",
]
