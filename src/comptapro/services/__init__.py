"""Service layer - business logic orchestration."""

from comptapro.services.exercise_service import ExerciseService
from comptapro.services.chart_service import ChartService
from comptapro.services.journal_service import JournalService
from comptapro.services.ledger_service import LedgerService, EcritureCreate, LigneCreate
from comptapro.services.auth_service import AuthService, AuthEventBus, auth_events
from comptapro.services.onboarding_service import OnboardingService, SetupResult
from comptapro.services.invoicing_service import (
    InvoicingService,
    FactureCreate,
    FactureLigneCreate,
)
from comptapro.services.reporting_service import ReportingService
from comptapro.services.asset_service import AssetService, ImmobilisationCreate
from comptapro.services.payroll_service import PayrollService, EmployeCreate, BulletinCreate
from comptapro.services.stock_service import StockService
from comptapro.services.member_service import MemberService
from comptapro.services.admin_service import AdminService

__all__ = [
    "ExerciseService",
    "ChartService",
    "JournalService",
    "LedgerService",
    "EcritureCreate",
    "LigneCreate",
    "AuthService",
    "AuthEventBus",
    "auth_events",
    "OnboardingService",
    "SetupResult",
    "InvoicingService",
    "FactureCreate",
    "FactureLigneCreate",
    "ReportingService",
    "AssetService",
    "ImmobilisationCreate",
    "PayrollService",
    "EmployeCreate",
    "BulletinCreate",
    "StockService",
    "MemberService",
    "AdminService",
]
