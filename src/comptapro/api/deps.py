"""Dependency injection for FastAPI."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from comptapro.core.exceptions import PermissionDeniedError
from comptapro.domain.models import Profil
from comptapro.domain.views import AuthSession
from comptapro.repositories.sqlalchemy.database import get_db
from comptapro.repositories.sqlalchemy import (
    SqlAlchemyAssetRepository,
    SqlAlchemyChartRepository,
    SqlAlchemyCompanyRepository,
    SqlAlchemyExerciseRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyJournalRepository,
    SqlAlchemyLedgerRepository,
    SqlAlchemyPayrollRepository,
    SqlAlchemyPlatformRepository,
    SqlAlchemyStockRepository,
    SqlAlchemyUserRepository,
)
from comptapro.services import (
    AdminService,
    AssetService,
    AuthService,
    ChartService,
    ExerciseService,
    InvoicingService,
    JournalService,
    LedgerService,
    MemberService,
    OnboardingService,
    PayrollService,
    ReportingService,
    StockService,
)
from comptapro.services.member_service import require_admin
from comptapro.csv import CsvExporter

# Bearer token issued by POST /auth/sign-in
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/sign-in", auto_error=False)


# -----------------------------------------------------------------------------
# Repositories
# -----------------------------------------------------------------------------


def get_company_repo(db: Session = Depends(get_db)) -> SqlAlchemyCompanyRepository:
    """Provide CompanyRepository instance."""
    return SqlAlchemyCompanyRepository(db)


def get_user_repo(db: Session = Depends(get_db)) -> SqlAlchemyUserRepository:
    """Provide UserRepository instance."""
    return SqlAlchemyUserRepository(db)


def get_chart_repo(db: Session = Depends(get_db)) -> SqlAlchemyChartRepository:
    """Provide ChartRepository instance."""
    return SqlAlchemyChartRepository(db)


def get_journal_repo(db: Session = Depends(get_db)) -> SqlAlchemyJournalRepository:
    """Provide JournalRepository instance."""
    return SqlAlchemyJournalRepository(db)


def get_exercise_repo(db: Session = Depends(get_db)) -> SqlAlchemyExerciseRepository:
    """Provide ExerciseRepository instance."""
    return SqlAlchemyExerciseRepository(db)


def get_ledger_repo(db: Session = Depends(get_db)) -> SqlAlchemyLedgerRepository:
    """Provide LedgerRepository instance."""
    return SqlAlchemyLedgerRepository(db)


def get_invoice_repo(db: Session = Depends(get_db)) -> SqlAlchemyInvoiceRepository:
    """Provide InvoiceRepository instance."""
    return SqlAlchemyInvoiceRepository(db)


def get_asset_repo(db: Session = Depends(get_db)) -> SqlAlchemyAssetRepository:
    """Provide AssetRepository instance."""
    return SqlAlchemyAssetRepository(db)


def get_payroll_repo(db: Session = Depends(get_db)) -> SqlAlchemyPayrollRepository:
    """Provide PayrollRepository instance."""
    return SqlAlchemyPayrollRepository(db)


def get_stock_repo(db: Session = Depends(get_db)) -> SqlAlchemyStockRepository:
    """Provide StockRepository instance."""
    return SqlAlchemyStockRepository(db)


def get_platform_repo(db: Session = Depends(get_db)) -> SqlAlchemyPlatformRepository:
    """Provide PlatformRepository instance."""
    return SqlAlchemyPlatformRepository(db)


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------


def get_auth_service(
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
    company_repo: SqlAlchemyCompanyRepository = Depends(get_company_repo),
) -> AuthService:
    """Provide AuthService instance."""
    return AuthService(user_repo=user_repo, company_repo=company_repo)


def get_onboarding_service(
    company_repo: SqlAlchemyCompanyRepository = Depends(get_company_repo),
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
    chart_repo: SqlAlchemyChartRepository = Depends(get_chart_repo),
    journal_repo: SqlAlchemyJournalRepository = Depends(get_journal_repo),
    exercise_repo: SqlAlchemyExerciseRepository = Depends(get_exercise_repo),
) -> OnboardingService:
    """Provide OnboardingService instance."""
    return OnboardingService(
        company_repo=company_repo,
        user_repo=user_repo,
        chart_repo=chart_repo,
        journal_repo=journal_repo,
        exercise_repo=exercise_repo,
    )


def get_chart_service(
    chart_repo: SqlAlchemyChartRepository = Depends(get_chart_repo),
) -> ChartService:
    """Provide ChartService instance."""
    return ChartService(chart_repo=chart_repo)


def get_journal_service(
    journal_repo: SqlAlchemyJournalRepository = Depends(get_journal_repo),
    chart_repo: SqlAlchemyChartRepository = Depends(get_chart_repo),
) -> JournalService:
    """Provide JournalService instance."""
    return JournalService(journal_repo=journal_repo, chart_repo=chart_repo)


def get_exercise_service(
    exercise_repo: SqlAlchemyExerciseRepository = Depends(get_exercise_repo),
) -> ExerciseService:
    """Provide ExerciseService instance."""
    return ExerciseService(exercise_repo=exercise_repo)


def get_ledger_service(
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
    chart_repo: SqlAlchemyChartRepository = Depends(get_chart_repo),
    journal_repo: SqlAlchemyJournalRepository = Depends(get_journal_repo),
    exercise_repo: SqlAlchemyExerciseRepository = Depends(get_exercise_repo),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(
        ledger_repo=ledger_repo,
        chart_repo=chart_repo,
        journal_repo=journal_repo,
        exercise_repo=exercise_repo,
    )


def get_invoicing_service(
    invoice_repo: SqlAlchemyInvoiceRepository = Depends(get_invoice_repo),
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
    chart_repo: SqlAlchemyChartRepository = Depends(get_chart_repo),
    journal_repo: SqlAlchemyJournalRepository = Depends(get_journal_repo),
    exercise_repo: SqlAlchemyExerciseRepository = Depends(get_exercise_repo),
) -> InvoicingService:
    """Provide InvoicingService instance."""
    return InvoicingService(
        invoice_repo=invoice_repo,
        ledger_repo=ledger_repo,
        chart_repo=chart_repo,
        journal_repo=journal_repo,
        exercise_repo=exercise_repo,
    )


def get_reporting_service(
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
    invoice_repo: SqlAlchemyInvoiceRepository = Depends(get_invoice_repo),
    exercise_repo: SqlAlchemyExerciseRepository = Depends(get_exercise_repo),
) -> ReportingService:
    """Provide ReportingService instance."""
    return ReportingService(
        ledger_repo=ledger_repo,
        invoice_repo=invoice_repo,
        exercise_repo=exercise_repo,
    )


def get_asset_service(
    asset_repo: SqlAlchemyAssetRepository = Depends(get_asset_repo),
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
    chart_repo: SqlAlchemyChartRepository = Depends(get_chart_repo),
    journal_repo: SqlAlchemyJournalRepository = Depends(get_journal_repo),
    exercise_repo: SqlAlchemyExerciseRepository = Depends(get_exercise_repo),
) -> AssetService:
    """Provide AssetService instance."""
    return AssetService(
        asset_repo=asset_repo,
        ledger_repo=ledger_repo,
        chart_repo=chart_repo,
        journal_repo=journal_repo,
        exercise_repo=exercise_repo,
    )


def get_payroll_service(
    payroll_repo: SqlAlchemyPayrollRepository = Depends(get_payroll_repo),
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
    chart_repo: SqlAlchemyChartRepository = Depends(get_chart_repo),
    journal_repo: SqlAlchemyJournalRepository = Depends(get_journal_repo),
    exercise_repo: SqlAlchemyExerciseRepository = Depends(get_exercise_repo),
) -> PayrollService:
    """Provide PayrollService instance."""
    return PayrollService(
        payroll_repo=payroll_repo,
        ledger_repo=ledger_repo,
        chart_repo=chart_repo,
        journal_repo=journal_repo,
        exercise_repo=exercise_repo,
    )


def get_stock_service(
    stock_repo: SqlAlchemyStockRepository = Depends(get_stock_repo),
) -> StockService:
    """Provide StockService instance."""
    return StockService(stock_repo=stock_repo)


def get_member_service(
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
    company_repo: SqlAlchemyCompanyRepository = Depends(get_company_repo),
    platform_repo: SqlAlchemyPlatformRepository = Depends(get_platform_repo),
) -> MemberService:
    """Provide MemberService instance."""
    return MemberService(
        user_repo=user_repo,
        company_repo=company_repo,
        platform_repo=platform_repo,
    )


def get_admin_service(
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
    company_repo: SqlAlchemyCompanyRepository = Depends(get_company_repo),
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
    platform_repo: SqlAlchemyPlatformRepository = Depends(get_platform_repo),
) -> AdminService:
    """Provide AdminService instance."""
    return AdminService(
        user_repo=user_repo,
        company_repo=company_repo,
        ledger_repo=ledger_repo,
        platform_repo=platform_repo,
    )


def get_csv_exporter(
    ledger_service: LedgerService = Depends(get_ledger_service),
) -> CsvExporter:
    """Provide CsvExporter instance."""
    return CsvExporter(ledger_service=ledger_service)


# -----------------------------------------------------------------------------
# Authentication and tenant guards
# -----------------------------------------------------------------------------


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Session invalide ou expirée.",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_session(
    token: str = Depends(oauth2_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthSession:
    """Resolve the bearer token to a live session."""
    session = auth_service.get_session(token)
    if session is None:
        raise _credentials_exception()
    return session


def get_current_profile(session: AuthSession = Depends(get_current_session)) -> Profil:
    """Profile of a user whose company setup is complete."""
    if session.needs_setup:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Veuillez d'abord configurer votre entreprise.",
        )
    return session.profil


def get_entreprise_id(profil: Profil = Depends(get_current_profile)) -> str:
    """Company every tenant query is scoped to."""
    return profil.entreprise_id


def get_admin_profile(profil: Profil = Depends(get_current_profile)) -> Profil:
    """Profile of a company administrator."""
    try:
        return require_admin(profil)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)


def get_superadmin_session(
    session: AuthSession = Depends(get_current_session),
    admin_service: AdminService = Depends(get_admin_service),
) -> AuthSession:
    """Session of a platform super administrator."""
    try:
        admin_service.require_superadmin(session.user_id)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    return session
