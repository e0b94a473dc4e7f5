"""SQLAlchemy repository implementations."""

from comptapro.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    session_scope,
    init_db,
    reset_database,
    Base,
)
from comptapro.repositories.sqlalchemy.company_repo import SqlAlchemyCompanyRepository
from comptapro.repositories.sqlalchemy.user_repo import SqlAlchemyUserRepository
from comptapro.repositories.sqlalchemy.chart_repo import SqlAlchemyChartRepository
from comptapro.repositories.sqlalchemy.journal_repo import SqlAlchemyJournalRepository
from comptapro.repositories.sqlalchemy.exercise_repo import SqlAlchemyExerciseRepository
from comptapro.repositories.sqlalchemy.ledger_repo import SqlAlchemyLedgerRepository
from comptapro.repositories.sqlalchemy.invoice_repo import SqlAlchemyInvoiceRepository
from comptapro.repositories.sqlalchemy.asset_repo import SqlAlchemyAssetRepository
from comptapro.repositories.sqlalchemy.payroll_repo import SqlAlchemyPayrollRepository
from comptapro.repositories.sqlalchemy.stock_repo import SqlAlchemyStockRepository
from comptapro.repositories.sqlalchemy.platform_repo import SqlAlchemyPlatformRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "session_scope",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyCompanyRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyChartRepository",
    "SqlAlchemyJournalRepository",
    "SqlAlchemyExerciseRepository",
    "SqlAlchemyLedgerRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyAssetRepository",
    "SqlAlchemyPayrollRepository",
    "SqlAlchemyStockRepository",
    "SqlAlchemyPlatformRepository",
]
