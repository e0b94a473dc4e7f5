"""Repository protocol definitions (interfaces)."""

from comptapro.repositories.protocols.company_repo import CompanyRepository
from comptapro.repositories.protocols.user_repo import UserRepository
from comptapro.repositories.protocols.chart_repo import ChartRepository
from comptapro.repositories.protocols.journal_repo import JournalRepository
from comptapro.repositories.protocols.exercise_repo import ExerciseRepository
from comptapro.repositories.protocols.ledger_repo import LedgerRepository
from comptapro.repositories.protocols.invoice_repo import InvoiceRepository
from comptapro.repositories.protocols.asset_repo import AssetRepository
from comptapro.repositories.protocols.payroll_repo import PayrollRepository
from comptapro.repositories.protocols.stock_repo import StockRepository
from comptapro.repositories.protocols.platform_repo import PlatformRepository

__all__ = [
    "CompanyRepository",
    "UserRepository",
    "ChartRepository",
    "JournalRepository",
    "ExerciseRepository",
    "LedgerRepository",
    "InvoiceRepository",
    "AssetRepository",
    "PayrollRepository",
    "StockRepository",
    "PlatformRepository",
]
