"""Repository layer - data access abstractions and implementations."""

from comptapro.repositories.protocols import (
    CompanyRepository,
    UserRepository,
    ChartRepository,
    JournalRepository,
    ExerciseRepository,
    LedgerRepository,
    InvoiceRepository,
    AssetRepository,
    PayrollRepository,
    StockRepository,
    PlatformRepository,
)

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
