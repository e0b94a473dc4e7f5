"""View models for service outputs."""

from comptapro.domain.views.ledger import BalanceLine, GrandLivreLine
from comptapro.domain.views.statements import (
    Bilan,
    CompteDeResultat,
    DashboardKpis,
    ConfigurationCheck,
)
from comptapro.domain.views.admin import (
    ActivityLogEntry,
    SyntheseLine,
    PlatformStat,
    CompanySummary,
    GlobalUser,
)
from comptapro.domain.views.session import AuthSession

__all__ = [
    "BalanceLine",
    "GrandLivreLine",
    "Bilan",
    "CompteDeResultat",
    "DashboardKpis",
    "ConfigurationCheck",
    "ActivityLogEntry",
    "SyntheseLine",
    "PlatformStat",
    "CompanySummary",
    "GlobalUser",
    "AuthSession",
]
