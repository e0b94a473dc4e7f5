"""API routers package."""

from comptapro.api.routers.auth import router as auth_router
from comptapro.api.routers.chart import router as chart_router
from comptapro.api.routers.entries import router as entries_router
from comptapro.api.routers.invoices import router as invoices_router
from comptapro.api.routers.operations import router as operations_router
from comptapro.api.routers.reports import router as reports_router
from comptapro.api.routers.members import router as members_router
from comptapro.api.routers.admin import router as admin_router

__all__ = [
    "auth_router",
    "chart_router",
    "entries_router",
    "invoices_router",
    "operations_router",
    "reports_router",
    "members_router",
    "admin_router",
]
