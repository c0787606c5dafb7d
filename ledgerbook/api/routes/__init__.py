"""API routes."""

from ledgerbook.api.routes.commands import router as commands_router
from ledgerbook.api.routes.documents import router as documents_router
from ledgerbook.api.routes.draft import router as draft_router
from ledgerbook.api.routes.health import router as health_router
from ledgerbook.api.routes.products import router as products_router

__all__ = [
    "commands_router",
    "documents_router",
    "draft_router",
    "health_router",
    "products_router",
]
