"""API routes."""

from statutory_reports.api.routes.health import router as health_router
from statutory_reports.api.routes.statutory_reports import router as statutory_reports_router

__all__ = ["statutory_reports_router", "health_router"]
