"""API routes."""

from zimra_payroll.api.routes.health import router as health_router
from zimra_payroll.api.routes.payroll import router as payroll_router
from zimra_payroll.api.routes.tax_tables import router as tax_tables_router

__all__ = ["health_router", "payroll_router", "tax_tables_router"]
