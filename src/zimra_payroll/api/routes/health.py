"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from pydantic import BaseModel

from zimra_payroll.api.dependencies import AppSettings, Registry
from zimra_payroll.calculators.tax_tables import TaxTableNotFoundError, TaxTableRegistry
from zimra_payroll.config import Settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    tax_table: str
    engine_version: str


class StatusResponse(BaseModel):
    """Readiness and liveness response."""

    status: str
    timestamp: datetime
    tax_table: str


def _active_table(settings: Settings, registry: TaxTableRegistry) -> str | None:
    """Configured table version, or None if it is not loaded."""
    try:
        return registry.get(settings.tax_table_version).version
    except TaxTableNotFoundError:
        return None


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
)
async def health_check(settings: AppSettings, registry: Registry) -> HealthResponse:
    """Check that the configured tax table is loaded."""
    table = _active_table(settings, registry)

    return HealthResponse(
        status="healthy" if table else "degraded",
        timestamp=datetime.now(timezone.utc),
        tax_table=table or "missing",
        engine_version=settings.engine_version,
    )


@router.get("/ready", response_model=StatusResponse, status_code=status.HTTP_200_OK)
async def readiness_check(settings: AppSettings, registry: Registry) -> StatusResponse:
    """Readiness check for container orchestration."""
    table = _active_table(settings, registry)
    return StatusResponse(
        status="ready" if table else "not_ready",
        timestamp=datetime.now(timezone.utc),
        tax_table=table or "missing",
    )


@router.get("/live", response_model=StatusResponse, status_code=status.HTTP_200_OK)
async def liveness_check(settings: AppSettings) -> StatusResponse:
    """Liveness check for container orchestration."""
    return StatusResponse(
        status="alive",
        timestamp=datetime.now(timezone.utc),
        tax_table=settings.tax_table_version,
    )
