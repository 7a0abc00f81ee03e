"""Tax table endpoints."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, status

from zimra_payroll.api.dependencies import Registry
from zimra_payroll.api.schemas import ErrorResponse, TaxTableSchema
from zimra_payroll.calculators.tax_tables import TaxTableNotFoundError

router = APIRouter(prefix="/tax-tables", tags=["tax-tables"])


@router.get("", response_model=list[TaxTableSchema])
async def list_tax_tables(registry: Registry) -> list[TaxTableSchema]:
    """List every loaded table, oldest first."""
    return [TaxTableSchema.model_validate(t.to_payload()) for t in registry.tables()]


@router.get(
    "/{version}",
    response_model=TaxTableSchema,
    responses={404: {"model": ErrorResponse}},
)
async def get_tax_table(
    registry: Registry,
    version: Annotated[str, Path()],
) -> TaxTableSchema:
    """Get one table by version."""
    try:
        table = registry.get(version)
    except TaxTableNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return TaxTableSchema.model_validate(table.to_payload())
