"""Payroll calculation endpoints."""

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, status

from zimra_payroll.api.dependencies import AppSettings, Registry
from zimra_payroll.api.schemas import (
    CalculateRequest,
    CalculateResponse,
    ErrorResponse,
    SummaryRequest,
    SummaryResponse,
    TaxResultSchema,
    ValidateRequest,
    ValidateResponse,
)
from zimra_payroll.calculators.composer import PayrollComposer
from zimra_payroll.calculators.tax_tables import TaxTable, TaxTableRegistry
from zimra_payroll.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payroll", tags=["payroll"])


def _select_table(
    registry: TaxTableRegistry,
    settings: Settings,
    version: str | None = None,
    as_of_date: date | None = None,
) -> TaxTable:
    """Explicit version wins, then calculation date, then the configured default."""
    if version:
        return registry.get(version)
    if as_of_date:
        return registry.for_date(as_of_date)
    return registry.get(settings.tax_table_version)


@router.post(
    "/calculate",
    response_model=CalculateResponse,
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def calculate_payroll(
    registry: Registry,
    settings: AppSettings,
    payload: CalculateRequest,
) -> CalculateResponse:
    """Compute PAYE, AIDS levy, NSSA and net pay for one employee."""
    table = _select_table(registry, settings, payload.table_version, payload.calculation_date)
    composer = PayrollComposer.for_table(table, strict=settings.strict_components)

    result = composer.compose_payroll(payload.components.to_components())

    validation = composer.validate(result)
    if not validation.is_valid:
        logger.error("Tax calculation validation failed: %s", validation.errors)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": "Tax calculation validation failed",
                "errors": validation.errors,
            },
        )

    return CalculateResponse(
        table_version=table.version,
        result=TaxResultSchema.model_validate(result),
    )


@router.post(
    "/validate",
    response_model=ValidateResponse,
    responses={422: {"model": ErrorResponse}},
)
async def validate_payroll(
    registry: Registry,
    settings: AppSettings,
    payload: ValidateRequest,
) -> ValidateResponse:
    """Check a stored or submitted result for stale or tampered figures."""
    table = _select_table(registry, settings, payload.table_version)
    validation = PayrollComposer.for_table(table).validate(payload.result.to_result())

    return ValidateResponse(
        table_version=table.version,
        is_valid=validation.is_valid,
        errors=validation.errors,
    )


@router.post("/summary", response_model=SummaryResponse)
async def summarize_payroll(payload: SummaryRequest) -> SummaryResponse:
    """Totals across a period's results."""
    summary = PayrollComposer.summarize(r.to_result() for r in payload.results)
    return SummaryResponse.from_summary(summary)
