"""Payroll services built on the calculation core."""

from zimra_payroll.services.payroll_service import (
    BulkPayrollResult,
    PayrollCalculationError,
    PayrollCalculationRequest,
    PayrollCalculationResult,
    PayrollService,
    build_registry,
)

__all__ = [
    "BulkPayrollResult",
    "PayrollCalculationError",
    "PayrollCalculationRequest",
    "PayrollCalculationResult",
    "PayrollService",
    "build_registry",
]
