"""Per-employee and bulk payroll calculation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from zimra_payroll.calculators.composer import PayrollComposer
from zimra_payroll.calculators.errors import DomainError
from zimra_payroll.calculators.tax_tables import TaxTable, TaxTableRegistry, default_registry
from zimra_payroll.calculators.types import PayrollComponents, TaxResult, ValidationResult
from zimra_payroll.config import Settings

logger = logging.getLogger(__name__)

MAX_DAYS_WORKED = 31


class PayrollCalculationError(Exception):
    """Raised when an employee's payroll cannot be calculated."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = list(errors or [])
        super().__init__(message)


@dataclass
class PayrollCalculationRequest:
    """Inputs for one employee's monthly payroll."""

    employee_id: str
    month: int
    year: int
    basic_salary: Decimal
    overtime_pay: Decimal = Decimal("0")
    transport_allowance: Decimal = Decimal("0")
    housing_allowance: Decimal = Decimal("0")
    other_allowances: Decimal = Decimal("0")
    bonuses: Decimal = Decimal("0")
    days_worked: int = 26
    days_absent: int = 0

    def components(self) -> PayrollComponents:
        return PayrollComponents.from_amounts(
            basic_salary=self.basic_salary,
            transport_allowance=self.transport_allowance,
            housing_allowance=self.housing_allowance,
            other_allowances=self.other_allowances,
            bonuses=self.bonuses,
            overtime=self.overtime_pay,
        )


@dataclass
class PayrollCalculationResult:
    """A calculated, validated payroll ready for persistence."""

    employee_id: str
    month: int
    year: int
    table_version: str
    tax: TaxResult
    days_worked: int
    days_absent: int


@dataclass
class BulkPayrollResult:
    """Successful results plus one message per failed employee."""

    results: list[PayrollCalculationResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0


def build_registry(settings: Settings) -> TaxTableRegistry:
    """Built-in tables plus any found under ``settings.tax_tables_path``."""
    registry = default_registry()
    if settings.tax_tables_path is not None:
        registry.load_directory(settings.tax_tables_path)
    return registry


class PayrollService:
    """Calculates payroll for employees using the table in force for the period.

    Persisting results is the caller's concern.
    """

    def __init__(self, registry: TaxTableRegistry | None = None, strict: bool = True):
        self.registry = registry or default_registry()
        self.strict = strict

    def composer_for(self, table: TaxTable) -> PayrollComposer:
        return PayrollComposer.for_table(table, strict=self.strict)

    def _check_request(self, request: PayrollCalculationRequest) -> None:
        if request.basic_salary <= 0:
            raise PayrollCalculationError("Basic salary must be greater than 0")
        if not 1 <= request.month <= 12:
            raise PayrollCalculationError(f"Month must be between 1 and 12, got {request.month}")
        if request.days_worked < 0 or request.days_worked > MAX_DAYS_WORKED:
            raise PayrollCalculationError(f"Days worked must be between 0 and {MAX_DAYS_WORKED}")
        if request.days_absent < 0:
            raise PayrollCalculationError("Days absent cannot be negative")

    def calculate_employee_payroll(
        self, request: PayrollCalculationRequest
    ) -> PayrollCalculationResult:
        """Calculate and validate one employee's payroll.

        Raises:
            PayrollCalculationError: If the request is invalid, no tax table
                covers the period, or the result fails its consistency check.
        """
        self._check_request(request)

        try:
            table = self.registry.for_date(date(request.year, request.month, 1))
            composer = self.composer_for(table)
            tax = composer.compose_payroll(request.components())
        except DomainError as exc:
            raise PayrollCalculationError(str(exc), getattr(exc, "errors", None)) from exc

        validation = composer.validate(tax)
        if not validation.is_valid:
            logger.error(
                "Tax calculation validation failed for employee %s: %s",
                request.employee_id,
                validation.errors,
            )
            raise PayrollCalculationError(
                f"Tax calculation validation failed: {', '.join(validation.errors)}",
                validation.errors,
            )

        return PayrollCalculationResult(
            employee_id=request.employee_id,
            month=request.month,
            year=request.year,
            table_version=table.version,
            tax=tax,
            days_worked=request.days_worked,
            days_absent=request.days_absent,
        )

    def calculate_bulk_payroll(
        self, requests: list[PayrollCalculationRequest]
    ) -> BulkPayrollResult:
        """Calculate many employees; one failure does not stop the rest."""
        bulk = BulkPayrollResult()

        for request in requests:
            try:
                bulk.results.append(self.calculate_employee_payroll(request))
            except PayrollCalculationError as exc:
                bulk.errors.append(f"Employee {request.employee_id}: {exc}")

        if bulk.errors:
            logger.warning("Some payroll calculations failed: %s", bulk.errors)

        return bulk

    def validate_record(self, tax: TaxResult, as_of_date: date | None = None) -> ValidationResult:
        """Consistency check for a result reloaded from storage.

        Without ``as_of_date`` the record is checked against the table in
        force today; tables registered ahead of their effective date are
        not used.
        """
        table = self.registry.for_date(as_of_date or date.today())
        return self.composer_for(table).validate(tax)
