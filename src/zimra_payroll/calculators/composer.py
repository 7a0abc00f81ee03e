"""Gross-to-net payroll composition."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from zimra_payroll.calculators.errors import InvalidPayrollComponentError
from zimra_payroll.calculators.helpers import round_money
from zimra_payroll.calculators.tax_calculator import BracketTaxEngine, format_percent
from zimra_payroll.calculators.tax_tables import TaxTable
from zimra_payroll.calculators.types import (
    COMPONENT_LABELS,
    PayrollComponents,
    TaxBreakdown,
    TaxResult,
    TaxSummary,
    ValidationResult,
)

TOLERANCE = Decimal("0.01")


class PayrollComposer:
    """Builds a TaxResult from pay components.

    Pipeline (stable order):
    1) Sum components into gross salary
    2) PAYE from the bracket engine
    3) AIDS levy on PAYE (not on gross)
    4) NSSA on gross
    5) Total deductions and net salary

    By default negative components are not rejected; the result is
    internally consistent but meaningless. ``strict=True`` raises
    InvalidPayrollComponentError instead.
    """

    def __init__(self, engine: BracketTaxEngine | None = None, strict: bool = False):
        self.engine = engine or BracketTaxEngine()
        self.strict = strict

    @classmethod
    def for_table(cls, table: TaxTable, strict: bool = False) -> PayrollComposer:
        return cls(BracketTaxEngine(table), strict=strict)

    @property
    def table(self) -> TaxTable:
        return self.engine.table

    def aids_levy(self, paye: Decimal) -> Decimal:
        return round_money(paye * self.table.aids_levy_rate)

    def nssa(self, gross_salary: Decimal) -> Decimal:
        return round_money(gross_salary * self.table.nssa_rate)

    def compose_payroll(self, components: PayrollComponents) -> TaxResult:
        """Compute gross, statutory deductions and net pay."""
        if self.strict:
            check = self.validate_components(components)
            if not check.is_valid:
                raise InvalidPayrollComponentError(check.errors)

        gross_salary = components.gross()
        paye = self.engine.compute_primary_tax(gross_salary)
        aids_levy = self.aids_levy(paye)
        nssa = self.nssa(gross_salary)
        total_deductions = paye + aids_levy + nssa
        net_salary = gross_salary - total_deductions

        return TaxResult(
            gross_salary=gross_salary,
            paye=paye,
            aids_levy=aids_levy,
            nssa=nssa,
            total_deductions=total_deductions,
            net_salary=net_salary,
            breakdown=TaxBreakdown(
                basic_salary=components.basic_salary,
                allowances=components.allowances(),
                gross_total=gross_salary,
                paye_breakdown=self.engine.describe_bracket(gross_salary),
                aids_levy_breakdown=(
                    f"{aids_levy:.2f} ({format_percent(self.table.aids_levy_rate)}% of PAYE)"
                ),
                nssa_breakdown=(
                    f"{nssa:.2f} ({format_percent(self.table.nssa_rate)}% of gross salary)"
                ),
            ),
        )

    def validate(self, result: TaxResult) -> ValidationResult:
        """Recompute every derived figure and report mismatches.

        Meant for results crossing a trust boundary (reloaded from storage,
        received over the API). Never raises.
        """
        validation = ValidationResult()

        checks = [
            ("PAYE", self.engine.compute_primary_tax(result.gross_salary), result.paye),
            ("AIDS Levy", self.aids_levy(result.paye), result.aids_levy),
            ("NSSA", self.nssa(result.gross_salary), result.nssa),
            ("Net salary", result.gross_salary - result.total_deductions, result.net_salary),
        ]
        for label, expected, actual in checks:
            if abs(actual - expected) > TOLERANCE:
                validation.errors.append(
                    f"{label} calculation error: expected {expected}, got {actual}"
                )

        return validation

    @staticmethod
    def validate_components(components: PayrollComponents) -> ValidationResult:
        """Check that no component is negative."""
        validation = ValidationResult()
        for name, amount in components.items():
            if amount < 0:
                validation.errors.append(f"{COMPONENT_LABELS[name]} cannot be negative")
        return validation

    @staticmethod
    def summarize(results: Iterable[TaxResult]) -> TaxSummary:
        """Totals across results, e.g. for a period's compliance report."""
        results = list(results)
        return TaxSummary(
            total_gross_salary=sum((r.gross_salary for r in results), Decimal("0")),
            total_paye=sum((r.paye for r in results), Decimal("0")),
            total_aids_levy=sum((r.aids_levy for r in results), Decimal("0")),
            total_nssa=sum((r.nssa for r in results), Decimal("0")),
            total_deductions=sum((r.total_deductions for r in results), Decimal("0")),
            total_net_salary=sum((r.net_salary for r in results), Decimal("0")),
            employee_count=len(results),
        )
