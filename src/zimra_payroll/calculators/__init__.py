"""Payroll tax calculation core."""

from zimra_payroll.calculators.composer import PayrollComposer
from zimra_payroll.calculators.errors import DomainError, InvalidPayrollComponentError
from zimra_payroll.calculators.helpers import overtime_pay, prorated_salary, round_money
from zimra_payroll.calculators.tax_calculator import BracketTaxEngine
from zimra_payroll.calculators.tax_tables import (
    ZIMRA_USD_2025,
    TaxBracket,
    TaxTable,
    TaxTableRegistry,
    default_registry,
)
from zimra_payroll.calculators.types import PayrollComponents, TaxResult, ValidationResult

__all__ = [
    "BracketTaxEngine",
    "DomainError",
    "InvalidPayrollComponentError",
    "PayrollComponents",
    "PayrollComposer",
    "TaxBracket",
    "TaxResult",
    "TaxTable",
    "TaxTableRegistry",
    "ValidationResult",
    "ZIMRA_USD_2025",
    "default_registry",
    "overtime_pay",
    "prorated_salary",
    "round_money",
]
