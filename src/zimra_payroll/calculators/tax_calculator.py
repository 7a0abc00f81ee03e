"""PAYE calculation using rate-and-deduct bracket tables."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from zimra_payroll.calculators.helpers import round_money, to_decimal
from zimra_payroll.calculators.tax_tables import ZIMRA_USD_2025, TaxBracket, TaxTable
from zimra_payroll.calculators.types import BracketInfo


def format_percent(rate: Decimal) -> str:
    """0.25 -> '25', 0.045 -> '4.5'."""
    percent = (rate * 100).normalize()
    return format(percent, "f")


def format_amount(amount: Decimal) -> str:
    """Whole amounts without cents, thousands separated: 1000 -> '1,000'."""
    if amount == amount.to_integral_value():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"


class BracketTaxEngine:
    """Computes PAYE from gross income.

    Uses the published shortcut ``tax = income * rate - deduct`` for the
    bracket the income falls in. The deduct constants are precomputed so
    this agrees with summing every lower bracket, so the formula is kept as
    published rather than re-derived.

    Income beyond the last bracket of a bounded table is taxed at the
    highest bracket, making the engine total over non-negative income.
    """

    def __init__(self, table: TaxTable = ZIMRA_USD_2025):
        self.table = table

    def find_bracket(self, gross_income: Any) -> TaxBracket:
        """Bracket that applies to ``gross_income``.

        The first bracket is inclusive at both ends; the rest exclude their
        lower bound. Non-positive income lands in the first bracket.
        """
        amount = to_decimal(gross_income)
        brackets = self.table.brackets
        if amount <= brackets[0].lower_bound:
            return brackets[0]

        for index, bracket in enumerate(brackets):
            if bracket.contains(amount, first=index == 0):
                return bracket

        return self.table.highest_bracket

    def compute_primary_tax(self, gross_income: Any) -> Decimal:
        """PAYE for ``gross_income``, rounded to cents."""
        amount = to_decimal(gross_income)
        if amount <= 0:
            return Decimal("0")

        bracket = self.find_bracket(amount)
        return round_money(amount * bracket.rate - bracket.subtraction_term)

    def describe_bracket(self, gross_income: Any) -> str:
        """Payslip wording for the bracket, e.g. '25% on amount over $300'."""
        bracket = self.find_bracket(gross_income)
        if bracket.rate == 0:
            return f"0% (First ${format_amount(bracket.upper_bound or bracket.lower_bound)} tax-free)"
        return f"{format_percent(bracket.rate)}% on amount over ${format_amount(bracket.lower_bound)}"

    def bracket_info(self, gross_income: Any) -> BracketInfo:
        """Bracket label and the marginal tax earned inside it."""
        amount = to_decimal(gross_income)
        bracket = self.find_bracket(amount)
        taxable = amount - bracket.lower_bound
        if bracket is self.table.brackets[0]:
            label_lower = format_amount(bracket.lower_bound)
        else:
            label_lower = format_amount(bracket.lower_bound + Decimal("0.01"))
        label_upper = "∞" if bracket.upper_bound is None else format_amount(bracket.upper_bound)
        return BracketInfo(
            bracket=f"${label_lower} - ${label_upper}",
            rate=Decimal(format_percent(bracket.rate)),
            taxable_amount=taxable,
            tax_amount=round_money(taxable * bracket.rate),
        )
