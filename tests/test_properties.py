"""Property-based tests for the payroll tax invariants.

These tests use hypothesis to generate pay components and incomes and
verify the invariants hold for every one of them.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from hypothesis import given, settings, strategies as st

from zimra_payroll.calculators.composer import PayrollComposer
from zimra_payroll.calculators.tax_calculator import BracketTaxEngine
from zimra_payroll.calculators.types import PayrollComponents

ENGINE = BracketTaxEngine()
COMPOSER = PayrollComposer(ENGINE)

money = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("100000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)

payroll_components = st.builds(
    PayrollComponents,
    basic_salary=money,
    transport_allowance=money,
    housing_allowance=money,
    other_allowances=money,
    bonuses=money,
    overtime=money,
)


@given(income=st.decimals(min_value=Decimal("0"), max_value=Decimal("100"), places=2))
def test_first_hundred_is_tax_free(income):
    assert ENGINE.compute_primary_tax(income) == 0


@given(income=st.decimals(min_value=Decimal("-100000"), max_value=Decimal("0"), places=2))
def test_non_positive_income_pays_nothing(income):
    assert ENGINE.compute_primary_tax(income) == 0


@given(income=money)
def test_tax_never_negative_and_below_income(income):
    tax = ENGINE.compute_primary_tax(income)

    assert tax >= 0
    assert tax <= income


@given(income=money)
def test_one_cent_raise_never_costs_more_than_the_marginal_rate(income):
    """Continuity: no jump bigger than the top marginal rate on a cent, plus rounding."""
    step = ENGINE.compute_primary_tax(income + Decimal("0.01")) - ENGINE.compute_primary_tax(income)

    assert Decimal("0") <= step <= Decimal("0.01")


@settings(max_examples=200)
@given(c=payroll_components)
def test_net_plus_deductions_equals_gross(c):
    result = COMPOSER.compose_payroll(c)

    assert result.net_salary + result.total_deductions == result.gross_salary
    assert result.total_deductions == result.paye + result.aids_levy + result.nssa


@given(c=payroll_components)
def test_aids_levy_follows_paye(c):
    result = COMPOSER.compose_payroll(c)

    expected = (result.paye * Decimal("0.03")).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    assert result.aids_levy == expected
    assert result.nssa == COMPOSER.nssa(result.gross_salary)


@given(c=payroll_components)
def test_composition_is_idempotent(c):
    assert COMPOSER.compose_payroll(c) == COMPOSER.compose_payroll(c)


@settings(max_examples=200)
@given(c=payroll_components)
def test_fresh_results_always_validate(c):
    validation = COMPOSER.validate(COMPOSER.compose_payroll(c))

    assert validation.is_valid
    assert validation.errors == []
