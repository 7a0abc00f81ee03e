"""Pytest fixtures for payroll tax engine tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from zimra_payroll.calculators.composer import PayrollComposer
from zimra_payroll.calculators.tax_calculator import BracketTaxEngine
from zimra_payroll.calculators.tax_tables import (
    ZIMRA_USD_2025,
    TaxBracket,
    TaxTable,
    TaxTableRegistry,
)
from zimra_payroll.calculators.types import PayrollComponents
from zimra_payroll.config import get_settings


@pytest.fixture
def clean_settings(monkeypatch):
    """Isolate tests from the developer's environment and .env file."""
    for key in (
        "TAX_TABLE_VERSION",
        "TAX_TABLES_PATH",
        "STRICT_COMPONENTS",
        "ENGINE_VERSION",
        "HOST",
        "PORT",
        "DEBUG",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("zimra_payroll.config.load_dotenv", lambda: False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def engine() -> BracketTaxEngine:
    return BracketTaxEngine(ZIMRA_USD_2025)


@pytest.fixture
def composer() -> PayrollComposer:
    return PayrollComposer.for_table(ZIMRA_USD_2025)


@pytest.fixture
def capped_table() -> TaxTable:
    """A table whose last bracket is bounded, so the fallback path runs."""
    return TaxTable(
        version="capped-test",
        effective_from=date(2025, 1, 1),
        brackets=(
            TaxBracket(Decimal("0"), Decimal("100"), Decimal("0"), Decimal("0")),
            TaxBracket(Decimal("100"), Decimal("300"), Decimal("0.20"), Decimal("20")),
        ),
        aids_levy_rate=Decimal("0.03"),
        nssa_rate=Decimal("0.045"),
    )


@pytest.fixture
def table_2026() -> TaxTable:
    """A later tax year with higher thresholds."""
    return TaxTable(
        version="zimra-usd-2026",
        effective_from=date(2026, 1, 1),
        brackets=(
            TaxBracket(Decimal("0"), Decimal("200"), Decimal("0"), Decimal("0")),
            TaxBracket(Decimal("200"), None, Decimal("0.20"), Decimal("40")),
        ),
        aids_levy_rate=Decimal("0.03"),
        nssa_rate=Decimal("0.045"),
    )


@pytest.fixture
def registry(table_2026) -> TaxTableRegistry:
    return TaxTableRegistry([ZIMRA_USD_2025, table_2026])


@pytest.fixture
def make_components():
    """Build components from string amounts; omitted fields are zero."""

    def _make(basic: str = "0", **amounts: str) -> PayrollComponents:
        return PayrollComponents.from_amounts(
            basic_salary=Decimal(basic),
            **{name: Decimal(value) for name, value in amounts.items()},
        )

    return _make
