"""Type definitions for the payroll tax pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any, Mapping

from zimra_payroll.calculators.helpers import to_decimal

COMPONENT_LABELS = {
    "basic_salary": "Basic salary",
    "transport_allowance": "Transport allowance",
    "housing_allowance": "Housing allowance",
    "other_allowances": "Other allowances",
    "bonuses": "Bonuses",
    "overtime": "Overtime",
}

RESULT_AMOUNTS = (
    "gross_salary",
    "paye",
    "aids_levy",
    "nssa",
    "total_deductions",
    "net_salary",
)


@dataclass(frozen=True)
class PayrollComponents:
    """Raw pay components for one employee and period.

    ``overtime`` is overtime pay, not hours.
    """

    basic_salary: Decimal = Decimal("0")
    transport_allowance: Decimal = Decimal("0")
    housing_allowance: Decimal = Decimal("0")
    other_allowances: Decimal = Decimal("0")
    bonuses: Decimal = Decimal("0")
    overtime: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        for name in COMPONENT_LABELS:
            object.__setattr__(self, name, to_decimal(getattr(self, name)))

    @classmethod
    def from_amounts(cls, **amounts: Any) -> PayrollComponents:
        """Build components, treating missing or ``None`` amounts as zero."""
        unknown = set(amounts) - set(COMPONENT_LABELS)
        if unknown:
            raise TypeError(f"Unknown payroll components: {sorted(unknown)}")
        return cls(**{name: to_decimal(amounts.get(name)) for name in COMPONENT_LABELS})

    def allowances(self) -> Decimal:
        return self.transport_allowance + self.housing_allowance + self.other_allowances

    def gross(self) -> Decimal:
        return (
            self.basic_salary
            + self.transport_allowance
            + self.housing_allowance
            + self.other_allowances
            + self.bonuses
            + self.overtime
        )

    def items(self) -> list[tuple[str, Decimal]]:
        return [(name, getattr(self, name)) for name in COMPONENT_LABELS]


@dataclass(frozen=True)
class TaxBreakdown:
    """Display strings and sub-totals for a payslip. Not used in computation."""

    basic_salary: Decimal
    allowances: Decimal
    gross_total: Decimal
    paye_breakdown: str
    aids_levy_breakdown: str
    nssa_breakdown: str


@dataclass(frozen=True)
class TaxResult:
    """Gross-to-net result for one employee."""

    gross_salary: Decimal
    paye: Decimal
    aids_levy: Decimal
    nssa: Decimal
    total_deductions: Decimal
    net_salary: Decimal
    breakdown: TaxBreakdown | None = None

    def __post_init__(self) -> None:
        for name in RESULT_AMOUNTS:
            object.__setattr__(self, name, to_decimal(getattr(self, name)))

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly dict with amounts as strings."""
        data: dict[str, Any] = {
            "gross_salary": str(self.gross_salary),
            "paye": str(self.paye),
            "aids_levy": str(self.aids_levy),
            "nssa": str(self.nssa),
            "total_deductions": str(self.total_deductions),
            "net_salary": str(self.net_salary),
            "breakdown": None,
        }
        if self.breakdown is not None:
            data["breakdown"] = {
                key: str(value) if isinstance(value, Decimal) else value
                for key, value in asdict(self.breakdown).items()
            }
        return data

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> TaxResult:
        """Rebuild a result from a stored record or API payload.

        The breakdown is optional since stored records often drop it.
        """
        breakdown = record.get("breakdown")
        return cls(
            gross_salary=to_decimal(record["gross_salary"]),
            paye=to_decimal(record["paye"]),
            aids_levy=to_decimal(record["aids_levy"]),
            nssa=to_decimal(record["nssa"]),
            total_deductions=to_decimal(record["total_deductions"]),
            net_salary=to_decimal(record["net_salary"]),
            breakdown=(
                TaxBreakdown(
                    basic_salary=to_decimal(breakdown["basic_salary"]),
                    allowances=to_decimal(breakdown["allowances"]),
                    gross_total=to_decimal(breakdown["gross_total"]),
                    paye_breakdown=breakdown["paye_breakdown"],
                    aids_levy_breakdown=breakdown["aids_levy_breakdown"],
                    nssa_breakdown=breakdown["nssa_breakdown"],
                )
                if breakdown
                else None
            ),
        )


@dataclass
class ValidationResult:
    """Outcome of a consistency or input check."""

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0


@dataclass(frozen=True)
class TaxSummary:
    """Totals across a set of results, e.g. one payroll period."""

    total_gross_salary: Decimal
    total_paye: Decimal
    total_aids_levy: Decimal
    total_nssa: Decimal
    total_deductions: Decimal
    total_net_salary: Decimal
    employee_count: int


@dataclass(frozen=True)
class BracketInfo:
    """Which bracket an income falls in and the marginal tax inside it."""

    bracket: str
    rate: Decimal  # As a percentage, e.g. 25 for 25%
    taxable_amount: Decimal
    tax_amount: Decimal
