"""Money helpers shared by the calculators.

Rounding is half away from zero at the cent (``ROUND_HALF_UP`` on
``Decimal``), never banker's rounding.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from zimra_payroll.calculators.errors import DomainError

CENT = Decimal("0.01")
DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.5")


def to_decimal(value: Any) -> Decimal:
    """Coerce an amount to Decimal; ``None`` counts as zero."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(amount: Any) -> Decimal:
    """Round to cents, half away from zero."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def prorated_salary(full_salary: Any, days_worked: Any, total_days_in_month: Any) -> Decimal:
    """Salary for a partial month."""
    total_days = to_decimal(total_days_in_month)
    if total_days == 0:
        raise DomainError("Cannot prorate salary over a month with zero days")
    return round_money(to_decimal(full_salary) * to_decimal(days_worked) / total_days)


def overtime_pay(
    hourly_rate: Any,
    overtime_hours: Any,
    multiplier: Any = DEFAULT_OVERTIME_MULTIPLIER,
) -> Decimal:
    """Overtime pay at ``multiplier`` times the hourly rate."""
    return round_money(to_decimal(hourly_rate) * to_decimal(overtime_hours) * to_decimal(multiplier))


def working_days(days_in_month: int) -> int:
    """Approximate weekdays in a month of ``days_in_month`` days."""
    return days_in_month * 5 // 7


def unpaid_leave_deduction(basic_salary: Any, days_in_month: int, unpaid_leave_days: Any) -> Decimal:
    """Amount to take off basic salary for approved unpaid leave.

    The daily rate is basic salary over working days, not calendar days.
    """
    days = working_days(days_in_month)
    if days == 0:
        raise DomainError(f"No working days in a month of {days_in_month} days")
    daily_rate = to_decimal(basic_salary) / Decimal(days)
    return round_money(daily_rate * to_decimal(unpaid_leave_days))
