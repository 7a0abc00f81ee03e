"""Versioned, immutable tax tables.

A table is never edited in place. A new tax year is a new table with its own
version and effective date, so recalculating an old period still uses the
brackets that applied then.

Payload structure (JSON files and API responses):
{
    "version": "zimra-usd-2025",
    "effective_from": "2025-01-01",
    "currency": "USD",
    "aids_levy_rate": "0.03",
    "nssa_rate": "0.045",
    "brackets": [
        {"min": 0, "max": 100, "rate": 0.00, "deduct": 0},
        {"min": 100, "max": 300, "rate": 0.20, "deduct": 20},
        ...
        {"min": 3000, "max": null, "rate": 0.40, "deduct": 335}
    ]
}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from zimra_payroll.calculators.errors import DomainError

logger = logging.getLogger(__name__)


class TaxTableError(DomainError):
    """Raised when a tax table is malformed."""

    code = "INVALID_TAX_TABLE"


class TaxTableNotFoundError(DomainError):
    """Raised when no table matches a version or calculation date."""

    code = "TAX_TABLE_NOT_FOUND"

    def __init__(self, version: str | None = None, as_of_date: date | None = None):
        self.version = version
        self.as_of_date = as_of_date
        if version is not None:
            message = f"Tax table '{version}' not found"
        else:
            message = f"No tax table effective {as_of_date}"
        super().__init__(message)


def _payload_decimal(value: Any, field_name: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise TaxTableError(f"Invalid {field_name}: {value!r}") from None
    if not amount.is_finite():
        raise TaxTableError(f"Invalid {field_name}: {value!r}")
    return amount


def _payload_date(value: Any, field_name: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise TaxTableError(f"Invalid {field_name}: {value!r}") from None


@dataclass(frozen=True)
class TaxBracket:
    """One bracket of a rate-and-deduct table.

    Tax for income in the bracket is ``income * rate - subtraction_term``.
    The lower bound is exclusive except for the first bracket.
    """

    lower_bound: Decimal
    upper_bound: Decimal | None  # None = no upper limit
    rate: Decimal  # As decimal, e.g. 0.25 for 25%
    subtraction_term: Decimal = Decimal("0")

    def contains(self, amount: Decimal, first: bool = False) -> bool:
        if amount < self.lower_bound or (amount == self.lower_bound and not first):
            return False
        return self.upper_bound is None or amount <= self.upper_bound

    def to_payload(self) -> dict[str, Any]:
        return {
            "min": str(self.lower_bound),
            "max": str(self.upper_bound) if self.upper_bound is not None else None,
            "rate": str(self.rate),
            "deduct": str(self.subtraction_term),
        }


@dataclass(frozen=True)
class TaxTable:
    """A complete statutory table for one tax year."""

    version: str
    effective_from: date
    brackets: tuple[TaxBracket, ...]
    aids_levy_rate: Decimal
    nssa_rate: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        object.__setattr__(self, "brackets", tuple(self.brackets))
        self._check_brackets()

    def _check_brackets(self) -> None:
        if not self.brackets:
            raise TaxTableError(f"Tax table '{self.version}' has no brackets")
        if self.brackets[0].lower_bound != 0:
            raise TaxTableError(f"Tax table '{self.version}' must start at 0")

        for index, bracket in enumerate(self.brackets):
            if not Decimal("0") <= bracket.rate < Decimal("1"):
                raise TaxTableError(f"Bracket {index} rate {bracket.rate} outside [0, 1)")
            if bracket.subtraction_term < 0:
                raise TaxTableError(f"Bracket {index} has a negative subtraction term")
            if bracket.upper_bound is not None and bracket.upper_bound <= bracket.lower_bound:
                raise TaxTableError(f"Bracket {index} upper bound must exceed its lower bound")

            if index + 1 < len(self.brackets):
                following = self.brackets[index + 1]
                if bracket.upper_bound is None:
                    raise TaxTableError(f"Only the last bracket may be unbounded (bracket {index})")
                if following.lower_bound != bracket.upper_bound:
                    raise TaxTableError(
                        f"Brackets {index} and {index + 1} are not contiguous: "
                        f"{bracket.upper_bound} != {following.lower_bound}"
                    )

    @property
    def highest_bracket(self) -> TaxBracket:
        return self.brackets[-1]

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> TaxTable:
        """Parse a table from its JSON payload.

        Raises:
            TaxTableError: If a field is missing or holds an unparseable value.
        """
        try:
            brackets = [
                TaxBracket(
                    lower_bound=_payload_decimal(b["min"], f"brackets[{i}].min"),
                    upper_bound=(
                        _payload_decimal(b["max"], f"brackets[{i}].max")
                        if b.get("max") is not None
                        else None
                    ),
                    rate=_payload_decimal(b["rate"], f"brackets[{i}].rate"),
                    subtraction_term=_payload_decimal(b.get("deduct", 0), f"brackets[{i}].deduct"),
                )
                for i, b in enumerate(payload["brackets"])
            ]
            effective_from = _payload_date(payload["effective_from"], "effective_from")
            return cls(
                version=payload["version"],
                effective_from=effective_from,
                brackets=tuple(brackets),
                aids_levy_rate=_payload_decimal(payload["aids_levy_rate"], "aids_levy_rate"),
                nssa_rate=_payload_decimal(payload["nssa_rate"], "nssa_rate"),
                currency=payload.get("currency", "USD"),
            )
        except KeyError as exc:
            raise TaxTableError(f"Tax table payload missing field {exc}") from exc
        except (TypeError, AttributeError) as exc:
            raise TaxTableError(f"Malformed tax table payload: {exc}") from exc

    def to_payload(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "effective_from": self.effective_from.isoformat(),
            "currency": self.currency,
            "aids_levy_rate": str(self.aids_levy_rate),
            "nssa_rate": str(self.nssa_rate),
            "brackets": [b.to_payload() for b in self.brackets],
        }


ZIMRA_USD_2025 = TaxTable(
    version="zimra-usd-2025",
    effective_from=date(2025, 1, 1),
    brackets=(
        TaxBracket(Decimal("0"), Decimal("100"), Decimal("0.00"), Decimal("0")),
        TaxBracket(Decimal("100"), Decimal("300"), Decimal("0.20"), Decimal("20")),
        TaxBracket(Decimal("300"), Decimal("1000"), Decimal("0.25"), Decimal("35")),
        TaxBracket(Decimal("1000"), Decimal("2000"), Decimal("0.30"), Decimal("85")),
        TaxBracket(Decimal("2000"), Decimal("3000"), Decimal("0.35"), Decimal("185")),
        TaxBracket(Decimal("3000"), None, Decimal("0.40"), Decimal("335")),
    ),
    aids_levy_rate=Decimal("0.03"),
    nssa_rate=Decimal("0.045"),
    currency="USD",
)


class TaxTableRegistry:
    """Holds every known table version and picks one by version or date."""

    def __init__(self, tables: list[TaxTable] | None = None):
        self._tables: dict[str, TaxTable] = {}
        for table in tables or []:
            self.register(table)

    def register(self, table: TaxTable) -> None:
        if table.version in self._tables:
            raise TaxTableError(f"Tax table '{table.version}' is already registered")
        self._tables[table.version] = table
        logger.info(
            "Registered tax table %s effective %s", table.version, table.effective_from
        )

    def versions(self) -> list[str]:
        return sorted(self._tables)

    def tables(self) -> list[TaxTable]:
        return sorted(self._tables.values(), key=lambda t: t.effective_from)

    def get(self, version: str) -> TaxTable:
        try:
            return self._tables[version]
        except KeyError:
            raise TaxTableNotFoundError(version=version) from None

    def for_date(self, as_of_date: date) -> TaxTable:
        """Latest table whose effective date is on or before ``as_of_date``."""
        candidates = [t for t in self._tables.values() if t.effective_from <= as_of_date]
        if not candidates:
            raise TaxTableNotFoundError(as_of_date=as_of_date)
        return max(candidates, key=lambda t: t.effective_from)

    def load_directory(self, path: Path) -> list[TaxTable]:
        """Register every ``*.json`` table payload in ``path``."""
        loaded = []
        for file_path in sorted(Path(path).glob("*.json")):
            try:
                with file_path.open("r", encoding="utf-8") as handle:
                    table = TaxTable.from_payload(json.load(handle))
            except json.JSONDecodeError as exc:
                raise TaxTableError(f"{file_path.name}: invalid JSON ({exc})") from exc
            except TaxTableError as exc:
                raise TaxTableError(f"{file_path.name}: {exc}") from exc
            self.register(table)
            loaded.append(table)
        return loaded


def default_registry() -> TaxTableRegistry:
    """Registry holding the built-in statutory tables."""
    return TaxTableRegistry([ZIMRA_USD_2025])
