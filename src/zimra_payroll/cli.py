"""Payroll tax command line interface.

Usage:
    python -m zimra_payroll.cli calculate --basic-salary 500 --transport 50
    python -m zimra_payroll.cli calculate --basic-salary 500 --date 2025-06-30
    python -m zimra_payroll.cli brackets --table zimra-usd-2025
    python -m zimra_payroll.cli serve
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from zimra_payroll.calculators.composer import PayrollComposer
from zimra_payroll.calculators.errors import DomainError
from zimra_payroll.calculators.tax_tables import TaxTable, TaxTableRegistry
from zimra_payroll.calculators.types import PayrollComponents
from zimra_payroll.config import get_settings
from zimra_payroll.logging_config import configure_logging
from zimra_payroll.services.payroll_service import build_registry


def parse_amount(s: str) -> Decimal:
    """Parse a monetary amount."""
    try:
        amount = Decimal(s)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {s!r}") from None
    if not amount.is_finite():
        raise argparse.ArgumentTypeError(f"invalid amount: {s!r}")
    return amount


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    try:
        return date.fromisoformat(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: {s!r}") from None


class PayrollCli:
    """Payroll tax command line interface."""

    def __init__(self, registry: TaxTableRegistry | None = None) -> None:
        self.settings = get_settings()
        self._registry = registry
        self.parser = self._build_parser()

    @property
    def registry(self) -> TaxTableRegistry:
        if self._registry is None:
            self._registry = build_registry(self.settings)
        return self._registry

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m zimra_payroll.cli",
            description="Zimbabwe PAYE, AIDS levy and NSSA calculator",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        calculate = subparsers.add_parser(
            "calculate",
            help="Calculate gross-to-net pay for one employee",
        )
        calculate.add_argument("--basic-salary", type=parse_amount, required=True)
        calculate.add_argument("--transport", type=parse_amount, default=Decimal("0"))
        calculate.add_argument("--housing", type=parse_amount, default=Decimal("0"))
        calculate.add_argument("--other", type=parse_amount, default=Decimal("0"))
        calculate.add_argument("--bonuses", type=parse_amount, default=Decimal("0"))
        calculate.add_argument("--overtime", type=parse_amount, default=Decimal("0"))
        calculate.add_argument(
            "--date",
            type=parse_date,
            help="Calculation date; selects the table in force (ISO format)",
        )
        calculate.add_argument("--table", help="Tax table version to use")

        brackets = subparsers.add_parser("brackets", help="Show a tax table")
        brackets.add_argument("--table", help="Tax table version to show")

        subparsers.add_parser("serve", help="Run the HTTP API")

        return parser

    def _table(self, version: str | None, as_of_date: date | None = None) -> TaxTable:
        if version:
            return self.registry.get(version)
        if as_of_date:
            return self.registry.for_date(as_of_date)
        return self.registry.get(self.settings.tax_table_version)

    def run(self, args: list[str] | None = None) -> int:
        """Run CLI with arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        commands: dict[str, Callable[[argparse.Namespace], int]] = {
            "calculate": self._cmd_calculate,
            "brackets": self._cmd_brackets,
            "serve": self._cmd_serve,
        }

        try:
            return commands[parsed.command](parsed)
        except DomainError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    def _cmd_calculate(self, args: argparse.Namespace) -> int:
        """Print the tax result as JSON; exit 1 if it fails its own check."""
        table = self._table(args.table, args.date)
        composer = PayrollComposer.for_table(table, strict=self.settings.strict_components)
        components = PayrollComponents(
            basic_salary=args.basic_salary,
            transport_allowance=args.transport,
            housing_allowance=args.housing,
            other_allowances=args.other,
            bonuses=args.bonuses,
            overtime=args.overtime,
        )

        result = composer.compose_payroll(components)
        validation = composer.validate(result)

        output: dict[str, Any] = {
            "table_version": table.version,
            "result": result.to_dict(),
            "is_valid": validation.is_valid,
            "errors": validation.errors,
        }
        print(json.dumps(output, indent=2))
        return 0 if validation.is_valid else 1

    def _cmd_brackets(self, args: argparse.Namespace) -> int:
        """Print a table as a plain-text grid."""
        table = self._table(args.table)
        print(f"{table.version} (effective {table.effective_from}, {table.currency})")
        print(f"{'From':>10} {'To':>10} {'Rate':>6} {'Deduct':>8}")
        for bracket in table.brackets:
            upper = "-" if bracket.upper_bound is None else str(bracket.upper_bound)
            print(
                f"{bracket.lower_bound!s:>10} {upper:>10} "
                f"{bracket.rate * 100:>5.0f}% {bracket.subtraction_term!s:>8}"
            )
        print(f"AIDS levy: {table.aids_levy_rate * 100:.1f}% of PAYE")
        print(f"NSSA: {table.nssa_rate * 100:.1f}% of gross salary")
        return 0

    def _cmd_serve(self, args: argparse.Namespace) -> int:
        """Run the API with uvicorn."""
        from zimra_payroll.__main__ import main as serve

        serve()
        return 0


def main() -> int:
    """Main entry point."""
    configure_logging(get_settings().log_level)
    cli = PayrollCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
