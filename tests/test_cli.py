import json
from decimal import Decimal

import pytest

from zimra_payroll.cli import PayrollCli

pytestmark = pytest.mark.usefixtures("clean_settings")


def run_cli(capsys, *args, registry=None):
    code = PayrollCli(registry).run(list(args))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_calculate_prints_json(capsys):
    code, out, _ = run_cli(capsys, "calculate", "--basic-salary", "500")

    data = json.loads(out)
    assert code == 0
    assert data["table_version"] == "zimra-usd-2025"
    assert data["is_valid"] is True
    assert Decimal(data["result"]["paye"]) == Decimal("90.00")
    assert Decimal(data["result"]["net_salary"]) == Decimal("384.80")


def test_calculate_sums_components(capsys):
    code, out, _ = run_cli(
        capsys,
        "calculate",
        "--basic-salary", "4000",
        "--transport", "500",
        "--housing", "300",
        "--bonuses", "200",
    )

    data = json.loads(out)
    assert code == 0
    assert Decimal(data["result"]["gross_salary"]) == Decimal("5000")
    assert Decimal(data["result"]["paye"]) == Decimal("1665.00")


def test_calculate_selects_table_by_date(capsys, registry):
    code, out, _ = run_cli(
        capsys, "calculate", "--basic-salary", "500", "--date", "2026-02-01", registry=registry
    )

    data = json.loads(out)
    assert data["table_version"] == "zimra-usd-2026"
    assert Decimal(data["result"]["paye"]) == Decimal("60.00")


def test_calculate_rejects_negative_component(capsys):
    code, _, err = run_cli(capsys, "calculate", "--basic-salary", "500", "--bonuses", "-1")

    assert code == 2
    assert "Bonuses cannot be negative" in err


def test_unknown_table_reports_error(capsys):
    code, _, err = run_cli(capsys, "brackets", "--table", "nope")

    assert code == 2
    assert "Tax table 'nope' not found" in err


def test_brackets_lists_table(capsys):
    code, out, _ = run_cli(capsys, "brackets")

    assert code == 0
    assert out.startswith("zimra-usd-2025 (effective 2025-01-01, USD)")
    assert "335" in out
    assert "AIDS levy: 3.0% of PAYE" in out
    assert "NSSA: 4.5% of gross salary" in out


def test_no_command_prints_help(capsys):
    code, out, _ = run_cli(capsys)

    assert code == 1
    assert "usage" in out


@pytest.mark.parametrize("amount", ["NaN", "Infinity", "-inf"])
def test_calculate_rejects_non_finite_amount(capsys, amount):
    with pytest.raises(SystemExit) as exc_info:
        PayrollCli().run(["calculate", "--basic-salary", amount])

    assert exc_info.value.code == 2
    assert "invalid amount" in capsys.readouterr().err


def test_malformed_table_file_reports_error(capsys, tmp_path, monkeypatch):
    (tmp_path / "bad.json").write_text(
        json.dumps({"version": "x", "effective_from": "2025-13-01", "brackets": []}),
        encoding="utf-8",
    )
    monkeypatch.setenv("TAX_TABLES_PATH", str(tmp_path))

    code, _, err = run_cli(capsys, "brackets")

    assert code == 2
    assert "bad.json: Invalid effective_from" in err
