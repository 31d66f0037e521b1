import json

import pytest

from finplan.utils.plan_cli import main


def _run(capsys, *argv):
    with pytest.raises(SystemExit) as exc:
        main(list(argv))
    return exc.value.code, capsys.readouterr().out


def test_project_json(capsys):
    code, out = _run(capsys, "project", "--monthly", "5000", "--rate", "12", "--years", "3", "--start_year", "2024", "--json")
    assert code == 0
    data = json.loads(out)
    assert data["horizon_months"] == 36
    assert data["year_series"][-1]["year"] == 2027
    assert data["final_value"] == pytest.approx(217538.24, abs=1.0)


def test_project_text(capsys):
    code, out = _run(capsys, "project", "--monthly", "10000", "--rate", "0", "--years", "5")
    assert code == 0
    assert "₹6,00,000" in out


def test_goal_not_reached(capsys):
    code, out = _run(
        capsys, "goal", "--amount", "10000000", "--monthly", "5000", "--rate", "12",
        "--years", "3", "--start_year", "2024", "--json",
    )
    assert code == 0
    data = json.loads(out)
    assert data["reached"] is False
    assert data["year_goal_is_reached"] == 2050


def test_goal_invalid_input_exit_code(capsys):
    code, out = _run(capsys, "goal", "--amount", "100000", "--monthly", "0", "--years", "3")
    assert code == 2
    assert out.startswith("ERROR:")


def test_funds(capsys):
    code, out = _run(capsys, "funds", "--tier", "low", "--json")
    assert code == 0
    data = json.loads(out)
    assert [f["id"] for f in data["funds"]] == ["9", "2", "7"]


def test_funds_unknown_tier(capsys):
    code, _ = _run(capsys, "funds", "--tier", "wild")
    assert code == 2


def test_tax_text(capsys):
    code, out = _run(capsys, "tax", "--income", "1000000")
    assert code == 0
    assert "₹1,06,600" in out
    assert "New Regime: ₹62,400" in out


def test_validate_funds_ok(capsys):
    code, out = _run(capsys, "validate-funds")
    assert code == 0
    assert "OK" in out


def test_validate_funds_missing_file(capsys, tmp_path):
    code, out = _run(capsys, "validate-funds", "--catalog", str(tmp_path / "none.csv"), "--json")
    assert code == 2
    assert json.loads(out)["ok"] is False


def test_project_fractional_years_rejected(capsys):
    code, out = _run(capsys, "project", "--monthly", "5000", "--rate", "12", "--years", "2.55")
    assert code == 2
    assert "whole number of months" in out
