import pytest

from finplan.core.config import DEFAULT_FUND_CATALOG
from finplan.utils.catalog_loader import REQUIRED_FUND_COLS, load_funds
from finplan.utils.validators import validate_fund_catalog

HEADER = ",".join(REQUIRED_FUND_COLS)


def _write(tmp_path, *rows, header=HEADER):
    p = tmp_path / "funds.csv"
    p.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
    return str(p)


def test_packaged_catalogue_loads_in_file_order():
    funds = load_funds(DEFAULT_FUND_CATALOG)
    assert len(funds) == 9
    assert [f.id for f in funds] == [str(i) for i in range(1, 10)]
    assert sum(1 for f in funds if f.risk_tier == "Low") == 3


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_funds(str(tmp_path / "nope.csv"))


def test_missing_columns(tmp_path):
    path = _write(tmp_path, "1,A", header="id,name")
    with pytest.raises(ValueError, match="missing columns"):
        load_funds(path)


def test_bad_row_reports_line(tmp_path):
    path = _write(
        tmp_path,
        "1,A,Debt Fund,Low,7,8,100,0.5,ok",
        "2,B,Debt Fund,Extreme,7,8,100,0.5,bad tier",
    )
    with pytest.raises(ValueError, match="line 3"):
        load_funds(path)


def test_validate_packaged_catalogue_ok():
    rep = validate_fund_catalog(DEFAULT_FUND_CATALOG)
    assert rep.ok is True
    assert rep.errors == []


def test_validate_flags_duplicates_and_warnings(tmp_path):
    path = _write(
        tmp_path,
        "1,A,Debt Fund,Low,7,8,100,0.5,ok",
        "1,B,Debt Fund,Low,7,8,100,3.0,",
    )
    rep = validate_fund_catalog(path)
    assert rep.ok is False
    assert any("Duplicate fund id" in e.message for e in rep.errors)
    messages = [w.message for w in rep.warnings]
    assert any("Expense ratio above 2.5%" in m for m in messages)
    assert any("no note" in m for m in messages)
    assert any("Medium tier" in m for m in messages)


def test_validate_negative_values(tmp_path):
    path = _write(tmp_path, "1,A,Debt Fund,Low,7,8,-5,-0.1,ok")
    rep = validate_fund_catalog(path)
    assert rep.ok is False
    assert len(rep.errors) == 2


def test_validate_unreadable_catalogue(tmp_path):
    rep = validate_fund_catalog(str(tmp_path / "missing.csv"))
    assert rep.ok is False
    assert "not found" in rep.errors[0].message
