from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from finplan.core.config import SETTINGS
from finplan.utils.catalog_models import FundRecord

REQUIRED_FUND_COLS = [
    "id", "name", "category", "risk_tier",
    "three_year_return_pct", "five_year_return_pct",
    "aum_crore", "expense_ratio_pct", "note",
]


def load_funds(catalog_path: Optional[str] = None) -> List[FundRecord]:
    """Read the fund reference table, keeping file order."""
    catalog_path = catalog_path or SETTINGS.fund_catalog

    p = Path(catalog_path)
    if not p.exists():
        raise FileNotFoundError(f"Fund catalogue not found: {p}")

    with p.open("r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        cols = reader.fieldnames or []
        missing = [c for c in REQUIRED_FUND_COLS if c not in cols]
        if missing:
            raise ValueError(f"Fund catalogue missing columns: {missing}. Found: {cols}")

        funds: List[FundRecord] = []
        for line_no, r in enumerate(reader, start=2):
            try:
                funds.append(FundRecord(**{c: (r.get(c) or "").strip() for c in REQUIRED_FUND_COLS}))
            except ValidationError as e:
                raise ValueError(f"Bad fund row at line {line_no}: {e.errors()[0]['msg']}") from e
        return funds
