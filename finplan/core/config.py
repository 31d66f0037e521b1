from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml
from dotenv import load_dotenv

_PACKAGE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_FUND_CATALOG = str(_PACKAGE_DIR / "data" / "funds.csv")


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str
    currency_symbol: str

    fund_catalog: str

    max_recommendations: int
    max_search_years: int
    default_rate_pct: float
    milestone_years: Tuple[int, ...]

    tax_cess_pct: float


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def _parse_years(raw: Any) -> Tuple[int, ...]:
    if isinstance(raw, str):
        raw = [p for p in raw.replace(";", ",").split(",") if p.strip()]
    years = tuple(int(y) for y in (raw or []))
    return years or (5, 10, 20)


def load_settings(config_path: str = "config.yaml") -> Settings:
    """
    Loads config.yaml + overrides from .env/environment variables.
    """
    load_dotenv()

    cfg: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    # Empty env vars count as "not set" so a stray FINPLAN_X="" cannot
    # override config.yaml.
    def _env_or_cfg(key: str, cfg_path: str, default):
        v = os.getenv(key)
        if v is None:
            return _deep_get(cfg, cfg_path, default)
        v = v.strip()
        return _deep_get(cfg, cfg_path, default) if v == "" else v

    env = _env_or_cfg("APP_ENV", "app.env", "dev")
    log_level = str(_env_or_cfg("LOG_LEVEL", "app.log_level", "INFO")).upper()
    currency_symbol = _env_or_cfg("CURRENCY_SYMBOL", "app.currency_symbol", "₹")

    fund_catalog = _env_or_cfg("FUND_CATALOG", "paths.fund_catalog", DEFAULT_FUND_CATALOG)

    max_recommendations = int(_env_or_cfg("MAX_RECOMMENDATIONS", "planner.max_recommendations", 5))
    max_search_years = int(_env_or_cfg("MAX_SEARCH_YEARS", "planner.max_search_years", 100))
    default_rate_pct = float(_env_or_cfg("DEFAULT_RATE_PCT", "planner.default_rate_pct", 8.0))
    milestone_years = _parse_years(_env_or_cfg("MILESTONE_YEARS", "planner.milestone_years", [5, 10, 20]))

    tax_cess_pct = float(_env_or_cfg("TAX_CESS_PCT", "tax.cess_pct", 4.0))

    return Settings(
        env=env,
        log_level=log_level,
        currency_symbol=currency_symbol,
        fund_catalog=fund_catalog,
        max_recommendations=max_recommendations,
        max_search_years=max_search_years,
        default_rate_pct=default_rate_pct,
        milestone_years=milestone_years,
        tax_cess_pct=tax_cess_pct,
    )


SETTINGS = load_settings()
