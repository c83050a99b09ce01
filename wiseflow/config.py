from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project .env sits next to the package: wiseflow/config.py -> <root>/.env
ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
# utf-8-sig tolerates a BOM on the first key.
load_dotenv(ENV_PATH, encoding="utf-8-sig")


def _env_str(name: str, default: str = "") -> str:
    value = os.getenv(name)
    if value is not None:
        return str(value).strip()
    bom_value = os.getenv(f"\ufeff{name}")
    if bom_value is not None:
        return str(bom_value).strip()
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def store_backend() -> str:
    backend = _env_str("WISEFLOW_STORE", "memory").lower()
    if backend not in {"memory", "supabase"}:
        return "memory"
    return backend


def seed_demo_data() -> bool:
    return _env_bool("WISEFLOW_SEED_DEMO", False)


def dev_bypass_auth() -> bool:
    return _env_bool("DEV_BYPASS_AUTH", False)


LOG_LEVEL = _env_str("WISEFLOW_LOG_LEVEL", "INFO").upper()
RECENT_LIMIT = max(1, _env_int("WISEFLOW_RECENT_LIMIT", 5))
INSIGHT_EXPENSE_THRESHOLD = max(0.0, _env_float("WISEFLOW_INSIGHT_EXPENSE_THRESHOLD", 100.0))
SQL_TIMEOUT_SEC = max(1, _env_int("SQL_TIMEOUT_SEC", 20))
HOST = _env_str("WISEFLOW_HOST", "0.0.0.0")
PORT = _env_int("WISEFLOW_PORT", 8010)
CORS_ALLOW_ORIGINS = [
    origin.strip() for origin in _env_str("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()
] or ["*"]

SUPABASE_JWT_AUDIENCE = _env_str("SUPABASE_JWT_AUDIENCE", "authenticated")
DEMO_USER = {"sub": "demo-user", "email": "demo@wiseflow.local"}
