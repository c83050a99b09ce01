from __future__ import annotations

import math
import secrets
import time
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Tuple

UTC = timezone.utc

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def new_record_id() -> str:
    # Millisecond timestamp plus a random suffix; unique within the same tick.
    return f"{int(time.time() * 1000)}{secrets.token_hex(3)}"


def today_utc() -> date:
    return datetime.now(tz=UTC).date()


def safe_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return default
    text = text.replace(",", "")
    try:
        return float(text)
    except ValueError:
        return default


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def money(value: float) -> float:
    return round(value, 2)


def add_months(base: date, months: int) -> date:
    year = base.year + (base.month - 1 + months) // 12
    month = (base.month - 1 + months) % 12 + 1
    return date(year, month, 1)


def month_window(today: date, months: int = 6) -> List[Tuple[int, int]]:
    """(year, month) keys for the `months` calendar months ending at today's month, oldest first."""
    first = add_months(today, -(months - 1))
    keys: List[Tuple[int, int]] = []
    for offset in range(months):
        current = add_months(first, offset)
        keys.append((current.year, current.month))
    return keys


def group_sum(rows: Iterable[Any], key: str, amount_key: str = "amount") -> Dict[str, float]:
    sums: Dict[str, float] = {}
    for row in rows:
        group = str(getattr(row, key, "") or "other")
        sums[group] = sums.get(group, 0.0) + safe_float(getattr(row, amount_key, 0.0))
    return sums
