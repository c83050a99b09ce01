from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Any, Dict, List, Sequence, Tuple

from .common import MONTH_NAMES, group_sum, money, month_window, today_utc
from .contracts import Transaction

TREND_MONTHS = 6


def total_income(transactions: Sequence[Transaction]) -> float:
    return sum(t.amount for t in transactions if t.type == "income")


def total_expenses(transactions: Sequence[Transaction]) -> float:
    return sum(t.amount for t in transactions if t.type == "expense")


def balance(transactions: Sequence[Transaction]) -> float:
    return total_income(transactions) - total_expenses(transactions)


def recent_transactions(transactions: Sequence[Transaction], limit: int = 5) -> List[Transaction]:
    # sorted() is stable, so same-day transactions keep their ledger order.
    ordered = sorted(transactions, key=lambda t: t.date, reverse=True)
    return ordered[: max(0, limit)]


def filter_transactions(
    transactions: Sequence[Transaction],
    *,
    search: str | None = None,
    category: str | None = None,
    txn_type: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> List[Transaction]:
    """Transactions matching every given filter, newest date first.

    `search` is a case-insensitive substring of the description. Both date bounds
    are inclusive.
    """
    needle = (search or "").strip().lower()
    matches = [
        t
        for t in transactions
        if (not needle or needle in t.description.lower())
        and (category is None or t.category == category)
        and (txn_type is None or t.type == txn_type)
        and (date_from is None or t.date >= date_from)
        and (date_to is None or t.date <= date_to)
    ]
    return sorted(matches, key=lambda t: t.date, reverse=True)


def ledger_totals(transactions: Sequence[Transaction]) -> Dict[str, float]:
    income = total_income(transactions)
    expenses = total_expenses(transactions)
    return {"income": money(income), "expenses": money(expenses), "balance": money(income - expenses)}


def category_spending(transactions: Sequence[Transaction]) -> List[Tuple[str, float]]:
    expenses = [t for t in transactions if t.type == "expense"]
    return list(group_sum(expenses, "category").items())


def category_share(transactions: Sequence[Transaction]) -> List[Dict[str, Any]]:
    spending = category_spending(transactions)
    total = sum(amount for _, amount in spending)
    return [
        {
            "category": category,
            "amount": money(amount),
            "pct": round((amount / total) * 100, 2) if total > 0 else 0.0,
        }
        for category, amount in spending
    ]


def category_monthly_averages(transactions: Sequence[Transaction]) -> List[Dict[str, Any]]:
    return [
        {"category": category, "amount": money(amount / 12)}
        for category, amount in category_spending(transactions)
    ]


def _bucket_by_month(
    transactions: Sequence[Transaction],
    today: date,
) -> Dict[Tuple[int, int], Dict[str, float]]:
    window = month_window(today, TREND_MONTHS)
    buckets: Dict[Tuple[int, int], Dict[str, float]] = {key: defaultdict(float) for key in window}
    for txn in transactions:
        key = (txn.date.year, txn.date.month)
        if key in buckets:
            buckets[key][txn.type] += txn.amount
    return buckets


def monthly_spending_data(
    transactions: Sequence[Transaction],
    today: date | None = None,
) -> List[Dict[str, Any]]:
    """Expense totals for the six calendar months ending at today's month, oldest first.

    Buckets are keyed by (year, month), so a transaction from the same month of an
    earlier year never lands in the current window.
    """
    buckets = _bucket_by_month(transactions, today or today_utc())
    return [
        {"name": MONTH_NAMES[month - 1], "expense": sums.get("expense", 0.0)}
        for (_, month), sums in buckets.items()
    ]


def income_vs_expense_monthly(
    transactions: Sequence[Transaction],
    today: date | None = None,
) -> List[Dict[str, Any]]:
    buckets = _bucket_by_month(transactions, today or today_utc())
    return [
        {
            "month": MONTH_NAMES[month - 1],
            "income": sums.get("income", 0.0),
            "expense": sums.get("expense", 0.0),
        }
        for (_, month), sums in buckets.items()
    ]


def ledger_summary(
    transactions: Sequence[Transaction],
    *,
    today: date | None = None,
    recent_limit: int = 5,
) -> Dict[str, Any]:
    income = total_income(transactions)
    expenses = total_expenses(transactions)
    return {
        "balance": money(income - expenses),
        "income": money(income),
        "expenses": money(expenses),
        "transaction_count": len(transactions),
        "recent_transactions": [
            t.model_dump(mode="json") for t in recent_transactions(transactions, recent_limit)
        ],
        "category_spending": [
            {"category": category, "amount": money(amount)}
            for category, amount in category_spending(transactions)
        ],
        "monthly_spending": monthly_spending_data(transactions, today),
    }
