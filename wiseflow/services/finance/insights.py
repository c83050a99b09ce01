from __future__ import annotations

from datetime import date

from .common import new_record_id, today_utc
from .contracts import AIInsight, FinancialGoal, Transaction

DEFAULT_EXPENSE_THRESHOLD = 100.0


def _format_amount(amount: float) -> str:
    # Shortest round-trip form: 250.0 -> "250", 250.5 -> "250.5".
    return str(int(amount)) if float(amount).is_integer() else repr(float(amount))


def transaction_insight(
    txn: Transaction,
    *,
    today: date | None = None,
    threshold: float = DEFAULT_EXPENSE_THRESHOLD,
) -> AIInsight | None:
    if txn.type != "expense" or txn.amount <= threshold:
        return None
    amount = _format_amount(txn.amount)
    return AIInsight(
        id=new_record_id(),
        type="tip",
        message=(
            f"Your recent {txn.category} expense of ${amount} is higher than your usual spending "
            f"in this category. Would you like tips to save on {txn.category}?"
        ),
        date=today or today_utc(),
        read=False,
    )


def goal_achievement_insight(goal: FinancialGoal, *, today: date | None = None) -> AIInsight:
    return AIInsight(
        id=new_record_id(),
        type="achievement",
        message=f'Congratulations! You\'ve reached your goal: "{goal.name}"!',
        date=today or today_utc(),
        read=False,
    )


def mark_read(insight: AIInsight) -> AIInsight:
    return insight.model_copy(update={"read": True})
