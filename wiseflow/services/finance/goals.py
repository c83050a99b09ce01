from __future__ import annotations

from datetime import date
from typing import Any, Dict, Tuple

from .common import money, today_utc
from .contracts import AIInsight, FinancialGoal, GoalStatus
from .insights import goal_achievement_insight

AT_RISK_DAYS = 30
AT_RISK_PROGRESS = 50.0


def goal_progress(goal: FinancialGoal) -> float:
    """Raw completion percentage; exceeds 100 when the goal is over-funded."""
    return goal.current_amount / goal.target_amount * 100


def display_progress(goal: FinancialGoal) -> float:
    return min(max(goal_progress(goal), 0.0), 100.0)


def days_remaining(goal: FinancialGoal, today: date | None = None) -> int:
    return (goal.deadline - (today or today_utc())).days


def goal_status(goal: FinancialGoal, today: date | None = None) -> GoalStatus:
    progress = goal_progress(goal)
    days = days_remaining(goal, today)
    if progress >= 100:
        return "complete"
    if days < 0:
        return "overdue"
    if days < AT_RISK_DAYS and progress < AT_RISK_PROGRESS:
        return "at-risk"
    return "on-track"


def contribute(
    goal: FinancialGoal,
    amount: float,
    *,
    today: date | None = None,
) -> Tuple[FinancialGoal, AIInsight | None]:
    """Add a contribution and emit an achievement insight when it crosses the target.

    A goal that was already funded before the contribution produces no insight, so
    repeated contributions never re-announce the same achievement.
    """
    if amount < 0:
        raise ValueError("contribution amount must be non-negative")
    before = goal.current_amount
    after = before + amount
    updated = goal.model_copy(update={"current_amount": after})
    insight = None
    if before < goal.target_amount <= after:
        insight = goal_achievement_insight(updated, today=today)
    return updated, insight


def describe_goal(goal: FinancialGoal, today: date | None = None) -> Dict[str, Any]:
    return {
        **goal.model_dump(mode="json", by_alias=True),
        "progress": round(goal_progress(goal), 2),
        "display_progress": round(display_progress(goal), 2),
        "remaining_amount": money(max(goal.target_amount - goal.current_amount, 0.0)),
        "days_remaining": days_remaining(goal, today),
        "status": goal_status(goal, today),
    }
