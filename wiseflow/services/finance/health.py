from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .common import round_half_up

SAVINGS_POINTS_CAP = 50.0
GOAL_POINTS_CAP = 30.0
ACTIVITY_POINTS_CAP = 20.0
POINTS_PER_GOAL = 10
POINTS_PER_TRANSACTION = 2

# (minimum score, label, message), checked top-down.
HEALTH_TIERS: List[Tuple[int, str, str]] = [
    (80, "Excellent", "Excellent financial health! You're saving well and have clear goals."),
    (60, "Good", "Good financial habits. Consider setting more financial goals for the future."),
    (
        40,
        "Fair",
        "You're on the right track. Try to increase your savings rate and set more specific goals.",
    ),
    (
        0,
        "Needs Attention",
        "There's room for improvement. Focus on reducing expenses and building an emergency fund.",
    ),
]


def savings_rate(income: float, expenses: float) -> float:
    if income <= 0:
        return 0.0
    return (income - expenses) / income


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def health_score(income: float, expenses: float, goal_count: int, transaction_count: int) -> int:
    savings_points = _clamp(savings_rate(income, expenses) * 100, 0.0, SAVINGS_POINTS_CAP)
    goal_points = _clamp(goal_count * POINTS_PER_GOAL, 0.0, GOAL_POINTS_CAP)
    activity_points = _clamp(transaction_count * POINTS_PER_TRANSACTION, 0.0, ACTIVITY_POINTS_CAP)
    return round_half_up(savings_points + goal_points + activity_points)


def health_label(score: int) -> Tuple[str, str]:
    for minimum, label, message in HEALTH_TIERS:
        if score >= minimum:
            return label, message
    return HEALTH_TIERS[-1][1], HEALTH_TIERS[-1][2]


def health_report(
    income: float,
    expenses: float,
    goal_count: int,
    transaction_count: int,
) -> Dict[str, Any]:
    rate = savings_rate(income, expenses)
    score = health_score(income, expenses, goal_count, transaction_count)
    label, message = health_label(score)
    return {
        "score": score,
        "label": label,
        "message": message,
        "savings_rate": round(rate, 4),
        "components": {
            "savings": round(_clamp(rate * 100, 0.0, SAVINGS_POINTS_CAP), 2),
            "goals": _clamp(goal_count * POINTS_PER_GOAL, 0.0, GOAL_POINTS_CAP),
            "activity": _clamp(transaction_count * POINTS_PER_TRANSACTION, 0.0, ACTIVITY_POINTS_CAP),
        },
    }
