from __future__ import annotations

from datetime import date, timedelta
from typing import List

from wiseflow.services.finance.common import add_months, new_record_id, today_utc
from wiseflow.services.finance.contracts import AIInsight, FinancialGoal, Transaction

# (day of month, amount, description, category, type)
_DEMO_TRANSACTIONS = [
    (1, 2500, "Monthly Salary", "income", "income"),
    (2, 120, "Grocery Shopping", "food", "expense"),
    (3, 45, "Gas Station", "transportation", "expense"),
    (5, 800, "Rent Payment", "housing", "expense"),
    (4, 60, "Internet Bill", "utilities", "expense"),
    (6, 200, "Freelance Work", "income", "income"),
    (6, 35, "Movie Tickets", "entertainment", "expense"),
]


def demo_transactions(today: date | None = None) -> List[Transaction]:
    month_start = add_months(today or today_utc(), 0)
    return [
        Transaction(
            id=new_record_id(),
            amount=amount,
            description=description,
            category=category,
            date=month_start.replace(day=day),
            type=txn_type,
        )
        for day, amount, description, category, txn_type in _DEMO_TRANSACTIONS
    ]


def demo_goals(today: date | None = None) -> List[FinancialGoal]:
    base = today or today_utc()
    return [
        FinancialGoal(
            id=new_record_id(),
            name="Emergency Fund",
            target_amount=5000,
            current_amount=2000,
            deadline=add_months(base, 8) - timedelta(days=1),
            category="savings",
        ),
        FinancialGoal(
            id=new_record_id(),
            name="New Laptop",
            target_amount=1500,
            current_amount=500,
            deadline=add_months(base, 4) - timedelta(days=1),
            category="shopping",
        ),
    ]


def demo_insights(today: date | None = None) -> List[AIInsight]:
    base = today or today_utc()
    return [
        AIInsight(
            id=new_record_id(),
            type="tip",
            message=(
                "You spent 30% more on food this week compared to your monthly average. "
                "Consider meal prepping to save money."
            ),
            date=base,
            read=False,
        ),
        AIInsight(
            id=new_record_id(),
            type="achievement",
            message="Great job! You stayed under budget for entertainment this month.",
            date=base - timedelta(days=1),
            read=True,
        ),
        AIInsight(
            id=new_record_id(),
            type="warning",
            message=(
                "Your utility bills have increased by 15% over the past three months. "
                "Check for any unusual usage."
            ),
            date=base - timedelta(days=2),
            read=False,
        ),
    ]
