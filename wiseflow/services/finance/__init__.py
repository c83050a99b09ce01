from .classifier import LedgerSnapshot, categorize, match_rule, respond
from .contracts import CATEGORY_LABELS, AIInsight, FinancialGoal, Transaction
from .goals import contribute, days_remaining, describe_goal, display_progress, goal_progress, goal_status
from .health import health_label, health_report, health_score, savings_rate
from .insights import goal_achievement_insight, mark_read, transaction_insight
from .ledger import (
    balance,
    category_monthly_averages,
    category_share,
    category_spending,
    filter_transactions,
    income_vs_expense_monthly,
    ledger_summary,
    ledger_totals,
    monthly_spending_data,
    recent_transactions,
    total_expenses,
    total_income,
)

__all__ = [
    "AIInsight",
    "CATEGORY_LABELS",
    "FinancialGoal",
    "LedgerSnapshot",
    "Transaction",
    "balance",
    "total_income",
    "total_expenses",
    "recent_transactions",
    "filter_transactions",
    "ledger_totals",
    "category_spending",
    "category_share",
    "category_monthly_averages",
    "monthly_spending_data",
    "income_vs_expense_monthly",
    "ledger_summary",
    "goal_progress",
    "display_progress",
    "days_remaining",
    "goal_status",
    "contribute",
    "describe_goal",
    "savings_rate",
    "health_score",
    "health_label",
    "health_report",
    "categorize",
    "respond",
    "match_rule",
    "transaction_insight",
    "goal_achievement_insight",
    "mark_read",
]
