from __future__ import annotations

import sys
import unittest
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wiseflow.services.finance import (  # noqa: E402
    FinancialGoal,
    Transaction,
    contribute,
    days_remaining,
    describe_goal,
    display_progress,
    goal_progress,
    goal_status,
    health_label,
    health_report,
    health_score,
    mark_read,
    savings_rate,
    transaction_insight,
)

TODAY = date(2026, 10, 18)


def _goal(current: float, target: float = 5000, deadline: date = date(2026, 12, 31)) -> FinancialGoal:
    return FinancialGoal(
        id="g1",
        name="Emergency Fund",
        target_amount=target,
        current_amount=current,
        deadline=deadline,
        category="savings",
    )


class GoalTrackerTests(unittest.TestCase):
    def test_progress_reaches_exactly_100_at_target(self) -> None:
        self.assertEqual(goal_progress(_goal(5000)), 100)

    def test_over_funded_goal_is_clamped_only_for_display(self) -> None:
        goal = _goal(6000)
        self.assertEqual(goal_progress(goal), 120)
        self.assertEqual(display_progress(goal), 100)

    def test_days_remaining(self) -> None:
        self.assertEqual(days_remaining(_goal(0, deadline=date(2026, 11, 17)), TODAY), 30)
        self.assertEqual(days_remaining(_goal(0, deadline=date(2026, 10, 17)), TODAY), -1)

    def test_status_classification(self) -> None:
        self.assertEqual(goal_status(_goal(5000, deadline=date(2026, 1, 1)), TODAY), "complete")
        self.assertEqual(goal_status(_goal(4000, deadline=date(2026, 10, 17)), TODAY), "overdue")
        self.assertEqual(goal_status(_goal(2000, deadline=date(2026, 11, 16)), TODAY), "at-risk")
        self.assertEqual(goal_status(_goal(2000, deadline=date(2026, 11, 17)), TODAY), "on-track")
        self.assertEqual(goal_status(_goal(2500, deadline=date(2026, 11, 1)), TODAY), "on-track")

    def test_contribution_crossing_target_emits_one_achievement(self) -> None:
        updated, insight = contribute(_goal(4900), 100, today=TODAY)
        self.assertEqual(updated.current_amount, 5000)
        self.assertIsNotNone(insight)
        self.assertEqual(insight.type, "achievement")
        self.assertIn("Emergency Fund", insight.message)
        self.assertEqual(insight.date, TODAY)

        again, second = contribute(updated, 0, today=TODAY)
        self.assertIsNone(second)
        self.assertEqual(again.current_amount, 5000)

    def test_zero_contribution_on_funded_goal_emits_nothing(self) -> None:
        _, insight = contribute(_goal(5000), 0, today=TODAY)
        self.assertIsNone(insight)

    def test_contribution_below_target_and_original_untouched(self) -> None:
        goal = _goal(2000)
        updated, insight = contribute(goal, 500, today=TODAY)
        self.assertIsNone(insight)
        self.assertEqual(updated.current_amount, 2500)
        self.assertEqual(goal.current_amount, 2000)

    def test_negative_contribution_rejected(self) -> None:
        with self.assertRaises(ValueError):
            contribute(_goal(2000), -1)

    def test_describe_goal_uses_api_field_names(self) -> None:
        view = describe_goal(_goal(2500, deadline=date(2026, 11, 1)), TODAY)
        self.assertEqual(view["targetAmount"], 5000)
        self.assertEqual(view["currentAmount"], 2500)
        self.assertEqual(view["progress"], 50)
        self.assertEqual(view["remaining_amount"], 2500)
        self.assertEqual(view["days_remaining"], 14)
        self.assertEqual(view["status"], "on-track")


class HealthScoreTests(unittest.TestCase):
    def test_mock_ledger_scores_excellent(self) -> None:
        report = health_report(income=2700, expenses=1060, goal_count=2, transaction_count=7)
        self.assertEqual(report["score"], 84)
        self.assertEqual(report["label"], "Excellent")
        self.assertEqual(
            report["message"],
            "Excellent financial health! You're saving well and have clear goals.",
        )
        self.assertEqual(report["components"], {"savings": 50.0, "goals": 20.0, "activity": 14.0})

    def test_savings_rate_guards_zero_income(self) -> None:
        self.assertEqual(savings_rate(0, 100), 0.0)
        self.assertEqual(health_score(0, 100, 0, 0), 0)

    def test_negative_savings_rate_contributes_nothing(self) -> None:
        self.assertEqual(health_score(100, 300, 1, 1), 12)

    def test_score_bounded(self) -> None:
        for income, expenses, goals, txns in [
            (0, 0, 0, 0),
            (1_000_000, 0, 100, 1000),
            (10, 1_000, 0, 3),
            (500, 250, 2, 9),
        ]:
            score = health_score(income, expenses, goals, txns)
            self.assertGreaterEqual(score, 0)
            self.assertLessEqual(score, 100)
        self.assertEqual(health_score(1_000_000, 0, 100, 1000), 100)

    def test_half_points_round_up(self) -> None:
        self.assertEqual(health_score(1000, 995, 0, 0), 1)

    def test_label_thresholds(self) -> None:
        self.assertEqual(health_label(80)[0], "Excellent")
        self.assertEqual(health_label(79)[0], "Good")
        self.assertEqual(health_label(60)[0], "Good")
        self.assertEqual(health_label(40)[0], "Fair")
        self.assertEqual(health_label(39)[0], "Needs Attention")
        self.assertEqual(
            health_label(0)[1],
            "There's room for improvement. Focus on reducing expenses and building an emergency fund.",
        )


class InsightTests(unittest.TestCase):
    def _expense(self, amount: float) -> Transaction:
        return Transaction(
            id="t1",
            amount=amount,
            description="Dinner",
            category="food",
            date=TODAY,
            type="expense",
        )

    def test_large_expense_creates_tip(self) -> None:
        insight = transaction_insight(self._expense(120), today=TODAY)
        self.assertIsNotNone(insight)
        self.assertEqual(insight.type, "tip")
        self.assertFalse(insight.read)
        self.assertEqual(
            insight.message,
            "Your recent food expense of $120 is higher than your usual spending in this category. "
            "Would you like tips to save on food?",
        )

    def test_fractional_amount_uses_shortest_form(self) -> None:
        self.assertIn("expense of $250.5 is", transaction_insight(self._expense(250.5), today=TODAY).message)
        self.assertIn("expense of $120.25 is", transaction_insight(self._expense(120.25), today=TODAY).message)

    def test_threshold_is_exclusive(self) -> None:
        self.assertIsNone(transaction_insight(self._expense(100), today=TODAY))

    def test_income_never_creates_tip(self) -> None:
        income = Transaction(
            id="t2", amount=5000, description="Salary", category="income", date=TODAY, type="income"
        )
        self.assertIsNone(transaction_insight(income, today=TODAY))

    def test_mark_read_returns_copy(self) -> None:
        insight = transaction_insight(self._expense(250.5), today=TODAY)
        read = mark_read(insight)
        self.assertTrue(read.read)
        self.assertFalse(insight.read)
        self.assertEqual(read.id, insight.id)
        self.assertIn("$250.50", insight.message)


if __name__ == "__main__":
    unittest.main()
