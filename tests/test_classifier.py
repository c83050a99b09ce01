from __future__ import annotations

import sys
import unittest
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wiseflow.services.finance import LedgerSnapshot, Transaction, categorize, match_rule, respond  # noqa: E402
from wiseflow.services.finance.classifier import FALLBACK_RESPONSE, FOLLOW_UP_SUGGESTIONS  # noqa: E402


def _first(options):
    return options[0]


def _snapshot() -> LedgerSnapshot:
    return LedgerSnapshot.from_transactions(
        [
            Transaction(
                id="1",
                amount=2500,
                description="Monthly Salary",
                category="income",
                date=date(2025, 5, 1),
                type="income",
            ),
            Transaction(
                id="2",
                amount=120,
                description="Grocery Shopping",
                category="food",
                date=date(2025, 5, 2),
                type="expense",
            ),
        ]
    )


class CategorizeTests(unittest.TestCase):
    def test_keyword_rules(self) -> None:
        cases = [
            ("Grocery Shopping", 120, "food"),
            ("Rent Payment", 800, "housing"),
            ("Gas Station", 45, "transportation"),
            ("Internet Bill", 60, "utilities"),
            ("Movie Tickets", 35, "entertainment"),
            ("Doctor visit", 80, "healthcare"),
            ("Freelance Work", 200, "other"),
        ]
        for description, amount, expected in cases:
            with self.subTest(description=description):
                self.assertEqual(categorize(description, amount), expected)

    def test_income_keywords_or_large_amount(self) -> None:
        self.assertEqual(categorize("Monthly Salary", 2500), "income")
        self.assertEqual(categorize("PAYCHECK", 50), "income")
        self.assertEqual(categorize("New laptop", 1500), "income")
        self.assertEqual(categorize("New laptop", 1000), "other")

    def test_first_matching_rule_wins(self) -> None:
        # "food" is checked before "rent".
        self.assertEqual(categorize("Food at rental office", 20), "food")
        self.assertEqual(categorize("Restaurant", 1200), "income")

    def test_empty_description(self) -> None:
        self.assertEqual(categorize("", 10), "other")


class RespondTests(unittest.TestCase):
    def test_affordable_purchase(self) -> None:
        reply = respond("Can I afford a $200 purchase?", _snapshot())
        self.assertEqual(
            reply,
            "Yes, you can comfortably afford a $200 purchase, as it's less than half of "
            "your current balance of $2380.00.",
        )

    def test_affordability_tiers(self) -> None:
        snapshot = _snapshot()
        self.assertTrue(respond("can i afford $1500", snapshot).startswith("You have enough for a $1500"))
        self.assertTrue(respond("can i afford $1190", snapshot).startswith("Yes, you can comfortably"))
        self.assertTrue(respond("can i afford $3000", snapshot).startswith("A $3000 purchase exceeds"))

    def test_afford_without_amount_falls_back(self) -> None:
        self.assertEqual(match_rule("can i afford a car", _snapshot()), ("fallback", FALLBACK_RESPONSE))

    def test_balance_includes_follow_up(self) -> None:
        reply = respond("What's my balance?", _snapshot(), choose=_first)
        self.assertEqual(reply, f"Your current balance is $2380.00.\n\n{FOLLOW_UP_SUGGESTIONS[0]}")

    def test_default_follow_up_comes_from_suggestions(self) -> None:
        reply = respond("How much money do I have", _snapshot())
        self.assertIn(reply.split("\n\n")[1], FOLLOW_UP_SUGGESTIONS)

    def test_food_spending_needs_both_terms(self) -> None:
        self.assertEqual(match_rule("How much did I spend on food?", _snapshot())[0], "food_spending")
        self.assertIn("$120.00 on food", respond("How much did I spend on food?", _snapshot()))
        self.assertEqual(match_rule("food prices", _snapshot())[0], "fallback")

    def test_income_and_expenses(self) -> None:
        self.assertIn("$2500.00", respond("What did I earn?", _snapshot(), choose=_first))
        self.assertEqual(
            respond("Show my expenses", _snapshot()),
            "Your total expenses are $120.00.\n\nNeed tips to reduce spending?",
        )

    def test_savings_rate_tiers(self) -> None:
        reply = respond("Am I saving enough?", _snapshot())
        self.assertTrue(reply.startswith("You're currently saving 95.2% of your income."))
        self.assertIn("budgeting ninja", reply)

        low = LedgerSnapshot(income=1000, expenses=900, balance=100)
        self.assertIn("bump that up", respond("how do I save", low))
        self.assertIn("saving 0.0%", respond("how do I save", LedgerSnapshot()))

    def test_casual_and_farewell_take_precedence(self) -> None:
        self.assertEqual(match_rule("Thanks, what's my balance?", _snapshot())[0], "casual")
        self.assertEqual(match_rule("Goodbye", _snapshot())[0], "farewell")

    def test_casual_terms_match_whole_words_only(self) -> None:
        self.assertEqual(match_rule("look at my balance", _snapshot())[0], "balance")
        self.assertEqual(match_rule("how are my finances", _snapshot())[0], "fallback")
        self.assertEqual(match_rule("ok", _snapshot())[0], "casual")
        self.assertEqual(match_rule("thank you!", _snapshot())[0], "casual")

    def test_query_is_case_insensitive(self) -> None:
        self.assertEqual(match_rule("BALANCE", _snapshot())[0], "balance")


if __name__ == "__main__":
    unittest.main()
