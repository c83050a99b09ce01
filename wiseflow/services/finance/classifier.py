from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from .contracts import CategoryLabel, Transaction
from .ledger import total_expenses, total_income

CategoryPredicate = Callable[[str, float], bool]
Chooser = Callable[[Sequence[str]], str]

INCOME_AMOUNT_THRESHOLD = 1000
SAVINGS_RATE_TARGET = 20.0

ASSISTANT_GREETING = (
    "Hi! I'm your financial assistant 💰 Ask me anything like "
    '"How much did I spend on food this month?" or "Can I afford a $200 purchase?"'
)
FOLLOW_UP_SUGGESTIONS: Tuple[str, ...] = (
    "Want to know how much you spent this month?",
    "Need help planning a purchase?",
    "Curious about your savings rate?",
    "Thinking of making a big purchase?",
)
CASUAL_TERMS = ["ok", "thanks", "thank you", "cool", "got it", "great", "fine", "alright"]
FAREWELL_TERMS = ["bye", "goodbye", "see you", "talk later"]
FALLBACK_RESPONSE = (
    "Hmm, I’m not sure how to answer that yet 🤔. Try asking about your balance, income, "
    "expenses, savings, or if you can afford something."
)

_AMOUNT_PATTERN = re.compile(r"\$(\d+)")


def _contains_any(text: str, terms: Sequence[str]) -> bool:
    return any(term in text for term in terms)


def _contains_word(text: str, terms: Sequence[str]) -> bool:
    # Whole words only: "look" is not "ok", "finances" is not "fine".
    return any(re.search(rf"\b{re.escape(term)}\b", text) for term in terms)


def _keywords(*terms: str) -> CategoryPredicate:
    return lambda text, _amount: _contains_any(text, terms)


CATEGORY_RULES: List[Tuple[CategoryPredicate, CategoryLabel]] = [
    (
        lambda text, amount: _contains_any(text, ["salary", "paycheck", "income"])
        or amount > INCOME_AMOUNT_THRESHOLD,
        "income",
    ),
    (_keywords("grocery", "food", "restaurant"), "food"),
    (_keywords("rent", "mortgage"), "housing"),
    (_keywords("gas", "uber", "transport"), "transportation"),
    (_keywords("internet", "water", "utility"), "utilities"),
    (_keywords("movie", "netflix", "game"), "entertainment"),
    (_keywords("doctor", "medicine", "hospital"), "healthcare"),
]


def categorize(description: str, amount: float) -> CategoryLabel:
    text = str(description or "").lower()
    for predicate, label in CATEGORY_RULES:
        if predicate(text, amount):
            return label
    return "other"


@dataclass(frozen=True)
class LedgerSnapshot:
    transactions: Tuple[Transaction, ...] = field(default_factory=tuple)
    balance: float = 0.0
    income: float = 0.0
    expenses: float = 0.0

    @classmethod
    def from_transactions(cls, transactions: Sequence[Transaction]) -> "LedgerSnapshot":
        income = total_income(transactions)
        expenses = total_expenses(transactions)
        return cls(
            transactions=tuple(transactions),
            balance=income - expenses,
            income=income,
            expenses=expenses,
        )


ResponseRule = Callable[[str, LedgerSnapshot, Chooser], Optional[str]]


def _casual(query: str, _snapshot: LedgerSnapshot, _choose: Chooser) -> str | None:
    if _contains_word(query, CASUAL_TERMS):
        return "Glad I could help! 😊 Let me know if you have more questions about your money."
    return None


def _farewell(query: str, _snapshot: LedgerSnapshot, _choose: Chooser) -> str | None:
    if _contains_word(query, FAREWELL_TERMS):
        return "Alright, take care! I'm always here if you need help with your finances. 👋"
    return None


def _balance(query: str, snapshot: LedgerSnapshot, choose: Chooser) -> str | None:
    if _contains_any(query, ["balance", "money", "have"]):
        return f"Your current balance is ${snapshot.balance:.2f}.\n\n{choose(FOLLOW_UP_SUGGESTIONS)}"
    return None


def _food_spending(query: str, snapshot: LedgerSnapshot, _choose: Chooser) -> str | None:
    if "spend" not in query or "food" not in query:
        return None
    food = sum(t.amount for t in snapshot.transactions if t.category == "food" and t.type == "expense")
    return f"You've spent ${food:.2f} on food so far.\n\nWant to see spending in other categories too?"


def _income(query: str, snapshot: LedgerSnapshot, choose: Chooser) -> str | None:
    if _contains_any(query, ["income", "earn"]):
        return f"Your total income is ${snapshot.income:.2f}.\n\n{choose(FOLLOW_UP_SUGGESTIONS)}"
    return None


def _expenses(query: str, snapshot: LedgerSnapshot, _choose: Chooser) -> str | None:
    if _contains_any(query, ["expenses", "spent"]):
        return f"Your total expenses are ${snapshot.expenses:.2f}.\n\nNeed tips to reduce spending?"
    return None


def _savings_rate(query: str, snapshot: LedgerSnapshot, _choose: Chooser) -> str | None:
    if not _contains_any(query, ["save", "saving"]):
        return None
    rate = (snapshot.income - snapshot.expenses) / snapshot.income * 100 if snapshot.income > 0 else 0.0
    if rate >= SAVINGS_RATE_TARGET:
        nudge = "Nice job! You’re basically a budgeting ninja 🥷💰."
    else:
        nudge = "Let’s try to bump that up, even 5% more can make a difference 📈."
    return f"You're currently saving {rate:.1f}% of your income. {nudge}"


def _affordability(query: str, snapshot: LedgerSnapshot, _choose: Chooser) -> str | None:
    if "afford" not in query:
        return None
    match = _AMOUNT_PATTERN.search(query)
    if not match:
        return None
    amount = int(match.group(1))
    if snapshot.balance >= amount * 2:
        return (
            f"Yes, you can comfortably afford a ${amount} purchase, as it's less than half of "
            f"your current balance of ${snapshot.balance:.2f}."
        )
    if snapshot.balance >= amount:
        return (
            f"You have enough for a ${amount} purchase, but it would use a significant portion "
            "of your balance. Think it through 🧠."
        )
    return (
        f"A ${amount} purchase exceeds your current balance of ${snapshot.balance:.2f}. "
        "I’d recommend holding off for now."
    )


RESPONSE_RULES: List[Tuple[str, ResponseRule]] = [
    ("casual", _casual),
    ("farewell", _farewell),
    ("balance", _balance),
    ("food_spending", _food_spending),
    ("income", _income),
    ("expenses", _expenses),
    ("savings_rate", _savings_rate),
    ("affordability", _affordability),
]


def match_rule(query: str, snapshot: LedgerSnapshot, choose: Chooser | None = None) -> Tuple[str, str]:
    text = str(query or "").lower()
    pick = choose or random.choice
    for name, rule in RESPONSE_RULES:
        reply = rule(text, snapshot, pick)
        if reply is not None:
            return name, reply
    return "fallback", FALLBACK_RESPONSE


def respond(query: str, snapshot: LedgerSnapshot, choose: Chooser | None = None) -> str:
    return match_rule(query, snapshot, choose)[1]
