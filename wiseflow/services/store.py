from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional, Set, Tuple

from wiseflow import config
from wiseflow.services.demo_data import demo_goals, demo_insights, demo_transactions
from wiseflow.services.finance.contracts import AIInsight, FinancialGoal, Transaction
from wiseflow.services.supabase_rest import SupabaseRestClient, get_supabase_client

logger = logging.getLogger(__name__)

# Serializes read-modify-write sequences across the request thread pool.
_WRITE_LOCK = threading.RLock()

GoalChange = Callable[[FinancialGoal], Tuple[FinancialGoal, Optional[AIInsight]]]


class RecordNotFound(KeyError):
    pass


class LedgerStore(ABC):
    """Per-user transactions, goals and insights keyed by user id."""

    @abstractmethod
    def list_transactions(self, user_id: str) -> List[Transaction]:
        ...

    @abstractmethod
    def add_transaction(self, user_id: str, txn: Transaction) -> Transaction:
        ...

    @abstractmethod
    def remove_transaction(self, user_id: str, txn_id: str) -> None:
        ...

    @abstractmethod
    def list_goals(self, user_id: str) -> List[FinancialGoal]:
        ...

    @abstractmethod
    def add_goal(self, user_id: str, goal: FinancialGoal) -> FinancialGoal:
        ...

    @abstractmethod
    def save_goal(self, user_id: str, goal: FinancialGoal) -> FinancialGoal:
        ...

    @abstractmethod
    def remove_goal(self, user_id: str, goal_id: str) -> None:
        ...

    @abstractmethod
    def list_insights(self, user_id: str) -> List[AIInsight]:
        ...

    @abstractmethod
    def add_insight(self, user_id: str, insight: AIInsight) -> AIInsight:
        ...

    @abstractmethod
    def save_insight(self, user_id: str, insight: AIInsight) -> AIInsight:
        ...

    def update_goal(
        self,
        user_id: str,
        goal_id: str,
        change: GoalChange,
    ) -> Tuple[FinancialGoal, Optional[AIInsight]]:
        """Apply `change` to the stored goal and persist the result and any insight it emits.

        The read, the change and both writes happen under one lock, so concurrent
        contributions to the same goal are applied one after the other.
        """
        with _WRITE_LOCK:
            updated, insight = change(self.get_goal(user_id, goal_id))
            self.save_goal(user_id, updated)
            if insight is not None:
                self.add_insight(user_id, insight)
        return updated, insight

    def get_goal(self, user_id: str, goal_id: str) -> FinancialGoal:
        for goal in self.list_goals(user_id):
            if goal.id == goal_id:
                return goal
        raise RecordNotFound(f"goal {goal_id}")

    def get_insight(self, user_id: str, insight_id: str) -> AIInsight:
        for insight in self.list_insights(user_id):
            if insight.id == insight_id:
                return insight
        raise RecordNotFound(f"insight {insight_id}")

    def is_empty(self, user_id: str) -> bool:
        return not (
            self.list_transactions(user_id) or self.list_goals(user_id) or self.list_insights(user_id)
        )

    def seed_demo(self, user_id: str, today: date | None = None) -> bool:
        if not self.is_empty(user_id):
            return False
        # Stored newest first, matching add_transaction.
        for txn in reversed(demo_transactions(today)):
            self.add_transaction(user_id, txn)
        for goal in demo_goals(today):
            self.add_goal(user_id, goal)
        for insight in reversed(demo_insights(today)):
            self.add_insight(user_id, insight)
        logger.info("Seeded demo ledger user_id=%s", user_id)
        return True


def _replace(items: List, record) -> List:
    for index, item in enumerate(items):
        if item.id == record.id:
            items[index] = record
            return items
    raise RecordNotFound(record.id)


@dataclass
class InMemoryStore(LedgerStore):
    transactions: Dict[str, List[Transaction]] = field(default_factory=dict)
    goals: Dict[str, List[FinancialGoal]] = field(default_factory=dict)
    insights: Dict[str, List[AIInsight]] = field(default_factory=dict)
    seeded_users: Set[str] = field(default_factory=set)

    def list_transactions(self, user_id: str) -> List[Transaction]:
        return list(self.transactions.get(user_id, []))

    def add_transaction(self, user_id: str, txn: Transaction) -> Transaction:
        self.transactions.setdefault(user_id, []).insert(0, txn)
        return txn

    def remove_transaction(self, user_id: str, txn_id: str) -> None:
        items = self.transactions.get(user_id, [])
        remaining = [t for t in items if t.id != txn_id]
        if len(remaining) == len(items):
            raise RecordNotFound(f"transaction {txn_id}")
        self.transactions[user_id] = remaining

    def list_goals(self, user_id: str) -> List[FinancialGoal]:
        return list(self.goals.get(user_id, []))

    def add_goal(self, user_id: str, goal: FinancialGoal) -> FinancialGoal:
        self.goals.setdefault(user_id, []).append(goal)
        return goal

    def save_goal(self, user_id: str, goal: FinancialGoal) -> FinancialGoal:
        _replace(self.goals.get(user_id, []), goal)
        return goal

    def remove_goal(self, user_id: str, goal_id: str) -> None:
        items = self.goals.get(user_id, [])
        remaining = [g for g in items if g.id != goal_id]
        if len(remaining) == len(items):
            raise RecordNotFound(f"goal {goal_id}")
        self.goals[user_id] = remaining

    def list_insights(self, user_id: str) -> List[AIInsight]:
        return list(self.insights.get(user_id, []))

    def add_insight(self, user_id: str, insight: AIInsight) -> AIInsight:
        self.insights.setdefault(user_id, []).insert(0, insight)
        return insight

    def save_insight(self, user_id: str, insight: AIInsight) -> AIInsight:
        _replace(self.insights.get(user_id, []), insight)
        return insight

    def seed_demo(self, user_id: str, today: date | None = None) -> bool:
        # A user who cleared their ledger keeps it empty.
        if user_id in self.seeded_users:
            return False
        self.seeded_users.add(user_id)
        return super().seed_demo(user_id, today)


class SupabaseStore(LedgerStore):
    TRANSACTION_COLUMNS = "id,user_id,amount,description,category,date,type"
    GOAL_COLUMNS = "id,user_id,name,target_amount,current_amount,deadline,category"
    INSIGHT_COLUMNS = "id,user_id,type,message,date,read"

    def __init__(self, client: SupabaseRestClient | None = None) -> None:
        self.client = client or get_supabase_client()

    @staticmethod
    def _scope(user_id: str, record_id: str | None = None) -> Dict[str, str]:
        filters = {"user_id": f"eq.{user_id}"}
        if record_id is not None:
            filters["id"] = f"eq.{record_id}"
        return filters

    def list_transactions(self, user_id: str) -> List[Transaction]:
        rows = self.client.fetch_rows(
            "transactions",
            select=self.TRANSACTION_COLUMNS,
            filters=self._scope(user_id),
            order="date.desc,id.desc",
        )
        return [Transaction.model_validate(row) for row in rows]

    def add_transaction(self, user_id: str, txn: Transaction) -> Transaction:
        self.client.insert_rows("transactions", [{**txn.model_dump(mode="json"), "user_id": user_id}])
        return txn

    def remove_transaction(self, user_id: str, txn_id: str) -> None:
        if not self.client.delete_rows("transactions", filters=self._scope(user_id, txn_id)):
            raise RecordNotFound(f"transaction {txn_id}")

    def list_goals(self, user_id: str) -> List[FinancialGoal]:
        rows = self.client.fetch_rows(
            "goals",
            select=self.GOAL_COLUMNS,
            filters=self._scope(user_id),
            order="id.asc",
        )
        return [FinancialGoal.model_validate(row) for row in rows]

    def add_goal(self, user_id: str, goal: FinancialGoal) -> FinancialGoal:
        self.client.insert_rows("goals", [{**goal.model_dump(mode="json"), "user_id": user_id}])
        return goal

    def save_goal(self, user_id: str, goal: FinancialGoal) -> FinancialGoal:
        values = goal.model_dump(mode="json", exclude={"id"})
        if not self.client.update_rows("goals", filters=self._scope(user_id, goal.id), values=values):
            raise RecordNotFound(f"goal {goal.id}")
        return goal

    def remove_goal(self, user_id: str, goal_id: str) -> None:
        if not self.client.delete_rows("goals", filters=self._scope(user_id, goal_id)):
            raise RecordNotFound(f"goal {goal_id}")

    def list_insights(self, user_id: str) -> List[AIInsight]:
        rows = self.client.fetch_rows(
            "insights",
            select=self.INSIGHT_COLUMNS,
            filters=self._scope(user_id),
            order="date.desc,id.desc",
        )
        return [AIInsight.model_validate(row) for row in rows]

    def add_insight(self, user_id: str, insight: AIInsight) -> AIInsight:
        self.client.insert_rows("insights", [{**insight.model_dump(mode="json"), "user_id": user_id}])
        return insight

    def save_insight(self, user_id: str, insight: AIInsight) -> AIInsight:
        values = insight.model_dump(mode="json", exclude={"id"})
        if not self.client.update_rows("insights", filters=self._scope(user_id, insight.id), values=values):
            raise RecordNotFound(f"insight {insight.id}")
        return insight


_store: LedgerStore | None = None


def get_store() -> LedgerStore:
    global _store
    if _store is None:
        backend = config.store_backend()
        _store = SupabaseStore() if backend == "supabase" else InMemoryStore()
        logger.info("Ledger store initialised backend=%s", backend)
    return _store


def load_user_store(user_id: str) -> LedgerStore:
    store = get_store()
    if config.seed_demo_data():
        with _WRITE_LOCK:
            store.seed_demo(user_id)
    return store
