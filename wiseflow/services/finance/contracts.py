from __future__ import annotations

import datetime as dt
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

CategoryLabel = Literal[
    "food",
    "housing",
    "transportation",
    "utilities",
    "entertainment",
    "healthcare",
    "shopping",
    "personal",
    "education",
    "travel",
    "income",
    "savings",
    "investments",
    "other",
]
TransactionType = Literal["income", "expense"]
InsightType = Literal["tip", "warning", "achievement"]
GoalStatus = Literal["complete", "overdue", "at-risk", "on-track"]

CATEGORY_LABELS: tuple[str, ...] = get_args(CategoryLabel)


class Transaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    amount: float = Field(gt=0, allow_inf_nan=False)
    description: str
    category: CategoryLabel
    date: dt.date
    type: TransactionType


class FinancialGoal(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    target_amount: float = Field(gt=0, allow_inf_nan=False, alias="targetAmount")
    current_amount: float = Field(default=0.0, ge=0, allow_inf_nan=False, alias="currentAmount")
    deadline: dt.date
    category: str = "savings"


class AIInsight(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: InsightType
    message: str
    date: dt.date
    read: bool = False
