from __future__ import annotations

from fastapi import APIRouter, Depends

from wiseflow import config
from wiseflow.services.auth import current_user
from wiseflow.services.finance import (
    category_monthly_averages,
    category_share,
    health_report,
    income_vs_expense_monthly,
    ledger_summary,
    monthly_spending_data,
    total_expenses,
    total_income,
)
from wiseflow.services.store import load_user_store

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/summary")
def summary(limit: int = config.RECENT_LIMIT, user=Depends(current_user)):
    user_id = user.get("sub", "")
    store = load_user_store(user_id)
    return ledger_summary(store.list_transactions(user_id), recent_limit=limit)


@router.get("/categories")
def categories(user=Depends(current_user)):
    user_id = user.get("sub", "")
    txns = load_user_store(user_id).list_transactions(user_id)
    return {
        "items": category_share(txns),
        "monthly_averages": category_monthly_averages(txns),
    }


@router.get("/monthly")
def monthly(user=Depends(current_user)):
    user_id = user.get("sub", "")
    return {"items": monthly_spending_data(load_user_store(user_id).list_transactions(user_id))}


@router.get("/income-vs-expense")
def income_vs_expense(user=Depends(current_user)):
    user_id = user.get("sub", "")
    return {"items": income_vs_expense_monthly(load_user_store(user_id).list_transactions(user_id))}


@router.get("/health-score")
def health_score(user=Depends(current_user)):
    user_id = user.get("sub", "")
    store = load_user_store(user_id)
    txns = store.list_transactions(user_id)
    return health_report(
        income=total_income(txns),
        expenses=total_expenses(txns),
        goal_count=len(store.list_goals(user_id)),
        transaction_count=len(txns),
    )
