from __future__ import annotations

import datetime as dt
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from wiseflow import config
from wiseflow.services.auth import current_user
from wiseflow.services.finance import (
    categorize,
    filter_transactions,
    ledger_totals,
    recent_transactions,
    transaction_insight,
)
from wiseflow.services.finance.common import new_record_id
from wiseflow.services.finance.contracts import CategoryLabel, Transaction, TransactionType
from wiseflow.services.store import RecordNotFound, load_user_store

router = APIRouter(prefix="/transactions", tags=["transactions"])
logger = logging.getLogger(__name__)


class TransactionCreate(BaseModel):
    amount: float = Field(gt=0, allow_inf_nan=False)
    description: str = Field(min_length=1)
    category: CategoryLabel | None = None
    date: dt.date
    type: TransactionType


class CategorizeRequest(BaseModel):
    description: str
    amount: float = Field(default=0.0, allow_inf_nan=False)


@router.get("")
def list_transactions(
    search: str | None = None,
    category: CategoryLabel | None = None,
    txn_type: Annotated[TransactionType | None, Query(alias="type")] = None,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
    user=Depends(current_user),
):
    user_id = user.get("sub", "")
    store = load_user_store(user_id)
    items = filter_transactions(
        store.list_transactions(user_id),
        search=search,
        category=category,
        txn_type=txn_type,
        date_from=date_from,
        date_to=date_to,
    )
    return {
        "count": len(items),
        "totals": ledger_totals(items),
        "items": [t.model_dump(mode="json") for t in items],
    }


@router.get("/recent")
def list_recent(limit: int = config.RECENT_LIMIT, user=Depends(current_user)):
    store = load_user_store(user.get("sub", ""))
    items = recent_transactions(store.list_transactions(user.get("sub", "")), limit)
    return {"limit": limit, "items": [t.model_dump(mode="json") for t in items]}


@router.post("")
def create_transaction(payload: TransactionCreate, user=Depends(current_user)):
    user_id = user.get("sub", "")
    store = load_user_store(user_id)
    category = payload.category or categorize(payload.description, payload.amount)
    record = store.add_transaction(
        user_id,
        Transaction(
            id=new_record_id(),
            amount=payload.amount,
            description=payload.description,
            category=category,
            date=payload.date,
            type=payload.type,
        ),
    )
    logger.info(
        "Transaction recorded user_id=%s id=%s type=%s amount=%s category=%s",
        user_id,
        record.id,
        record.type,
        record.amount,
        record.category,
    )

    insight = transaction_insight(record, threshold=config.INSIGHT_EXPENSE_THRESHOLD)
    if insight is not None:
        store.add_insight(user_id, insight)
    return {
        "status": "ok",
        "transaction": record.model_dump(mode="json"),
        "auto_categorized": payload.category is None,
        "insight": insight.model_dump(mode="json") if insight else None,
    }


@router.delete("/{transaction_id}")
def delete_transaction(transaction_id: str, user=Depends(current_user)):
    user_id = user.get("sub", "")
    store = load_user_store(user_id)
    try:
        store.remove_transaction(user_id, transaction_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Transaction not found")
    logger.info("Transaction removed user_id=%s id=%s", user_id, transaction_id)
    return {"status": "ok", "id": transaction_id}


@router.post("/categorize")
def suggest_category(payload: CategorizeRequest, user=Depends(current_user)):
    return {"category": categorize(payload.description, payload.amount)}
