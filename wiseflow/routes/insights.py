from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from wiseflow.services.auth import current_user
from wiseflow.services.finance import mark_read
from wiseflow.services.store import RecordNotFound, load_user_store

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("")
def list_insights(unread_only: bool = False, user=Depends(current_user)):
    user_id = user.get("sub", "")
    store = load_user_store(user_id)
    all_items = store.list_insights(user_id)
    items = [i for i in all_items if not (unread_only and i.read)]
    return {
        "unread_count": sum(1 for i in all_items if not i.read),
        "items": [i.model_dump(mode="json") for i in items],
    }


@router.post("/{insight_id}/read")
def read_insight(insight_id: str, user=Depends(current_user)):
    user_id = user.get("sub", "")
    store = load_user_store(user_id)
    try:
        insight = store.save_insight(user_id, mark_read(store.get_insight(user_id, insight_id)))
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Insight not found")
    return {"status": "ok", "insight": insight.model_dump(mode="json")}
