from __future__ import annotations

import datetime as dt
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from wiseflow.services.auth import current_user
from wiseflow.services.finance import contribute, describe_goal
from wiseflow.services.finance.common import new_record_id
from wiseflow.services.finance.contracts import FinancialGoal
from wiseflow.services.store import RecordNotFound, load_user_store

router = APIRouter(prefix="/goals", tags=["goals"])
logger = logging.getLogger(__name__)


class GoalPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    target_amount: float = Field(gt=0, allow_inf_nan=False, alias="targetAmount")
    current_amount: float = Field(default=0.0, ge=0, allow_inf_nan=False, alias="currentAmount")
    deadline: dt.date
    category: str = "savings"


class ContributionPayload(BaseModel):
    amount: float = Field(ge=0, allow_inf_nan=False)


@router.get("")
def list_goals(user=Depends(current_user)):
    user_id = user.get("sub", "")
    store = load_user_store(user_id)
    return {"items": [describe_goal(goal) for goal in store.list_goals(user_id)]}


@router.post("")
def create_goal(payload: GoalPayload, user=Depends(current_user)):
    user_id = user.get("sub", "")
    store = load_user_store(user_id)
    goal = store.add_goal(
        user_id,
        FinancialGoal(id=new_record_id(), **payload.model_dump()),
    )
    logger.info("Goal created user_id=%s id=%s target=%s", user_id, goal.id, goal.target_amount)
    return {"status": "ok", "goal": describe_goal(goal)}


@router.post("/{goal_id}/contributions")
def add_contribution(goal_id: str, payload: ContributionPayload, user=Depends(current_user)):
    user_id = user.get("sub", "")
    store = load_user_store(user_id)
    try:
        updated, insight = store.update_goal(user_id, goal_id, lambda goal: contribute(goal, payload.amount))
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Goal not found")

    if insight is not None:
        logger.info("Goal reached user_id=%s id=%s", user_id, goal_id)
    return {
        "status": "ok",
        "goal": describe_goal(updated),
        "insight": insight.model_dump(mode="json") if insight else None,
    }


@router.delete("/{goal_id}")
def delete_goal(goal_id: str, user=Depends(current_user)):
    user_id = user.get("sub", "")
    store = load_user_store(user_id)
    try:
        store.remove_goal(user_id, goal_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Goal not found")
    logger.info("Goal removed user_id=%s id=%s", user_id, goal_id)
    return {"status": "ok", "id": goal_id}
