from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from wiseflow.services.auth import current_user
from wiseflow.services.finance import LedgerSnapshot, match_rule
from wiseflow.services.finance.classifier import ASSISTANT_GREETING
from wiseflow.services.store import load_user_store

router = APIRouter(prefix="/assistant", tags=["assistant"])
logger = logging.getLogger(__name__)


class ChatRequest(BaseModel):
    prompt: str = Field(min_length=1)


@router.get("/greeting")
def greeting(user=Depends(current_user)):
    return {"response": ASSISTANT_GREETING}


@router.post("/chat")
def chat(payload: ChatRequest, user=Depends(current_user)):
    user_id = user.get("sub", "")
    snapshot = LedgerSnapshot.from_transactions(load_user_store(user_id).list_transactions(user_id))
    rule, response = match_rule(payload.prompt, snapshot)
    logger.info("Assistant reply user_id=%s rule=%s", user_id, rule)
    return {"response": response, "rule": rule}
