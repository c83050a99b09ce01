from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wiseflow import config
from wiseflow.routes import (
    analytics,
    assistant,
    goals,
    insights,
    transactions,
)
from wiseflow.services.supabase_rest import SupabaseRestError

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="WiseFlow Finance API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(transactions.router)  # Ledger entries + auto-categorization
app.include_router(goals.router)  # Savings goals and contributions
app.include_router(insights.router)  # Generated tips/achievements
app.include_router(analytics.router)  # Derived metrics
app.include_router(assistant.router)  # Rule-based assistant


@app.exception_handler(SupabaseRestError)
def store_unavailable(request: Request, exc: SupabaseRestError):
    logger.error("Store request failed: path=%s error=%s", request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=502, content={"detail": "Storage backend unavailable"})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "store": config.store_backend()}


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
