from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from printshop.api.routes_demo import router as demo_router
from printshop.api.routes_orders import router as orders_router
from printshop.api.routes_reports import router as reports_router
from printshop.core.config import get_settings
from printshop.core.logging import configure_logging
from printshop.demo import seed_demo_data
from printshop.domain.errors import BillingError, RecordNotFound
from printshop.persistence.db import init_db, session_scope

configure_logging()
logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(title=settings.app_name)


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    if settings.bootstrap_demo_on_startup:
        with session_scope() as session:
            result = seed_demo_data(session)
        logger.info(
            "demo data ready: scenario_id=%s seeded_now=%s",
            result.get("scenario_id"),
            result.get("seeded_now"),
        )


@app.exception_handler(BillingError)
async def billing_error_handler(_: Request, exc: BillingError):
    return JSONResponse(
        status_code=400,
        content={
            "detail": str(exc),
            "error": exc.error_code,
        },
    )


@app.exception_handler(RecordNotFound)
async def not_found_handler(_: Request, exc: RecordNotFound):
    return JSONResponse(
        status_code=404,
        content={
            "detail": str(exc),
            "error": exc.error_code,
        },
    )


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


app.include_router(demo_router)
app.include_router(orders_router)
app.include_router(reports_router)
