"""FastAPI app: instant removal quotes, crew recommendations and override checks."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load .env when running locally (application/.env or repo root .env / .env.local)
_app_dir = Path(__file__).resolve().parent.parent.parent  # application/
_repo_root = _app_dir.parent
load_dotenv(_app_dir / ".env")
load_dotenv(_app_dir / ".env.local")
load_dotenv(_repo_root / ".env")
load_dotenv(_repo_root / ".env.local")

from fastapi import FastAPI, HTTPException

from . import overrides, quote_engine
from .config import ConfigurationError, config_from_env
from .models import ManualOverride, Resources
from .schemas import JobRequest, OverrideRequest, QuoteRequest

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # A bad PRICING_CONFIG_PATH or PROFIT_MARGIN stops startup
    try:
        config = config_from_env()
    except ConfigurationError as e:
        logger.error("Invalid pricing configuration: %s", e)
        raise
    logger.info("Pricing config loaded (margin %s, currency %s)", config.profit_margin, config.currency)
    yield


app = FastAPI(title="Removals Quote Engine", version="0.1.0", lifespan=lifespan)


@app.post("/api/quote")
def quote(req: QuoteRequest) -> dict[str, Any]:
    """
    Price a job.

    status is "incomplete" until a job selection and distances are supplied,
    "callback_required" for specialist items or very large properties, else "quoted".
    """
    config = config_from_env()
    try:
        result = quote_engine.calculate_quote(req.to_facts(), config)
    except ConfigurationError as e:
        logger.warning("Rejected request with unknown pricing key: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    if result is None:
        return {"status": "incomplete"}
    if result.requires_callback:
        return {
            "status": "callback_required",
            "reason": result.callback_reason,
            "currency": config.currency,
            "quote": result.to_dict(),
        }
    return {"status": "quoted", "currency": config.currency, "quote": result.to_dict()}


@app.post("/api/resources/recommend")
def recommend(req: JobRequest) -> dict[str, Any]:
    """Recommended crew and vans for the selected property, office or furniture job."""
    job = req.to_job()
    if job is None:
        return {"status": "incomplete"}
    try:
        resources, cubes, reason = quote_engine.recommend_resources(job, config_from_env())
    except ConfigurationError as e:
        logger.warning("Rejected request with unknown pricing key: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "status": "ok",
        "men": resources.men,
        "vans": resources.vans,
        "load_time": resources.load_time,
        "cubes": cubes,
        "requires_callback": resources.requires_callback,
        "callback_reason": reason,
    }


@app.post("/api/override/validate")
def validate_override(req: OverrideRequest) -> dict[str, Any]:
    """Validate a manual van/crew choice and, if a recommendation is given, describe the difference."""
    validation = overrides.validate_van_crew(req.vans, req.crew, config_from_env())
    out: dict[str, Any] = {"validation": validation.to_dict()}
    if req.recommended_men is not None and req.recommended_vans is not None:
        recommended = Resources(men=req.recommended_men, vans=req.recommended_vans, load_time=0)
        diff = overrides.check_recommendation_diff(recommended, ManualOverride(men=req.crew, vans=req.vans))
        out["diff"] = diff.to_dict()
    return out


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
