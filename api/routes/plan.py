"""
Plan Routes — survey in, preparedness plan out.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from api.schemas import AnalyzeRequest, PreparednessPlan
from preparedness.planner import LocationNotFoundError, build_plan

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=PreparednessPlan)
async def analyze(req: AnalyzeRequest):
    """Build a personalized preparedness plan for the submitted household."""
    try:
        plan = await build_plan(req.location, req.to_household(), address=req.address)
    except LocationNotFoundError as exc:
        logger.info("analyze: %s", exc)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    logger.info(
        "analyze: %s → %d active disasters (%s)",
        req.location, len(plan["active_disasters"]), plan["plan_status"],
    )
    return plan
