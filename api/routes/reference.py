"""
Reference Routes — health check and the static preparedness library.
"""

from __future__ import annotations

from fastapi import APIRouter

from api.schemas import ChecklistSection, DisasterInfo, Resource
from preparedness.reference_data import CHECKLIST, RESOURCES, disaster_reference

router = APIRouter()


# ---- Health ---- #

@router.get("/health")
async def health():
    return {"status": "ok"}


# ---- Library ---- #

@router.get("/disasters", response_model=list[DisasterInfo])
async def disasters():
    """Metadata and before/during/after steps for every disaster type."""
    return disaster_reference()


@router.get("/resources", response_model=list[Resource])
async def resources():
    """National disaster-assistance organisations."""
    return [dict(r) for r in RESOURCES]


@router.get("/checklist", response_model=list[ChecklistSection])
async def checklist():
    """Generic emergency checklist, grouped by section."""
    return [{"title": title, "items": list(items)} for title, items in CHECKLIST.items()]
