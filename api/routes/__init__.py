"""
api.routes — Aggregates all domain-specific route modules into a single router.

app.py imports ``from api.routes import router`` which resolves here.
"""

from fastapi import APIRouter

from api.routes.plan import router as plan_router
from api.routes.reference import router as reference_router

router = APIRouter()

router.include_router(reference_router)
router.include_router(plan_router)
