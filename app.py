"""
ReadyPlan — FastAPI Entry Point

Start with:  uvicorn app:app --reload
"""

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request

from api.routes import router

load_dotenv()

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(name)s — %(message)s")

app = FastAPI(
    title="ReadyPlan API",
    description="Personalized Disaster Preparedness Plans",
    version="0.1.0",
)


@app.get("/")
def root(request: Request):
    """Quick check that the server is up. Links use the same host/port you used to connect."""
    base = str(request.base_url).rstrip("/")
    return {
        "message": "ReadyPlan API is running",
        "docs": f"{base}/docs",
        "health": f"{base}/api/v1/health",
        "analyze": f"{base}/api/v1/analyze",
    }


app.include_router(router, prefix="/api/v1")
