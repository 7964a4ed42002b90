"""
Runtime configuration read from the environment.

``app.py`` calls ``load_dotenv()`` before anything here is read, so a local
``.env`` file works the same as exported variables. Values are read on every
call (not cached at import) so tests can override them with ``monkeypatch``.
"""

from __future__ import annotations

import os

USER_AGENT = "ReadyPlan/0.1"

OPENCAGE_URL = "https://api.opencagedata.com/geocode/v1/json"
NOMINATIM_SEARCH = "https://nominatim.openstreetmap.org/search"
OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
WOLFRAM_QUERY_URL = "https://api.wolframalpha.com/v2/query"

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT_SECONDS = 10.0


def opencage_api_key() -> str | None:
    return os.getenv("OPENCAGE_API_KEY") or None


def openweather_api_key() -> str | None:
    return os.getenv("OPENWEATHER_API_KEY") or None


def wolfram_app_id() -> str | None:
    return os.getenv("WOLFRAM_APP_ID") or None


def openai_api_key() -> str | None:
    return os.getenv("OPENAI_API_KEY") or None


def openai_model() -> str:
    return os.getenv("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL


def external_timeout() -> float:
    """Per-call timeout applied to every outbound service request."""
    raw = os.getenv("EXTERNAL_TIMEOUT_SECONDS", "")
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_TIMEOUT_SECONDS


def risk_source_name() -> str:
    """``narrative`` or ``threshold``.

    Defaults to ``narrative`` when an OpenAI key is configured, since the
    narrative source degrades to the threshold classifier on its own.
    """
    name = (os.getenv("RISK_SOURCE") or "").strip().lower()
    if name in ("narrative", "threshold"):
        return name
    return "narrative" if openai_api_key() else "threshold"
