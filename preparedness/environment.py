"""
Environmental signals from the Wolfram|Alpha knowledge engine.

Each signal is a separate natural-language query. Answers come back as
plaintext pods whose wording varies from place to place, so every number is
pulled out defensively: unit-aware where possible, ``None`` whenever the text
doesn't contain a usable value.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any

import httpx

from preparedness import settings
from preparedness.models import EnvironmentalSignals, LocalContacts

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

QUERIES: dict[str, str] = {
    "elevation": "elevation of {location}",
    "rainfall": "average annual rainfall {location}",
    "snowfall": "average annual snowfall {location}",
    "coast": "distance from {location} to the nearest coastline",
    "seismic": "earthquakes near {location}",
    "tornado": "average tornadoes per year {location}",
    "emergency": "emergency services {location}",
    "hospital": "nearest hospitals {location}",
}

# ---------------------------------------------------------------------------
# Number extraction
# ---------------------------------------------------------------------------

_NUMBER = r"(-?\d[\d,]*(?:\.\d+)?)"

FEET = {"feet": 1.0, "foot": 1.0, "ft": 1.0, "meters": 3.28084, "meter": 3.28084, "m": 3.28084}
INCHES = {"inches": 1.0, "inch": 1.0, "in": 1.0, "mm": 0.0393701, "cm": 0.393701}
MILES = {"miles": 1.0, "mile": 1.0, "mi": 1.0, "km": 0.621371, "kilometers": 0.621371}


def _to_float(raw: str) -> float | None:
    try:
        return float(raw.replace(",", ""))
    except ValueError:
        return None


def extract_quantity(text: str, units: dict[str, float]) -> float | None:
    """First ``<number> <unit>`` in *text*, converted by the unit's factor.

    Falls back to the first bare number when no unit is present. Returns
    None if the text holds no number at all.
    """
    if not text:
        return None

    if units:
        unit_alt = "|".join(sorted((re.escape(u) for u in units), key=len, reverse=True))
        match = re.search(rf"{_NUMBER}\s*({unit_alt})\b", text, re.IGNORECASE)
        if match:
            value = _to_float(match.group(1))
            if value is not None:
                return round(value * units[match.group(2).lower()], 2)

    bare = re.search(_NUMBER, text)
    return _to_float(bare.group(1)) if bare else None


_COUNT = r"(\d[\d,]*(?:\.\d+)?)"
_PER_YEAR = re.compile(
    rf"{_COUNT}\s*(?:tornado(?:e)?s?\b|(?:per|a|/)\s*(?:year|yr)\b)",
    re.IGNORECASE,
)
_YEAR = re.compile(r"(?:1[89]|20)\d{2}")


def extract_rate(text: str) -> float | None:
    """Events per year, e.g. "5 tornadoes" or "4.5 per year".

    Without such a phrase the first number that isn't a calendar year is
    used, so a leading "2019 |" date column is skipped.
    """
    if not text:
        return None
    match = _PER_YEAR.search(text)
    if match:
        return _to_float(match.group(1))
    for raw in re.findall(_COUNT, text):
        if _YEAR.fullmatch(raw):
            continue
        return _to_float(raw)
    return None


def extract_magnitude(text: str) -> float | None:
    """Average of the magnitudes mentioned in an earthquake listing."""
    if not text:
        return None
    values = [
        v for v in (
            _to_float(m) for m in re.findall(r"magnitude\s*:?\s*(\d+(?:\.\d+)?)", text, re.IGNORECASE)
        )
        if v is not None
    ]
    if not values:
        return None
    return round(sum(values) / len(values), 2)


_PHONE = re.compile(r"(\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4})")


def extract_phone(text: str, keyword: str) -> str | None:
    """Phone number on the first line of *text* that mentions *keyword*."""
    for line in text.splitlines():
        if keyword.lower() in line.lower():
            match = _PHONE.search(line)
            if match:
                return match.group(1)
    return None


def _first_line(text: str) -> str | None:
    for line in text.splitlines():
        line = line.strip(" |")
        if line:
            return line
    return None


# ---------------------------------------------------------------------------
# Wolfram|Alpha client
# ---------------------------------------------------------------------------

def _pods_text(data: dict[str, Any]) -> str:
    """Flatten the plaintext of all result pods (skipping the echoed input)."""
    result = data.get("queryresult") or {}
    if not result.get("success"):
        return ""
    lines: list[str] = []
    for pod in result.get("pods") or []:
        if pod.get("id") == "Input":
            continue
        for sub in pod.get("subpods") or []:
            text = sub.get("plaintext")
            if text:
                lines.append(text)
    return "\n".join(lines)


async def _query(client: httpx.AsyncClient, app_id: str, question: str) -> str:
    try:
        resp = await client.get(
            settings.WOLFRAM_QUERY_URL,
            params={"input": question, "appid": app_id, "output": "json", "format": "plaintext"},
            headers={"User-Agent": settings.USER_AGENT},
        )
        resp.raise_for_status()
        return _pods_text(resp.json())
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Wolfram query %r failed: %s", question, exc)
        return ""


async def query_knowledge(location: str) -> dict[str, str]:
    """Run every query in ``QUERIES`` for *location*; failed ones map to ``""``."""
    app_id = settings.wolfram_app_id()
    if not app_id:
        logger.warning("WOLFRAM_APP_ID not set — environmental signals unavailable")
        return {key: "" for key in QUERIES}

    async with httpx.AsyncClient(timeout=settings.external_timeout()) as client:
        answers = await asyncio.gather(*[
            _query(client, app_id, template.format(location=location))
            for template in QUERIES.values()
        ])
    return dict(zip(QUERIES, answers))


def signals_from_answers(
    answers: dict[str, str],
    temperature: float | None = None,
    humidity: float | None = None,
) -> EnvironmentalSignals:
    """Build signals from query answers plus current weather readings."""
    return EnvironmentalSignals(
        seismic_activity=extract_magnitude(answers.get("seismic", "")),
        elevation=extract_quantity(answers.get("elevation", ""), FEET),
        annual_rainfall=extract_quantity(answers.get("rainfall", ""), INCHES),
        annual_snowfall=extract_quantity(answers.get("snowfall", ""), INCHES),
        distance_to_coast=extract_quantity(answers.get("coast", ""), MILES),
        tornado_frequency=extract_rate(answers.get("tornado", "")),
        temperature=temperature,
        humidity=humidity,
    )


def contacts_from_answers(answers: dict[str, str]) -> LocalContacts:
    emergency = answers.get("emergency", "")
    hospital = answers.get("hospital", "")
    phone = _PHONE.search(hospital)
    return LocalContacts(
        police=extract_phone(emergency, "police"),
        fire=extract_phone(emergency, "fire"),
        hospital_name=_first_line(hospital),
        hospital_phone=phone.group(1) if phone else None,
    )
