"""
Threshold risk classifier.

Maps ``EnvironmentalSignals`` to a level per disaster category using fixed
two-tier thresholds. All comparisons are strict. A rule that reads a missing
(``None``) signal is treated as not satisfied, so absent data can only ever
lower a category to ``low``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from preparedness.models import (
    DISASTER_CATEGORIES,
    EnvironmentalSignals,
    Risk,
    RiskAssessment,
    RiskLevel,
)

logger = logging.getLogger(__name__)


def _gt(value: float | None, threshold: float) -> bool:
    return value is not None and value > threshold


def _lt(value: float | None, threshold: float) -> bool:
    return value is not None and value < threshold


# ---------------------------------------------------------------------------
# Per-category rules: each returns (level, explanation)
# ---------------------------------------------------------------------------

def _earthquake(s: EnvironmentalSignals) -> tuple[RiskLevel, str]:
    if _gt(s.seismic_activity, 3):
        return RiskLevel.HIGH, f"Seismic activity of {s.seismic_activity} indicates frequent strong earthquakes."
    if _gt(s.seismic_activity, 2):
        return RiskLevel.MEDIUM, f"Seismic activity of {s.seismic_activity} indicates moderate earthquake potential."
    return RiskLevel.LOW, "Seismic activity is low or unknown."


def _wildfire(s: EnvironmentalSignals) -> tuple[RiskLevel, str]:
    t, h = s.temperature, s.humidity
    if _gt(t, 85) and _lt(h, 30):
        return RiskLevel.HIGH, f"Hot ({t}°F) and dry ({h}% humidity) conditions favor fast-spreading fires."
    if _gt(t, 75) and _lt(h, 40):
        return RiskLevel.MEDIUM, f"Warm ({t}°F) and fairly dry ({h}% humidity) conditions raise fire danger."
    return RiskLevel.LOW, "Temperature and humidity do not indicate elevated fire danger."


def _flood(s: EnvironmentalSignals) -> tuple[RiskLevel, str]:
    if _lt(s.elevation, 30):
        return RiskLevel.HIGH, f"Low elevation ({s.elevation} ft) leaves the area exposed to flooding."
    if _lt(s.elevation, 50):
        return RiskLevel.MEDIUM, f"Elevation of {s.elevation} ft gives limited protection from flooding."
    return RiskLevel.LOW, "Elevation is high enough or unknown."


def _winter(s: EnvironmentalSignals) -> tuple[RiskLevel, str]:
    if _lt(s.temperature, 20):
        return RiskLevel.HIGH, f"Temperatures of {s.temperature}°F bring severe cold and ice."
    if _lt(s.temperature, 32):
        return RiskLevel.MEDIUM, f"Freezing temperatures ({s.temperature}°F) can bring snow and ice."
    return RiskLevel.LOW, "Temperatures are above freezing or unknown."


def _hurricane(s: EnvironmentalSignals) -> tuple[RiskLevel, str]:
    if _lt(s.distance_to_coast, 50):
        return RiskLevel.HIGH, f"Only {s.distance_to_coast} miles from the coast, within hurricane striking range."
    if _lt(s.distance_to_coast, 100):
        return RiskLevel.MEDIUM, f"{s.distance_to_coast} miles from the coast; strong storms can still reach inland."
    return RiskLevel.LOW, "Far from the coast or distance unknown."


def _tornado(s: EnvironmentalSignals) -> tuple[RiskLevel, str]:
    if _gt(s.tornado_frequency, 3):
        return RiskLevel.HIGH, f"About {s.tornado_frequency} tornadoes per year are recorded in the area."
    if _gt(s.tornado_frequency, 1):
        return RiskLevel.MEDIUM, f"Tornadoes occur occasionally ({s.tornado_frequency} per year)."
    return RiskLevel.LOW, "Tornadoes are rare or frequency unknown."


def _drought(s: EnvironmentalSignals) -> tuple[RiskLevel, str]:
    if _lt(s.annual_rainfall, 15):
        return RiskLevel.HIGH, f"Annual rainfall of {s.annual_rainfall} in is very low."
    if _lt(s.annual_rainfall, 25):
        return RiskLevel.MEDIUM, f"Annual rainfall of {s.annual_rainfall} in is below average."
    return RiskLevel.LOW, "Rainfall is adequate or unknown."


def _heatwave(s: EnvironmentalSignals) -> tuple[RiskLevel, str]:
    if _gt(s.temperature, 95):
        return RiskLevel.HIGH, f"Extreme heat ({s.temperature}°F) is dangerous to health."
    if _gt(s.temperature, 85):
        return RiskLevel.MEDIUM, f"High temperatures ({s.temperature}°F) can cause heat illness."
    return RiskLevel.LOW, "Temperatures are moderate or unknown."


def _tsunami(s: EnvironmentalSignals) -> tuple[RiskLevel, str]:
    d, q = s.distance_to_coast, s.seismic_activity
    if _lt(d, 30) and _gt(q, 2):
        return RiskLevel.HIGH, f"Coastal location ({d} mi) with notable seismic activity ({q})."
    if _lt(d, 50) and _gt(q, 1):
        return RiskLevel.MEDIUM, f"Near the coast ({d} mi) with some seismic activity ({q})."
    return RiskLevel.LOW, "Not both coastal and seismically active."


def _landslide(s: EnvironmentalSignals) -> tuple[RiskLevel, str]:
    e, r = s.elevation, s.annual_rainfall
    if _gt(e, 1000) and _gt(r, 40):
        return RiskLevel.HIGH, f"Elevated terrain ({e} ft) with heavy rainfall ({r} in/yr)."
    if _gt(e, 500) and _gt(r, 30):
        return RiskLevel.MEDIUM, f"Hilly terrain ({e} ft) with substantial rainfall ({r} in/yr)."
    return RiskLevel.LOW, "Terrain and rainfall do not indicate slope instability."


_RULES: dict[str, Callable[[EnvironmentalSignals], tuple[RiskLevel, str]]] = {
    "earthquake": _earthquake,
    "wildfire": _wildfire,
    "flood": _flood,
    "winter": _winter,
    "landslide": _landslide,
    "tornado": _tornado,
    "hurricane": _hurricane,
    "drought": _drought,
    "heatwave": _heatwave,
    "tsunami": _tsunami,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify(signals: EnvironmentalSignals | None = None) -> RiskAssessment:
    """Return a risk level for every category in the fixed category order."""
    signals = signals or EnvironmentalSignals()
    assessment: RiskAssessment = {}
    for cid in DISASTER_CATEGORIES:
        level, explanation = _RULES[cid](signals)
        assessment[cid] = Risk(level=level, explanation=explanation)

    logger.debug(
        "Classified %d categories: %s",
        len(assessment),
        {cid: r.level.value for cid, r in assessment.items()},
    )
    return assessment


def active_disasters(
    assessment: RiskAssessment,
    policy: str = "elevated",
) -> list[dict[str, Any]]:
    """Categories to surface for a location.

    ``elevated`` keeps only categories rated above ``low``; ``all`` returns
    every category in the assessment. Both keep fixed category order.
    """
    if policy not in ("elevated", "all"):
        raise ValueError(f"Unknown active-disaster policy: {policy!r}")

    out = []
    for cid in DISASTER_CATEGORIES:
        risk = assessment.get(cid)
        if risk is None:
            continue
        if policy == "elevated" and risk.level is RiskLevel.LOW:
            continue
        out.append({"id": cid, "level": risk.level.value})
    return out
