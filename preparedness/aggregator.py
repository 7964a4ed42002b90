"""
Environmental Data Aggregator.

Fans out the weather and knowledge-engine lookups for a resolved location
and waits for both before classification starts. Every call is bounded by
the configured timeout; a timeout or error yields that source's neutral
default instead of failing the request.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, TypeVar

from preparedness import settings
from preparedness.environment import (
    QUERIES,
    contacts_from_answers,
    query_knowledge,
    signals_from_answers,
)
from preparedness.models import EnvironmentalSignals, LocalContacts, LocationProfile, Weather
from preparedness.weather import get_current_weather

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class AggregatedData:
    signals: EnvironmentalSignals
    weather: Weather
    contacts: LocalContacts


async def with_default(coro: Awaitable[T], default: T, label: str, timeout: float | None = None) -> T:
    """Await *coro* under a timeout, returning *default* if it fails."""
    timeout = timeout if timeout is not None else settings.external_timeout()
    try:
        return await asyncio.wait_for(coro, timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("%s timed out after %.1fs — using defaults", label, timeout)
    except Exception as exc:
        logger.warning("%s failed — using defaults: %s", label, exc)
    return default


def _place_name(location: LocationProfile, fallback: str) -> str:
    parts = [p for p in (location.city, location.state) if p]
    return ", ".join(parts) if parts else fallback


async def gather_environment(location: LocationProfile, query_text: str = "") -> AggregatedData:
    """Collect weather and environmental signals for *location* concurrently."""
    lat, lng = location.coordinates.lat, location.coordinates.lng
    place = _place_name(location, query_text or location.formatted_address)

    weather, answers = await asyncio.gather(
        with_default(get_current_weather(lat, lng), Weather(), "Weather lookup"),
        with_default(query_knowledge(place), {key: "" for key in QUERIES}, "Knowledge queries"),
    )

    signals = signals_from_answers(answers, weather.temperature, weather.humidity)
    missing = [name for name, value in signals.to_dict().items() if value is None]
    if missing:
        logger.info("Signals missing for %s: %s", place, ", ".join(missing))

    return AggregatedData(
        signals=signals,
        weather=weather,
        contacts=contacts_from_answers(answers),
    )
