"""
Location Resolver — free-text location to ``LocationProfile``.

Uses OpenCage when ``OPENCAGE_API_KEY`` is set, otherwise the keyless
Nominatim search API. Returns None when nothing matches or the service is
unreachable; the planner turns that into an "invalid location" response.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from preparedness import settings
from preparedness.models import Coordinates, LocationProfile

logger = logging.getLogger(__name__)


def _pick_city(components: dict[str, Any]) -> str:
    return (
        components.get("city")
        or components.get("town")
        or components.get("village")
        or components.get("hamlet")
        or ""
    )


def _from_opencage(result: dict[str, Any]) -> LocationProfile:
    components = result.get("components", {})
    geometry = result["geometry"]
    return LocationProfile(
        city=_pick_city(components),
        state=components.get("state", ""),
        zip_code=components.get("postcode", ""),
        formatted_address=result.get("formatted", ""),
        coordinates=Coordinates(lat=float(geometry["lat"]), lng=float(geometry["lng"])),
    )


def _from_nominatim(result: dict[str, Any]) -> LocationProfile:
    address = result.get("address", {})
    return LocationProfile(
        city=_pick_city(address),
        state=address.get("state", ""),
        zip_code=address.get("postcode", ""),
        formatted_address=result.get("display_name", ""),
        coordinates=Coordinates(lat=float(result["lat"]), lng=float(result["lon"])),
    )


async def _search_opencage(query: str, api_key: str) -> LocationProfile | None:
    async with httpx.AsyncClient(timeout=settings.external_timeout()) as client:
        resp = await client.get(
            settings.OPENCAGE_URL,
            params={"q": query, "key": api_key, "limit": 1},
            headers={"User-Agent": settings.USER_AGENT},
        )
        resp.raise_for_status()
        results = resp.json().get("results") or []
    return _from_opencage(results[0]) if results else None


async def _search_nominatim(query: str) -> LocationProfile | None:
    async with httpx.AsyncClient(timeout=settings.external_timeout()) as client:
        resp = await client.get(
            settings.NOMINATIM_SEARCH,
            params={"q": query, "format": "json", "addressdetails": 1, "limit": 1},
            headers={"User-Agent": settings.USER_AGENT},
        )
        resp.raise_for_status()
        results = resp.json()
    return _from_nominatim(results[0]) if results else None


async def resolve_location(location: str, address: str | None = None) -> LocationProfile | None:
    """Geocode *location* (refined by a street *address* when given)."""
    query = ", ".join(p.strip() for p in (address, location) if p and p.strip())
    if not query:
        return None

    api_key = settings.opencage_api_key()
    try:
        if api_key:
            profile = await _search_opencage(query, api_key)
        else:
            profile = await _search_nominatim(query)
    except (httpx.HTTPError, KeyError, ValueError) as exc:
        logger.error("Geocoding failed for %r: %s", query, exc)
        return None

    if profile is None:
        logger.warning("No geocoding match for %r", query)
        return None

    logger.info(
        "Geocode: %r -> %s (%.4f, %.4f)",
        query, profile.formatted_address,
        profile.coordinates.lat, profile.coordinates.lng,
    )
    return profile
