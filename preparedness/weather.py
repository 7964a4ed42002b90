"""
Current conditions from OpenWeatherMap (imperial units).
"""

from __future__ import annotations

import logging

import httpx

from preparedness import settings
from preparedness.models import Weather

logger = logging.getLogger(__name__)


async def get_current_weather(lat: float, lng: float) -> Weather:
    """Return current weather at (*lat*, *lng*), or an empty ``Weather`` on failure."""
    api_key = settings.openweather_api_key()
    if not api_key:
        logger.warning("OPENWEATHER_API_KEY not set — skipping weather lookup")
        return Weather()

    try:
        async with httpx.AsyncClient(timeout=settings.external_timeout()) as client:
            resp = await client.get(
                settings.OPENWEATHER_URL,
                params={"lat": lat, "lon": lng, "appid": api_key, "units": "imperial"},
                headers={"User-Agent": settings.USER_AGENT},
            )
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPError as exc:
        logger.warning("Weather lookup failed for (%s, %s): %s", lat, lng, exc)
        return Weather()

    main = data.get("main", {})
    conditions = (data.get("weather") or [{}])[0].get("main", "Unknown")
    rain = data.get("rain") or {}
    return Weather(
        temperature=main.get("temp"),
        humidity=main.get("humidity"),
        wind_speed=(data.get("wind") or {}).get("speed"),
        conditions=conditions,
        precipitation=float(rain.get("1h", 0) or 0),
    )
