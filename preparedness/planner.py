"""
End-to-end plan generation.

Resolver -> Aggregator -> RiskSource -> Assembler.
"""

from __future__ import annotations

import logging
from typing import Any

from preparedness.aggregator import gather_environment
from preparedness.assembler import assemble
from preparedness.geocoding import resolve_location
from preparedness.models import Household
from preparedness.risk_sources import RiskSource, get_risk_source

logger = logging.getLogger(__name__)


class LocationNotFoundError(Exception):
    """The location text could not be resolved to a place."""

    def __init__(self, location: str):
        super().__init__(f"Invalid location: {location!r}")
        self.location = location


async def build_plan(
    location: str,
    household: Household,
    address: str | None = None,
    risk_source: RiskSource | None = None,
) -> dict[str, Any]:
    """Generate a preparedness plan for *location* and *household*.

    Raises ``LocationNotFoundError`` when geocoding finds nothing; every
    other upstream failure degrades to defaults.
    """
    profile = await resolve_location(location, address)
    if profile is None:
        raise LocationNotFoundError(location)

    data = await gather_environment(profile, location)

    source = risk_source or get_risk_source()
    outcome = await source.assess(profile, data.signals, household)

    logger.info(
        "Plan for %s: source=%s, %d categories assessed",
        profile.formatted_address, outcome.source, len(outcome.assessment),
    )
    return assemble(
        profile,
        outcome.assessment,
        household,
        weather=data.weather,
        contacts=data.contacts,
        preparations=outcome.preparations,
        risk_source=outcome.source,
        fallback=outcome.is_fallback,
    )


if __name__ == "__main__":
    import asyncio
    import json
    import sys

    from dotenv import load_dotenv

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    target = sys.argv[1] if len(sys.argv) > 1 else "Miami, FL"
    result = asyncio.run(build_plan(target, Household()))
    print(json.dumps(result, indent=2, ensure_ascii=False))
