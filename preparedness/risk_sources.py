"""
RiskSource strategies — where a plan's risk assessment comes from.

``ThresholdRiskSource`` runs the deterministic classifier.
``NarrativeRiskSource`` asks the generative model and extracts the answer,
falling back to the classifier when the reply yields nothing usable.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Protocol

from preparedness import generation, settings
from preparedness.models import (
    DISASTER_CATEGORIES,
    EnvironmentalSignals,
    Household,
    LocationProfile,
    Preparations,
    RiskAssessment,
)
from preparedness.narrative import (
    extract_preparations,
    extract_risk_analysis,
    parse_structured_assessment,
)
from preparedness.risk_classifier import classify

logger = logging.getLogger(__name__)

SOURCE_THRESHOLD = "threshold"
SOURCE_NARRATIVE = "narrative"
SOURCE_FALLBACK = "threshold-fallback"


@dataclass
class RiskOutcome:
    assessment: RiskAssessment
    source: str
    preparations: Preparations = field(default_factory=Preparations)

    @property
    def is_fallback(self) -> bool:
        return self.source == SOURCE_FALLBACK


class RiskSource(Protocol):
    name: str

    async def assess(
        self,
        location: LocationProfile,
        signals: EnvironmentalSignals,
        household: Household,
    ) -> RiskOutcome: ...


class ThresholdRiskSource:
    name = SOURCE_THRESHOLD

    async def assess(
        self,
        location: LocationProfile,
        signals: EnvironmentalSignals,
        household: Household,
    ) -> RiskOutcome:
        return RiskOutcome(assessment=classify(signals), source=self.name)


# ---------------------------------------------------------------------------
# Narrative prompts
# ---------------------------------------------------------------------------

_CONTEXT_TEMPLATE = """Location: {address}
Household size: {size}
Housing type: {housing}
Special needs: {special}
Pets: {pets}
Mobility issues: {mobility}
Budget: {budget}
Preparation timeframe: {timeframe}

Environmental data (null = unknown):
{signals}

Assess these disaster types: {categories}."""

STRUCTURED_PROMPT = """Produce an emergency preparedness assessment.

{context}

Return ONLY valid JSON in this schema:
{{"risks": [{{"disaster": "<one of the types above>", "level": "high|medium|low", "explanation": "<1-2 sentences>"}}],
  "immediate": ["<action>"], "short_term": ["<action>"], "long_term": ["<action>"],
  "supplies": [{{"category": "<name>", "items": ["<item, marked essential/recommended where relevant>"]}}],
  "location_specific": ["<advice>"]}}"""

TEXT_PROMPT = """Produce an emergency preparedness assessment.

{context}

First, one paragraph per disaster type, each starting with "<Disaster>: <high|medium|low>"
followed by a short explanation, separated by blank lines.

Then a line "PREPARATIONS" followed by five numbered sections:
1. Immediate actions
2. Short-term preparations
3. Long-term preparations
4. Supplies, grouped with "Category: <name>" lines and "-" bullets; mark items essential or recommended
5. Location-specific advice"""


def build_context(
    location: LocationProfile,
    signals: EnvironmentalSignals,
    household: Household,
) -> str:
    return _CONTEXT_TEMPLATE.format(
        address=location.formatted_address or f"{location.city}, {location.state}",
        size=household.size,
        housing=household.housing_type,
        special="Yes" if household.special_needs else "No",
        pets="Yes" if household.pets else "No",
        mobility="Yes" if household.mobility_issues else "No",
        budget=household.budget,
        timeframe=household.timeframe,
        signals=json.dumps(signals.to_dict(), indent=2),
        categories=", ".join(DISASTER_CATEGORIES),
    )


_PREPARATIONS_MARKER = re.compile(r"(?im)^[ \t#*]*preparations[ \t]*:?[ \t*]*$")


def _split_reply(text: str) -> tuple[str, str]:
    """Separate the risk paragraphs from the PREPARATIONS block."""
    parts = _PREPARATIONS_MARKER.split(text, maxsplit=1)
    return (parts[0], parts[1]) if len(parts) == 2 else (text, "")


class NarrativeRiskSource:
    name = SOURCE_NARRATIVE

    def __init__(
        self,
        structured: bool = True,
        complete: Callable[..., Awaitable[str | None]] | None = None,
    ):
        self.structured = structured
        self._complete = complete or generation.complete

    async def assess(
        self,
        location: LocationProfile,
        signals: EnvironmentalSignals,
        household: Household,
    ) -> RiskOutcome:
        context = build_context(location, signals, household)
        template = STRUCTURED_PROMPT if self.structured else TEXT_PROMPT
        reply = await self._complete(template.format(context=context), json_mode=self.structured)

        assessment: RiskAssessment = {}
        preparations = Preparations()
        if reply:
            parsed = parse_structured_assessment(reply) if self.structured else None
            if parsed is not None:
                assessment, preparations = parsed
            else:
                risk_text, prep_text = _split_reply(reply)
                assessment = extract_risk_analysis(risk_text)
                preparations = extract_preparations(prep_text)

        if not assessment:
            logger.warning(
                "Narrative assessment empty for %s — falling back to threshold classifier",
                location.formatted_address,
            )
            return RiskOutcome(
                assessment=classify(signals),
                source=SOURCE_FALLBACK,
                preparations=preparations,
            )

        logger.info("Narrative assessment covered %d categories", len(assessment))
        return RiskOutcome(assessment=assessment, source=self.name, preparations=preparations)


def get_risk_source(name: str | None = None) -> RiskSource:
    """Resolve a strategy by name (``RISK_SOURCE`` when *name* is omitted)."""
    name = (name or settings.risk_source_name()).lower()
    if name == SOURCE_NARRATIVE:
        return NarrativeRiskSource()
    if name == SOURCE_THRESHOLD:
        return ThresholdRiskSource()
    raise ValueError(f"Unknown risk source: {name!r}")
