"""
Narrative extraction — turn generated text into the structured risk and
preparation shapes.

Two entry points per shape:

* ``parse_structured_assessment`` for replies produced in JSON mode
  (validated with pydantic), which is the preferred path;
* ``extract_risk_analysis`` / ``extract_preparations`` for free text, a
  best-effort, lossy parse used when the model ignores the schema.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from preparedness.models import (
    DISASTER_CATEGORIES,
    Preparations,
    Risk,
    RiskAssessment,
    RiskLevel,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Disaster name normalisation
# ---------------------------------------------------------------------------

_NAME_ALIASES = {
    "earthquakes": "earthquake",
    "seismic": "earthquake",
    "wildfires": "wildfire",
    "wild fire": "wildfire",
    "fire": "wildfire",
    "floods": "flood",
    "flooding": "flood",
    "flash flood": "flood",
    "winter storm": "winter",
    "winter storms": "winter",
    "winter weather": "winter",
    "blizzard": "winter",
    "landslides": "landslide",
    "mudslide": "landslide",
    "mudslides": "landslide",
    "tornadoes": "tornado",
    "tornados": "tornado",
    "hurricanes": "hurricane",
    "tropical storm": "hurricane",
    "tropical cyclone": "hurricane",
    "droughts": "drought",
    "heat wave": "heatwave",
    "heat waves": "heatwave",
    "heatwaves": "heatwave",
    "extreme heat": "heatwave",
    "tsunamis": "tsunami",
}


_NAME_SEPARATOR = re.compile(r"\s*(?:/|&|,|\band\b|\bor\b)\s*", re.IGNORECASE)


def _lookup(name: str) -> str | None:
    key = re.sub(r"[^a-z ]", " ", name.lower())
    key = re.sub(r"\s+", " ", key).strip()
    for suffix in (" risk", " hazard"):
        if key.endswith(suffix):
            key = key[: -len(suffix)].strip()
    if key in DISASTER_CATEGORIES:
        return key
    return _NAME_ALIASES.get(key)


def normalize_disaster(name: str) -> str | None:
    """Map a free-form disaster name to a category id, or None if unknown.

    Compound names such as "Hurricane/Tropical Storm" resolve to the first
    part that is recognised.
    """
    cid = _lookup(name)
    if cid is not None:
        return cid
    for part in _NAME_SEPARATOR.split(name):
        cid = _lookup(part) if part.strip() else None
        if cid is not None:
            return cid
    return None


# ---------------------------------------------------------------------------
# Free-text risk analysis
# ---------------------------------------------------------------------------

# "Earthquake: high ..." / "Heat Wave - Medium ..." at the start of a paragraph.
_RISK_HEADER = re.compile(
    r"^\s*(?P<name>[A-Za-z][A-Za-z /]*?)\s*[:\-]\s*(?P<level>high|medium|low)\b",
    re.IGNORECASE,
)
_LABEL = re.compile(r"^\s*[A-Za-z][A-Za-z /]*?\s*[:\-]\s*")
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")


def extract_risk_analysis(text: str) -> RiskAssessment:
    """Parse ``Name: level explanation`` paragraphs into an assessment.

    Paragraphs that don't open with a recognised label and level are
    dropped. Output keeps fixed category order; for a repeated category the
    first paragraph wins.
    """
    if not text or not text.strip():
        return {}

    found: dict[str, Risk] = {}
    for section in _PARAGRAPH_SPLIT.split(text.strip()):
        match = _RISK_HEADER.match(section)
        if not match:
            continue
        cid = normalize_disaster(match.group("name"))
        if cid is None:
            logger.debug("Dropping risk paragraph for unknown disaster %r", match.group("name"))
            continue
        if cid in found:
            continue
        explanation = _LABEL.sub("", section, count=1).strip()
        found[cid] = Risk(
            level=RiskLevel(match.group("level").lower()),
            explanation=explanation,
        )

    return {cid: found[cid] for cid in DISASTER_CATEGORIES if cid in found}


# ---------------------------------------------------------------------------
# Free-text preparations
# ---------------------------------------------------------------------------

_NUMBERED_SECTION = re.compile(r"(?m)^(?P<indent>[ \t]*)\d+\.(?!\d)")
_BULLET = re.compile(r"^(?:[-•*]|\d+[.)](?!\d))\s*")
_HEADING = re.compile(
    r"^(?:immediate|short[- ]term|long[- ]term|supplies|supply|location[- ]specific)\b[^.]*$",
    re.IGNORECASE,
)
_SUPPLY_GROUP = re.compile(r"(?:Category|Type):", re.IGNORECASE)


def _list_items(text: str) -> list[str]:
    items = []
    for line in text.splitlines():
        item = _BULLET.sub("", line.strip()).strip()
        if item:
            items.append(item)
    return items


def item_priority(text: str) -> str:
    """Keyword-based priority for a supply line."""
    lowered = text.lower()
    if any(k in lowered for k in ("critical", "essential", "immediate")):
        return RiskLevel.HIGH.value
    if any(k in lowered for k in ("recommended", "important")):
        return RiskLevel.MEDIUM.value
    return RiskLevel.LOW.value


def _supply_groups(text: str) -> list[dict[str, Any]]:
    groups = []
    for chunk in _SUPPLY_GROUP.split(text):
        lines = [ln for ln in chunk.splitlines() if ln.strip()]
        if not lines:
            continue
        category, *items = lines
        groups.append({
            "category": category.strip(),
            "items": [
                {"name": _BULLET.sub("", item.strip()).strip(), "priority": item_priority(item)}
                for item in items
                if _BULLET.sub("", item.strip()).strip()
            ],
        })
    return groups


def _top_level_sections(text: str) -> list[str]:
    # Anything before the first marker is preamble.
    markers = list(_NUMBERED_SECTION.finditer(text))
    if not markers:
        return []
    indent = markers[0].group("indent")
    starts = [m for m in markers if m.group("indent") == indent]
    ends = [m.start() for m in starts[1:]] + [len(text)]
    return [text[m.end():end] for m, end in zip(starts, ends)]


def _is_heading(line: str) -> bool:
    """Section title such as ``Immediate actions:`` or ``**Long-term**``."""
    line = line.strip().strip("*#_ ").strip()
    if not line or _BULLET.match(line) or _SUPPLY_GROUP.match(line):
        return False
    return line.endswith(":") or bool(_HEADING.match(line))


def extract_preparations(text: str) -> Preparations:
    """Split a numbered reply into its five sections.

    Sections are positional: 1 immediate, 2 short-term, 3 long-term,
    4 supplies, 5 location-specific. Only markers at the indentation of the
    first one start a section, so nested numbered lists stay inside it. A
    section's first line is dropped only when it reads as a heading.
    """
    if not text or not text.strip():
        return Preparations()

    sections = _top_level_sections(text)
    sections += [""] * (5 - len(sections))

    def _body(section: str) -> str:
        head, _, rest = section.partition("\n")
        if _is_heading(head):
            return rest
        return section

    return Preparations(
        immediate=_list_items(_body(sections[0])),
        short_term=_list_items(_body(sections[1])),
        long_term=_list_items(_body(sections[2])),
        supplies=_supply_groups(_body(sections[3])),
        location_specific=_list_items(_body(sections[4])),
    )


# ---------------------------------------------------------------------------
# Structured (JSON mode) replies
# ---------------------------------------------------------------------------

class _RiskItem(BaseModel):
    disaster: str
    level: RiskLevel
    explanation: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _lower(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class _SupplyGroup(BaseModel):
    category: str
    items: list[str] = []


class _StructuredReply(BaseModel):
    risks: list[_RiskItem]
    immediate: list[str] = []
    short_term: list[str] = []
    long_term: list[str] = []
    supplies: list[_SupplyGroup] = []
    location_specific: list[str] = []


def _strip_fences(text: str) -> str:
    text = text.strip()
    if "```" in text:
        text = re.sub(r"^.*?```(?:json)?\s*", "", text, flags=re.DOTALL)
        text = re.sub(r"\s*```.*$", "", text, flags=re.DOTALL).strip()
    return text


def parse_structured_assessment(text: str) -> tuple[RiskAssessment, Preparations] | None:
    """Validate a JSON-mode reply. Returns None when it isn't usable JSON."""
    if not text or not text.strip():
        return None
    try:
        data = json.loads(_strip_fences(text))
        reply = _StructuredReply.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.info("Structured reply rejected, falling back to text parsing: %s", exc)
        return None

    found: dict[str, Risk] = {}
    for item in reply.risks:
        cid = normalize_disaster(item.disaster)
        if cid is None or cid in found:
            continue
        found[cid] = Risk(level=item.level, explanation=item.explanation.strip())

    preparations = Preparations(
        immediate=list(reply.immediate),
        short_term=list(reply.short_term),
        long_term=list(reply.long_term),
        supplies=[
            {
                "category": g.category,
                "items": [{"name": i, "priority": item_priority(i)} for i in g.items if i.strip()],
            }
            for g in reply.supplies
        ],
        location_specific=list(reply.location_specific),
    )
    assessment = {cid: found[cid] for cid in DISASTER_CATEGORIES if cid in found}
    return assessment, preparations
