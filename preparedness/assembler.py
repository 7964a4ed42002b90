"""
Plan Assembler — merges the risk assessment with household-driven supplies
and the static reference dataset into one preparedness plan.

The output is a plain dict shaped like ``api.schemas.PreparednessPlan``.
"""

from __future__ import annotations

import logging
from typing import Any

from preparedness.models import (
    DISASTER_CATEGORIES,
    Household,
    LocalContacts,
    LocationProfile,
    Preparations,
    RiskAssessment,
    RiskLevel,
    Weather,
)
from preparedness.reference_data import (
    ACTION_PLAN_TEMPLATE,
    DISASTERS,
    EMERGENCY_CONTACTS,
    EVACUATION_ROUTES,
    GENERAL_EVACUATION_ROUTE,
    RESPONSE_STEPS,
)
from preparedness.risk_classifier import active_disasters
from preparedness.supplies import build_supply_list, supplies_from_preparations

logger = logging.getLogger(__name__)

PLAN_COMPLETE = "complete"
PLAN_DEFAULTS = "defaults"


def risk_buckets(assessment: RiskAssessment) -> dict[str, list[dict[str, Any]]]:
    """Group categories into high/medium/low, each in fixed category order."""
    buckets: dict[str, list[dict[str, Any]]] = {level.value: [] for level in RiskLevel}
    for cid in DISASTER_CATEGORIES:
        risk = assessment.get(cid)
        if risk is None:
            continue
        buckets[risk.level.value].append({
            "id": cid,
            **DISASTERS[cid],
            "level": risk.level.value,
            "explanation": risk.explanation,
        })
    return buckets


def disaster_cards(assessment: RiskAssessment, active_ids: list[str]) -> list[dict[str, Any]]:
    """Metadata plus before/during/after steps for each active category."""
    cards = []
    for cid in active_ids:
        risk = assessment[cid]
        cards.append({
            "id": cid,
            **DISASTERS[cid],
            "level": risk.level.value,
            "explanation": risk.explanation,
            "steps": {phase: list(items) for phase, items in RESPONSE_STEPS[cid].items()},
        })
    return cards


def action_plans(
    assessment: RiskAssessment,
    household: Household,
    preparations: Preparations | None = None,
) -> list[dict[str, Any]]:
    """Three-phase plan adapted to the high-risk categories and household.

    Extracted phase lists from the narrative source replace the template
    steps for that phase.
    """
    preparations = preparations or Preparations()
    overrides = {
        "immediate": preparations.immediate,
        "short-term": preparations.short_term,
        "long-term": preparations.long_term,
    }
    high_ids = [
        cid for cid in DISASTER_CATEGORIES
        if cid in assessment and assessment[cid].level is RiskLevel.HIGH
    ]

    plans = []
    for template in ACTION_PLAN_TEMPLATE:
        phase = template["phase"]
        steps = list(overrides[phase]) or list(template["steps"])

        if phase == "immediate" and household.mobility_issues:
            steps.append("Arrange evacuation assistance with a neighbor or local emergency management")
        if phase == "short-term":
            steps.extend(f"{DISASTERS[cid]['title']}: {DISASTERS[cid]['tip']}" for cid in high_ids)
        if phase == "long-term" and preparations.location_specific:
            steps.extend(preparations.location_specific)

        plans.append({
            "phase": phase,
            "title": template["title"],
            "steps": steps,
            "timeline": template["timeline"],
            "resources": list(template["resources"]),
        })
    return plans


def evacuation_routes(active_ids: list[str]) -> list[dict[str, str]]:
    routes = [dict(GENERAL_EVACUATION_ROUTE)]
    for cid in active_ids:
        route = EVACUATION_ROUTES.get(cid)
        if route is not None:
            routes.append({"disaster": cid, **route})
    return routes


def emergency_contacts(local: LocalContacts | None = None) -> list[dict[str, str]]:
    """National directory followed by any locally resolved numbers."""
    contacts = [dict(c) for c in EMERGENCY_CONTACTS]
    if local is None:
        return contacts
    if local.police:
        contacts.append({"name": "Local Police (non-emergency)", "phone": local.police, "type": "local"})
    if local.fire:
        contacts.append({"name": "Local Fire Department", "phone": local.fire, "type": "local"})
    if local.hospital_name:
        contacts.append({
            "name": local.hospital_name,
            "phone": local.hospital_phone or "",
            "type": "hospital",
        })
    return contacts


def assemble(
    location: LocationProfile,
    assessment: RiskAssessment,
    household: Household,
    *,
    weather: Weather | None = None,
    contacts: LocalContacts | None = None,
    preparations: Preparations | None = None,
    risk_source: str = "threshold",
    fallback: bool = False,
) -> dict[str, Any]:
    """Build the preparedness plan for one request.

    An empty *assessment* means "unknown", not "no risk": the plan is still
    built from defaults and flagged with ``plan_status = "defaults"``.
    """
    preparations = preparations or Preparations()
    active = active_disasters(assessment, policy="elevated")
    active_ids = [a["id"] for a in active]

    supplies = build_supply_list(household, active_ids)
    supplies.extend(supplies_from_preparations(preparations.supplies))

    status = PLAN_DEFAULTS if (fallback or not assessment) else PLAN_COMPLETE
    if status == PLAN_DEFAULTS:
        logger.info("Plan for %s built from defaults (source=%s)", location.formatted_address, risk_source)

    return {
        "location": location.to_dict(),
        "weather": (weather or Weather()).to_dict(),
        "risk_source": risk_source,
        "plan_status": status,
        "active_disasters": active_ids,
        "risk_assessment": active_disasters(assessment, policy="all"),
        "risks": risk_buckets(assessment),
        "disasters": disaster_cards(assessment, active_ids),
        "supplies": supplies,
        "action_plans": action_plans(assessment, household, preparations),
        "evacuation_routes": evacuation_routes(active_ids),
        "emergency_contacts": emergency_contacts(contacts),
    }
