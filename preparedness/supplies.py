"""
Supply checklist for a household and its active risks, with purchase links.
"""

from __future__ import annotations

from typing import Any, Iterable
from urllib.parse import quote_plus

from preparedness.models import Household

# Vendor id -> search URL prefix; the encoded query is appended verbatim.
VENDORS: dict[str, str] = {
    "amazon": "https://www.amazon.com/s?k=",
    "walmart": "https://www.walmart.com/search?q=",
}

SEARCH_SUFFIX = "+emergency"


def purchase_links(item_name: str) -> dict[str, str]:
    """Vendor search URLs for *item_name*; a pure function of the name."""
    query = quote_plus(item_name.strip()) + SEARCH_SUFFIX
    return {vendor: prefix + query for vendor, prefix in VENDORS.items()}


def _items(names: Iterable[str]) -> list[dict[str, Any]]:
    return [{"name": name, "purchase_links": purchase_links(name)} for name in names]


def _category(name: str, items: Iterable[str], priority: str, cost: str, reason: str) -> dict[str, Any]:
    return {
        "category": name,
        "items": _items(items),
        "priority": priority,
        "estimated_cost": cost,
        "reason": reason,
    }


def build_supply_list(household: Household, active: Iterable[str]) -> list[dict[str, Any]]:
    """Select supply categories for *household* given active category ids."""
    active = set(active)
    size = max(household.size, 1)
    gallons = size * 3

    supplies = [
        _category(
            "Water & Food",
            [
                f"Water Storage Containers ({gallons} gallons)",
                "Non-perishable Food (3-day supply)",
                "Manual Can Opener",
                "Water Purification Tablets",
            ],
            "high", "$50-150",
            f"One gallon of water per person per day for at least 3 days for {size} "
            f"{'person' if size == 1 else 'people'}.",
        ),
        _category(
            "First Aid",
            ["First Aid Kit", "Prescription Medications (7-day supply)", "N95 Masks", "Hand Sanitizer"],
            "high", "$30-80",
            "Treat minor injuries when emergency services are delayed.",
        ),
        _category(
            "Communication & Lighting",
            ["Hand Crank Emergency Radio", "LED Flashlight", "Extra Batteries", "Portable Power Bank", "Whistle"],
            "high", "$40-100",
            "Stay informed and signal for help when power and cell service are down.",
        ),
    ]

    if household.pets:
        supplies.append(_category(
            "Pet Supplies",
            ["Pet Food (7-day supply)", "Collapsible Pet Water Bowl", "Pet Carrier", "Pet First Aid Kit"],
            "medium", "$40-120",
            "Shelters may not accept pets; plan to care for them yourself.",
        ))

    if household.special_needs or household.mobility_issues:
        needs = []
        if household.special_needs:
            needs += ["Medical Alert Bracelet", "Backup Medical Equipment Batteries", "Copies of Medical Records"]
        if household.mobility_issues:
            needs += ["Folding Cane or Walker", "Evacuation Chair", "Mobility Aid Repair Kit"]
        supplies.append(_category(
            "Special Needs", needs, "high", "$50-300",
            "Medical and mobility needs must be covered for several days without outside help.",
        ))

    if "winter" in active:
        supplies.append(_category(
            "Winter Weather",
            ["Emergency Thermal Blankets", "Hand Warmers", "Rock Salt", "Snow Shovel"],
            "medium", "$40-120",
            "Cold and ice can cut power and keep you at home for days.",
        ))

    if "hurricane" in active or "tornado" in active:
        supplies.append(_category(
            "Storm Protection",
            ["Plywood Window Covers", "Heavy Duty Tarps", "Duct Tape", "Work Gloves"],
            "medium", "$100-400",
            "Protect windows and make quick repairs after high winds.",
        ))

    return supplies


def supplies_from_preparations(groups: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Turn extracted supply groups into categories with purchase links.

    A group's priority is the highest priority of its items.
    """
    rank = {"high": 0, "medium": 1, "low": 2}
    out = []
    for group in groups:
        items = [i for i in group.get("items", []) if i.get("name")]
        if not items:
            continue
        priority = min((i.get("priority", "low") for i in items), key=lambda p: rank.get(p, 2))
        out.append(_category(
            group.get("category") or "Additional Supplies",
            [i["name"] for i in items],
            priority, "varies",
            "Recommended for your location.",
        ))
    return out
