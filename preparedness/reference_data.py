"""
Static reference dataset — disaster metadata, response steps, action-plan
template, contact directory and checklist.

Built once at import time and exposed read-only (``MappingProxyType`` and
tuples) for the life of the process.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from preparedness.models import DISASTER_CATEGORIES

# ---------------------------------------------------------------------------
# Disaster metadata
# ---------------------------------------------------------------------------

DISASTERS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "earthquake": MappingProxyType({
        "title": "Earthquake",
        "description": "Sudden ground shaking caused by movement along faults. Strikes without warning.",
        "emoji": "🌋",
        "tip": "Secure heavy furniture and water heaters to wall studs.",
    }),
    "wildfire": MappingProxyType({
        "title": "Wildfire",
        "description": "Fast-moving fires in dry vegetation, driven by heat, low humidity and wind.",
        "emoji": "🔥",
        "tip": "Clear 30 feet of defensible space around your home.",
    }),
    "flood": MappingProxyType({
        "title": "Flood",
        "description": "Water overflowing onto normally dry land from rain, rivers or storm surge.",
        "emoji": "🌊",
        "tip": "Keep important documents in a waterproof container above ground level.",
    }),
    "winter": MappingProxyType({
        "title": "Winter Storm",
        "description": "Extreme cold, heavy snow and ice that can cut power and block roads for days.",
        "emoji": "❄️",
        "tip": "Insulate pipes and keep a safe backup heat source.",
    }),
    "landslide": MappingProxyType({
        "title": "Landslide",
        "description": "Rock, earth or debris moving down a slope, often after heavy rain.",
        "emoji": "⛰️",
        "tip": "Watch for new cracks in foundations and tilting trees or poles.",
    }),
    "tornado": MappingProxyType({
        "title": "Tornado",
        "description": "Violently rotating columns of air that can destroy buildings in seconds.",
        "emoji": "🌪️",
        "tip": "Identify a windowless interior room on the lowest floor as your shelter.",
    }),
    "hurricane": MappingProxyType({
        "title": "Hurricane",
        "description": "Large tropical storms bringing destructive wind, heavy rain and storm surge.",
        "emoji": "🌀",
        "tip": "Know your evacuation zone and have materials to board up windows.",
    }),
    "drought": MappingProxyType({
        "title": "Drought",
        "description": "Extended periods of low rainfall leading to water shortages.",
        "emoji": "🏜️",
        "tip": "Store extra drinking water and follow local conservation orders.",
    }),
    "heatwave": MappingProxyType({
        "title": "Heat Wave",
        "description": "Prolonged extreme heat that causes heat exhaustion and heat stroke.",
        "emoji": "🌡️",
        "tip": "Locate the nearest cooling center and check on vulnerable neighbors.",
    }),
    "tsunami": MappingProxyType({
        "title": "Tsunami",
        "description": "Series of ocean waves triggered by undersea earthquakes or landslides.",
        "emoji": "🌊",
        "tip": "Learn the tsunami evacuation route to high ground from home and work.",
    }),
})

# ---------------------------------------------------------------------------
# Universal response steps: before / during / after, one entry per category
# ---------------------------------------------------------------------------

RESPONSE_STEPS: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType({
    "earthquake": MappingProxyType({
        "before": (
            "Secure heavy furniture and appliances to walls",
            "Identify safe spots in each room under sturdy tables",
            "Practice Drop, Cover, and Hold On",
        ),
        "during": (
            "Drop to your hands and knees",
            "Cover your head and neck under sturdy furniture",
            "Hold on until the shaking stops",
        ),
        "after": (
            "Check for injuries and damage",
            "Expect aftershocks",
            "Check for gas leaks and shut off the main valve if you smell gas",
        ),
    }),
    "wildfire": MappingProxyType({
        "before": (
            "Create defensible space around your home",
            "Use fire-resistant building materials",
            "Prepare an evacuation go-bag",
        ),
        "during": (
            "Evacuate immediately when told to",
            "Wear protective clothing and an N95 mask",
            "Close all windows and doors before leaving",
        ),
        "after": (
            "Return only when officials say it is safe",
            "Watch for hot spots and smoldering debris",
            "Document damage for insurance",
        ),
    }),
    "flood": MappingProxyType({
        "before": (
            "Know your flood zone and evacuation routes",
            "Elevate utilities and valuables",
            "Consider flood insurance",
        ),
        "during": (
            "Move to higher ground immediately",
            "Never walk or drive through flood water",
            "Follow evacuation orders",
        ),
        "after": (
            "Avoid flood water, which may be contaminated",
            "Document damage with photos",
            "Clean and disinfect everything that got wet",
        ),
    }),
    "winter": MappingProxyType({
        "before": (
            "Winterize your home and vehicle",
            "Stock up on heating fuel and warm clothing",
            "Keep an emergency kit in your car",
        ),
        "during": (
            "Stay indoors and dress in layers",
            "Never use generators or grills indoors",
            "Keep faucets dripping to prevent frozen pipes",
        ),
        "after": (
            "Check on elderly neighbors",
            "Clear snow from vents and exhausts",
            "Watch for signs of frostbite and hypothermia",
        ),
    }),
    "landslide": MappingProxyType({
        "before": (
            "Learn whether landslides have occurred in your area",
            "Plant ground cover on slopes and build retaining walls",
            "Plan an evacuation route away from steep slopes",
        ),
        "during": (
            "Move away from the path of the slide",
            "Listen for unusual rumbling or cracking sounds",
            "Curl into a ball and protect your head if escape is impossible",
        ),
        "after": (
            "Stay away from the slide area",
            "Watch for flooding, which often follows landslides",
            "Report broken utility lines to the authorities",
        ),
    }),
    "tornado": MappingProxyType({
        "before": (
            "Identify a safe room on the lowest floor",
            "Sign up for local weather alerts",
            "Practice tornado drills with your household",
        ),
        "during": (
            "Go to your safe room immediately",
            "Stay away from windows",
            "Cover your head and neck with your arms or a mattress",
        ),
        "after": (
            "Stay out of damaged buildings",
            "Watch for downed power lines",
            "Use text messages instead of calls to keep lines open",
        ),
    }),
    "hurricane": MappingProxyType({
        "before": (
            "Know your evacuation zone and route",
            "Install storm shutters or pre-cut plywood",
            "Trim trees and secure outdoor objects",
        ),
        "during": (
            "Evacuate if ordered to do so",
            "Stay indoors away from windows",
            "Do not go outside during the eye of the storm",
        ),
        "after": (
            "Return home only when authorities allow it",
            "Avoid standing water and downed lines",
            "Photograph damage before starting repairs",
        ),
    }),
    "drought": MappingProxyType({
        "before": (
            "Install water-efficient fixtures",
            "Store at least two weeks of drinking water",
            "Plan drought-tolerant landscaping",
        ),
        "during": (
            "Follow local water restrictions",
            "Reuse household water for plants where safe",
            "Watch for increased wildfire danger",
        ),
        "after": (
            "Keep conservation habits in place",
            "Inspect your foundation for soil shrinkage damage",
            "Replenish stored water supplies",
        ),
    }),
    "heatwave": MappingProxyType({
        "before": (
            "Install window coverings and weather stripping",
            "Find the nearest cooling center",
            "Check that fans and air conditioning work",
        ),
        "during": (
            "Stay indoors during the hottest hours",
            "Drink water regularly even if you are not thirsty",
            "Never leave people or pets in a parked car",
        ),
        "after": (
            "Check on elderly and vulnerable neighbors",
            "Watch for delayed signs of heat illness",
            "Restock water and electrolyte supplies",
        ),
    }),
    "tsunami": MappingProxyType({
        "before": (
            "Learn the tsunami evacuation routes near home, work and school",
            "Know the natural warning signs: strong shaking and a sudden sea retreat",
            "Plan to reach ground at least 100 feet above sea level",
        ),
        "during": (
            "Move inland and to high ground immediately",
            "Go on foot if possible and do not wait for official warnings",
            "Stay away from the coast until the all-clear",
        ),
        "after": (
            "Expect more waves; stay on high ground",
            "Avoid damaged buildings and debris in the water",
            "Listen to local officials before returning",
        ),
    }),
})

# ---------------------------------------------------------------------------
# Generic three-phase action plan
# ---------------------------------------------------------------------------

ACTION_PLAN_TEMPLATE: tuple[Mapping[str, Any], ...] = (
    MappingProxyType({
        "phase": "immediate",
        "title": "Immediate Actions (Next 24-48 Hours)",
        "steps": (
            "Create a household emergency communication plan",
            "Identify two evacuation routes from your home",
            "Sign up for local emergency alerts",
            "Gather a basic 72-hour emergency kit",
        ),
        "timeline": "24-48 hours",
        "resources": ("Ready.gov family plan template", "FEMA mobile app"),
    }),
    MappingProxyType({
        "phase": "short-term",
        "title": "Short-Term Preparations (Next 2 Weeks)",
        "steps": (
            "Complete your supply checklist",
            "Store copies of important documents in a waterproof container",
            "Practice your evacuation plan with the whole household",
            "Learn how to shut off gas, water and electricity",
        ),
        "timeline": "1-2 weeks",
        "resources": ("Red Cross preparedness guides", "Local utility shut-off instructions"),
    }),
    MappingProxyType({
        "phase": "long-term",
        "title": "Long-Term Resilience (Next 1-3 Months)",
        "steps": (
            "Review insurance coverage for your risk profile",
            "Take a first aid and CPR course",
            "Make structural improvements to your home",
            "Connect with neighbors and local community response teams",
        ),
        "timeline": "1-3 months",
        "resources": ("Community Emergency Response Team (CERT)", "Red Cross first aid classes"),
    }),
)

# ---------------------------------------------------------------------------
# Evacuation route stubs
# ---------------------------------------------------------------------------

GENERAL_EVACUATION_ROUTE: Mapping[str, str] = MappingProxyType({
    "name": "Primary Evacuation Route",
    "description": "Main road out of your neighborhood toward the nearest designated shelter.",
    "notes": "Confirm the shelter location with your county emergency management office.",
})

EVACUATION_ROUTES: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "flood": MappingProxyType({
        "name": "Higher Ground Route",
        "description": "Route to elevated terrain avoiding low-lying roads and underpasses.",
        "notes": "Turn around, don't drown: never drive through flooded roads.",
    }),
    "hurricane": MappingProxyType({
        "name": "Inland Evacuation Route",
        "description": "Designated hurricane evacuation route heading inland.",
        "notes": "Leave early; contraflow lanes may be opened by authorities.",
    }),
    "tsunami": MappingProxyType({
        "name": "Tsunami Evacuation Route",
        "description": "Shortest path on foot to ground 100 feet above sea level or 2 miles inland.",
        "notes": "Follow blue tsunami evacuation route signs.",
    }),
    "wildfire": MappingProxyType({
        "name": "Wildfire Evacuation Route",
        "description": "Route away from vegetation toward urban areas or large open clearings.",
        "notes": "Keep your vehicle fueled and parked facing out.",
    }),
    "landslide": MappingProxyType({
        "name": "Slope-Clear Route",
        "description": "Route that avoids steep slopes, drainage channels and canyon roads.",
        "notes": "Watch for collapsed pavement and debris on the road.",
    }),
})

# ---------------------------------------------------------------------------
# National contacts and resources
# ---------------------------------------------------------------------------

EMERGENCY_CONTACTS: tuple[Mapping[str, str], ...] = (
    MappingProxyType({"name": "Emergency Services", "phone": "911", "type": "emergency"}),
    MappingProxyType({"name": "FEMA", "phone": "1-800-621-3362", "type": "federal"}),
    MappingProxyType({"name": "American Red Cross", "phone": "1-800-733-2767", "type": "relief"}),
    MappingProxyType({"name": "Poison Control", "phone": "1-800-222-1222", "type": "medical"}),
    MappingProxyType({"name": "988 Suicide & Crisis Lifeline", "phone": "988", "type": "crisis"}),
)

RESOURCES: tuple[Mapping[str, str], ...] = (
    MappingProxyType({
        "name": "Federal Emergency Management Agency (FEMA)",
        "website": "https://www.fema.gov",
        "phone": "1-800-621-3362",
    }),
    MappingProxyType({
        "name": "American Red Cross",
        "website": "https://www.redcross.org",
        "phone": "1-800-733-2767",
    }),
    MappingProxyType({
        "name": "National Weather Service (NWS)",
        "website": "https://www.weather.gov",
        "phone": "",
    }),
    MappingProxyType({
        "name": "CDC Emergency Preparedness",
        "website": "https://www.cdc.gov/prepyourhealth",
        "phone": "",
    }),
    MappingProxyType({
        "name": "Ready.gov",
        "website": "https://www.ready.gov",
        "phone": "",
    }),
    MappingProxyType({
        "name": "988 Suicide & Crisis Lifeline",
        "website": "https://988lifeline.org",
        "phone": "988",
    }),
)

CHECKLIST: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "Basic Emergency Supplies": (
        "Water (1 gallon per person per day for 3 days)",
        "Non-perishable food (3-day supply)",
        "Battery-powered or hand crank radio",
        "Flashlight and extra batteries",
        "First aid kit",
        "Whistle to signal for help",
        "Dust masks, plastic sheeting, and duct tape",
        "Moist towelettes, garbage bags, and plastic ties",
        "Manual can opener",
        "Cell phone with chargers and backup battery",
    ),
    "Important Documents": (
        "Insurance policies",
        "Identification documents",
        "Bank account records",
        "Emergency contact information",
        "Medical information and prescriptions",
        "Cash and change",
    ),
    "Additional Items to Consider": (
        "Prescription medications",
        "Non-prescription medications",
        "Glasses and contact lens solution",
        "Infant formula and diapers",
        "Pet food and extra water",
        "Sleeping bags or warm blankets",
        "Change of clothes",
        "Fire extinguisher",
        "Matches in a waterproof container",
        "Paper and pencil",
        "Books, games, puzzles, or activities",
    ),
})


def disaster_reference() -> list[dict[str, Any]]:
    """Metadata and response steps for every category, in fixed order."""
    out = []
    for cid in DISASTER_CATEGORIES:
        meta = DISASTERS[cid]
        steps = RESPONSE_STEPS[cid]
        out.append({
            "id": cid,
            **meta,
            "steps": {phase: list(items) for phase, items in steps.items()},
        })
    return out
