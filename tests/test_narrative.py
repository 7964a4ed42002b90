import json

from preparedness.models import RiskLevel
from preparedness.narrative import (
    extract_preparations,
    extract_risk_analysis,
    item_priority,
    normalize_disaster,
    parse_structured_assessment,
)


def test_risk_paragraphs_are_parsed():
    result = extract_risk_analysis(
        "Earthquake: high - due to fault proximity\n\nFlood: low - minimal rainfall"
    )
    assert list(result) == ["earthquake", "flood"]
    assert result["earthquake"].level is RiskLevel.HIGH
    assert result["flood"].level is RiskLevel.LOW
    assert "due to fault proximity" in result["earthquake"].explanation
    assert "minimal rainfall" in result["flood"].explanation
    assert not result["earthquake"].explanation.startswith("Earthquake")


def test_empty_text_gives_empty_assessment():
    assert extract_risk_analysis("") == {}
    assert extract_risk_analysis("   \n\n  ") == {}


def test_mixed_case_dash_delimiter_and_extra_whitespace():
    text = "  HEAT WAVE -   Medium: summers regularly exceed 95F  \n\n\n\nwildfires:HIGH dry brush"
    result = extract_risk_analysis(text)
    assert result["heatwave"].level is RiskLevel.MEDIUM
    assert result["wildfire"].level is RiskLevel.HIGH
    assert "dry brush" in result["wildfire"].explanation


def test_paragraphs_without_label_or_level_are_dropped():
    text = (
        "Overall this area is fairly safe.\n\n"
        "Tornado: the risk is significant\n\n"
        "Volcano: high - dormant peak nearby\n\n"
        "Drought: medium - dry summers"
    )
    result = extract_risk_analysis(text)
    assert list(result) == ["drought"]


def test_first_paragraph_wins_for_repeated_category():
    result = extract_risk_analysis("Flood: high - river\n\nFlooding: low - none")
    assert result["flood"].level is RiskLevel.HIGH


def test_output_follows_fixed_category_order():
    result = extract_risk_analysis("Tsunami: low - far inland\n\nEarthquake: medium - some faults")
    assert list(result) == ["earthquake", "tsunami"]


def test_normalize_disaster_aliases():
    assert normalize_disaster("Winter Storms") == "winter"
    assert normalize_disaster("Tropical Storm") == "hurricane"
    assert normalize_disaster("Earthquake Risk") == "earthquake"
    assert normalize_disaster("Meteor") is None


PLAN_TEXT = """Here is your plan.
1. Immediate Actions:
- Fill water containers
- Charge phones
2. Short-term:
• Buy a generator
3. Long-term:
* Retrofit foundation
4. Supplies:
Category: Water
- Bottled water (essential)
- Water filter (recommended)
Type: Lighting
- Flashlight
5. Location-specific:
- Know your tsunami route
"""


def test_preparations_sections():
    prep = extract_preparations(PLAN_TEXT)
    assert prep.immediate == ["Fill water containers", "Charge phones"]
    assert prep.short_term == ["Buy a generator"]
    assert prep.long_term == ["Retrofit foundation"]
    assert prep.location_specific == ["Know your tsunami route"]


def test_supply_groups_and_priorities():
    supplies = extract_preparations(PLAN_TEXT).supplies
    assert [g["category"] for g in supplies] == ["Water", "Lighting"]
    assert supplies[0]["items"] == [
        {"name": "Bottled water (essential)", "priority": "high"},
        {"name": "Water filter (recommended)", "priority": "medium"},
    ]
    assert supplies[1]["items"] == [{"name": "Flashlight", "priority": "low"}]


def test_decimal_quantities_are_not_section_markers():
    prep = extract_preparations("1. Immediate:\n2.5 gallons of water per person\n- Charge phones")
    assert prep.immediate == ["2.5 gallons of water per person", "Charge phones"]
    assert prep.short_term == []


def test_preparations_without_markers_are_empty():
    assert extract_preparations("Just stay safe out there.").is_empty()
    assert extract_preparations("").is_empty()


def test_item_priority_keywords():
    assert item_priority("Critical medication") == "high"
    assert item_priority("Immediate use radio") == "high"
    assert item_priority("Important papers") == "medium"
    assert item_priority("Board games") == "low"


def test_structured_reply_is_validated():
    reply = json.dumps({
        "risks": [
            {"disaster": "Earthquake", "level": "High", "explanation": "Near a fault"},
            {"disaster": "Heat Wave", "level": "medium", "explanation": "Hot summers"},
            {"disaster": "Meteor", "level": "low"},
        ],
        "immediate": ["Make a plan"],
        "supplies": [{"category": "Water", "items": ["Bottled water (essential)"]}],
    })
    assessment, prep = parse_structured_assessment(reply)
    assert list(assessment) == ["earthquake", "heatwave"]
    assert assessment["earthquake"].level is RiskLevel.HIGH
    assert prep.immediate == ["Make a plan"]
    assert prep.supplies == [
        {"category": "Water", "items": [{"name": "Bottled water (essential)", "priority": "high"}]}
    ]


def test_structured_reply_inside_code_fence():
    reply = '```json\n{"risks": [{"disaster": "flood", "level": "low"}]}\n```'
    assessment, _ = parse_structured_assessment(reply)
    assert assessment["flood"].level is RiskLevel.LOW


def test_unusable_structured_reply_returns_none():
    assert parse_structured_assessment("Earthquake: high - faults") is None
    assert parse_structured_assessment('{"risks": [{"disaster": "flood", "level": "severe"}]}') is None
    assert parse_structured_assessment('{"summary": "no risks key"}') is None
    assert parse_structured_assessment("") is None


def test_compound_disaster_names_resolve_to_first_known_part():
    assert normalize_disaster("Hurricane/Tropical Storm") == "hurricane"
    assert normalize_disaster("Flooding and Mudslides") == "flood"
    assert normalize_disaster("Meteor/Comet") is None

    result = extract_risk_analysis("Hurricane/Tropical Storm: high - Atlantic coast")
    assert list(result) == ["hurricane"]
    assert result["hurricane"].level is RiskLevel.HIGH


def test_nested_numbered_items_stay_in_their_section():
    prep = extract_preparations(
        "1. Immediate actions:\n"
        "   1. Fill water containers\n"
        "   2. Charge phones\n"
        "2. Short-term:\n"
        "- Buy a generator\n"
        "3. Long-term:\n"
        "- Retrofit\n"
    )
    assert prep.immediate == ["Fill water containers", "Charge phones"]
    assert prep.short_term == ["Buy a generator"]
    assert prep.long_term == ["Retrofit"]
    assert prep.supplies == []


def test_indented_top_level_markers():
    prep = extract_preparations("  1. Immediate:\n  - Buy sandbags\n  2. Short-term:\n  - Trim trees\n")
    assert prep.immediate == ["Buy sandbags"]
    assert prep.short_term == ["Trim trees"]


def test_first_line_kept_when_it_is_not_a_heading():
    prep = extract_preparations("1. Secure heavy furniture\n- Anchor bookshelves\n2. Stock water\n")
    assert prep.immediate == ["Secure heavy furniture", "Anchor bookshelves"]
    assert prep.short_term == ["Stock water"]


def test_markdown_headings_are_dropped():
    prep = extract_preparations("1. **Immediate Actions**\n- Charge phones\n2. Short-term:\n")
    assert prep.immediate == ["Charge phones"]
    assert prep.short_term == []
