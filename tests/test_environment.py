import asyncio

from preparedness import aggregator, environment
from preparedness.environment import (
    FEET,
    INCHES,
    MILES,
    QUERIES,
    contacts_from_answers,
    extract_magnitude,
    extract_phone,
    extract_quantity,
    extract_rate,
    signals_from_answers,
)
from preparedness.models import LocalContacts, Weather


def test_extract_quantity_converts_units():
    assert extract_quantity("elevation | 89 feet (27 meters)", FEET) == 89.0
    assert extract_quantity("27 meters", FEET) == 88.58
    assert extract_quantity("about 1,200 ft above sea level", FEET) == 1200.0
    assert extract_quantity("978 mm per year", INCHES) == 38.5
    assert extract_quantity("12 km", MILES) == 7.46


def test_extract_quantity_without_units_or_numbers():
    assert extract_quantity("roughly 4.5 per year", {}) == 4.5
    assert extract_quantity("(data not available)", FEET) is None
    assert extract_quantity("", MILES) is None


def test_extract_rate_prefers_yearly_phrases():
    assert extract_rate("2019 | 5 tornadoes") == 5.0
    assert extract_rate("roughly 4.5 per year") == 4.5
    assert extract_rate("about 12 a year (1950-2020)") == 12.0
    assert extract_rate("2021 | 7") == 7.0
    assert extract_rate("recorded since 1950") is None
    assert extract_rate("") is None


def test_tornado_signal_ignores_leading_year():
    answers = {key: "" for key in QUERIES}
    answers["tornado"] = "2019 | 5 tornadoes"
    assert signals_from_answers(answers).tornado_frequency == 5.0


def test_extract_magnitude_averages_listing():
    text = "2024-01-03 | magnitude 4.1 | 12 km\n2023-11-20 | magnitude: 3.5 | 30 km"
    assert extract_magnitude(text) == 3.8
    assert extract_magnitude("no recent earthquakes") is None


def test_extract_phone_by_keyword():
    text = "Police department: (555) 123-4567\nFire department: 555-987-6543"
    assert extract_phone(text, "fire") == "555-987-6543"
    assert extract_phone(text, "police") == "(555) 123-4567"
    assert extract_phone(text, "ambulance") is None


def test_pods_text_skips_input_and_failures():
    data = {"queryresult": {"success": True, "pods": [
        {"id": "Input", "subpods": [{"plaintext": "elevation of Miami"}]},
        {"id": "Result", "subpods": [{"plaintext": "7 feet"}]},
    ]}}
    assert environment._pods_text(data) == "7 feet"
    assert environment._pods_text({"queryresult": {"success": False}}) == ""


def test_unparsable_answers_give_missing_signals():
    answers = {key: "" for key in QUERIES}
    answers["elevation"] = "no idea"
    signals = signals_from_answers(answers, temperature=72.0, humidity=None)
    assert signals.elevation is None
    assert signals.distance_to_coast is None
    assert signals.temperature == 72.0


def test_contacts_from_answers():
    contacts = contacts_from_answers({
        "emergency": "police | 305-555-0100\nfire rescue | 305-555-0200",
        "hospital": "Jackson Memorial Hospital | 305-585-1111",
    })
    assert contacts.police == "305-555-0100"
    assert contacts.fire == "305-555-0200"
    assert contacts.hospital_name.startswith("Jackson Memorial Hospital")
    assert contacts.hospital_phone == "305-585-1111"


def test_query_knowledge_without_app_id_returns_blanks():
    answers = asyncio.run(environment.query_knowledge("Miami, Florida"))
    assert set(answers) == set(QUERIES)
    assert all(v == "" for v in answers.values())


def test_with_default_on_timeout_and_error():
    async def slow():
        await asyncio.sleep(1)
        return "late"

    async def broken():
        raise RuntimeError("boom")

    assert asyncio.run(aggregator.with_default(slow(), "default", "slow", timeout=0.01)) == "default"
    assert asyncio.run(aggregator.with_default(broken(), "default", "broken")) == "default"


def test_gather_environment_merges_weather_and_knowledge(monkeypatch, miami):
    async def fake_weather(lat, lng):
        return Weather(temperature=91.0, humidity=60.0, conditions="Clouds")

    async def fake_knowledge(place):
        assert place == "Miami, Florida"
        answers = {key: "" for key in QUERIES}
        answers["elevation"] = "6 feet"
        answers["coast"] = "3 miles"
        return answers

    monkeypatch.setattr(aggregator, "get_current_weather", fake_weather)
    monkeypatch.setattr(aggregator, "query_knowledge", fake_knowledge)

    data = asyncio.run(aggregator.gather_environment(miami, "Miami, FL"))
    assert data.signals.elevation == 6.0
    assert data.signals.distance_to_coast == 3.0
    assert data.signals.temperature == 91.0
    assert data.signals.seismic_activity is None
    assert data.weather.conditions == "Clouds"
    assert data.contacts == LocalContacts()


def test_gather_environment_survives_failing_sources(monkeypatch, miami):
    async def failing(*args):
        raise ConnectionError("offline")

    monkeypatch.setattr(aggregator, "get_current_weather", failing)
    monkeypatch.setattr(aggregator, "query_knowledge", failing)

    data = asyncio.run(aggregator.gather_environment(miami))
    assert data.weather == Weather()
    assert all(v is None for v in data.signals.to_dict().values())
