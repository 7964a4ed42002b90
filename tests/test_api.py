import pytest
from fastapi.testclient import TestClient

from app import app
from preparedness import planner
from preparedness.aggregator import AggregatedData
from preparedness.models import LocalContacts, Weather


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def offline_services(monkeypatch, miami, coastal_signals):
    async def fake_resolve(location, address=None):
        return miami if "miami" in location.lower() else None

    async def fake_environment(profile, query_text=""):
        return AggregatedData(
            signals=coastal_signals,
            weather=Weather(temperature=90, humidity=25, wind_speed=8.0, conditions="Clear"),
            contacts=LocalContacts(police="305-555-0100"),
        )

    monkeypatch.setattr(planner, "resolve_location", fake_resolve)
    monkeypatch.setattr(planner, "gather_environment", fake_environment)
    monkeypatch.setenv("RISK_SOURCE", "threshold")


def test_health(client):
    assert client.get("/api/v1/health").json() == {"status": "ok"}


def test_analyze_returns_camel_case_plan(client, offline_services):
    resp = client.post("/api/v1/analyze", json={
        "location": "Miami, FL",
        "householdSize": 3,
        "housingType": "apartment",
        "pets": True,
    })
    assert resp.status_code == 200
    plan = resp.json()

    assert plan["planStatus"] == "complete"
    assert plan["riskSource"] == "threshold"
    assert plan["location"]["zipCode"] == "33101"
    assert plan["location"]["formattedAddress"].startswith("Miami")
    assert plan["weather"]["windSpeed"] == 8.0
    assert plan["activeDisasters"] == [
        "earthquake", "wildfire", "flood", "hurricane", "heatwave", "tsunami",
    ]
    assert [c["id"] for c in plan["risks"]["high"]] == ["wildfire", "flood", "hurricane"]

    water = plan["supplies"][0]
    assert water["estimatedCost"]
    assert water["items"][0]["purchaseLinks"]["amazon"].endswith("+emergency")
    assert "Pet Supplies" in [s["category"] for s in plan["supplies"]]

    assert any(c["phone"] == "305-555-0100" for c in plan["emergencyContacts"])
    assert plan["evacuationRoutes"][0]["name"] == "Primary Evacuation Route"


def test_analyze_accepts_snake_case_fields(client, offline_services):
    resp = client.post("/api/v1/analyze", json={"location": "Miami", "household_size": 2})
    assert resp.status_code == 200


def test_analyze_unknown_location_is_404(client, offline_services):
    resp = client.post("/api/v1/analyze", json={"location": "Atlantis", "householdSize": 2})
    assert resp.status_code == 404
    assert "Invalid location" in resp.json()["detail"]


@pytest.mark.parametrize("body", [
    {"location": "", "householdSize": 2},
    {"location": "Miami", "householdSize": 0},
    {"location": "Miami", "housingType": "castle"},
])
def test_analyze_rejects_invalid_survey(client, body):
    assert client.post("/api/v1/analyze", json=body).status_code == 422


def test_narrative_fallback_plan_is_flagged(client, monkeypatch, offline_services):
    monkeypatch.setenv("RISK_SOURCE", "narrative")
    # no OPENAI_API_KEY, so generation returns None and the classifier takes over
    plan = client.post("/api/v1/analyze", json={"location": "Miami"}).json()
    assert plan["riskSource"] == "threshold-fallback"
    assert plan["planStatus"] == "defaults"
    assert plan["activeDisasters"]


def test_reference_endpoints(client):
    disasters = client.get("/api/v1/disasters").json()
    assert len(disasters) == 10
    assert set(disasters[0]["steps"]) == {"before", "during", "after"}

    resources = client.get("/api/v1/resources").json()
    assert resources[0]["website"] == "https://www.fema.gov"

    checklist = client.get("/api/v1/checklist").json()
    assert [s["title"] for s in checklist] == [
        "Basic Emergency Supplies", "Important Documents", "Additional Items to Consider",
    ]
