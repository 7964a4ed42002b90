import pytest

from preparedness.models import (
    Coordinates,
    EnvironmentalSignals,
    Household,
    LocationProfile,
)

_SERVICE_KEYS = (
    "OPENCAGE_API_KEY",
    "OPENWEATHER_API_KEY",
    "WOLFRAM_APP_ID",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "RISK_SOURCE",
    "EXTERNAL_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def _no_service_credentials(monkeypatch):
    """Keep tests offline: without keys every client short-circuits to defaults."""
    for key in _SERVICE_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def miami():
    return LocationProfile(
        city="Miami",
        state="Florida",
        zip_code="33101",
        formatted_address="Miami, FL 33101, United States",
        coordinates=Coordinates(lat=25.7743, lng=-80.1937),
    )


@pytest.fixture
def coastal_signals():
    # elevation 20 ft, 40 mi from the coast, moderately seismic, hot and dry
    return EnvironmentalSignals(
        elevation=20,
        distance_to_coast=40,
        seismic_activity=2.5,
        temperature=90,
        humidity=25,
        tornado_frequency=0,
    )


@pytest.fixture
def household():
    return Household(size=3, housing_type="house", pets=True)
