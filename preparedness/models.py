"""
Core domain types shared by the resolver, classifier, extractor and assembler.

Everything here is built once per request and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RiskLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Fixed order; every ordered output (buckets, cards, active lists) follows it.
DISASTER_CATEGORIES: tuple[str, ...] = (
    "earthquake",
    "wildfire",
    "flood",
    "winter",
    "landslide",
    "tornado",
    "hurricane",
    "drought",
    "heatwave",
    "tsunami",
)


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True)
class LocationProfile:
    city: str
    state: str
    zip_code: str
    formatted_address: str
    coordinates: Coordinates

    def to_dict(self) -> dict[str, Any]:
        return {
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "formatted_address": self.formatted_address,
            "coordinates": {"lat": self.coordinates.lat, "lng": self.coordinates.lng},
        }


@dataclass(frozen=True)
class EnvironmentalSignals:
    """Raw measurements for one location.

    ``None`` means the source did not return the value. The classifier treats
    a rule that depends on a ``None`` field as not satisfied, so a missing
    signal always contributes the lowest possible risk.

    Units: seismic activity on a 0-10 scale, elevation in feet, rainfall and
    snowfall in inches/year, distance to coast in miles, tornadoes per year,
    temperature in degrees F, relative humidity in percent.
    """

    seismic_activity: float | None = None
    elevation: float | None = None
    annual_rainfall: float | None = None
    annual_snowfall: float | None = None
    distance_to_coast: float | None = None
    tornado_frequency: float | None = None
    temperature: float | None = None
    humidity: float | None = None

    def to_dict(self) -> dict[str, float | None]:
        return {
            "seismic_activity": self.seismic_activity,
            "elevation": self.elevation,
            "annual_rainfall": self.annual_rainfall,
            "annual_snowfall": self.annual_snowfall,
            "distance_to_coast": self.distance_to_coast,
            "tornado_frequency": self.tornado_frequency,
            "temperature": self.temperature,
            "humidity": self.humidity,
        }


@dataclass(frozen=True)
class Weather:
    temperature: float | None = None
    humidity: float | None = None
    wind_speed: float | None = None
    conditions: str = "Unknown"
    precipitation: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "wind_speed": self.wind_speed,
            "conditions": self.conditions,
            "precipitation": self.precipitation,
        }


@dataclass(frozen=True)
class Risk:
    level: RiskLevel
    explanation: str


# Category id -> Risk, in DISASTER_CATEGORIES order.
RiskAssessment = dict[str, Risk]


@dataclass(frozen=True)
class Household:
    size: int = 1
    housing_type: str = "house"
    special_needs: bool = False
    pets: bool = False
    mobility_issues: bool = False
    budget: str = "medium"
    timeframe: str = "month"


@dataclass(frozen=True)
class LocalContacts:
    """Emergency numbers the knowledge service resolved for a location, if any."""

    police: str | None = None
    fire: str | None = None
    hospital_name: str | None = None
    hospital_phone: str | None = None


@dataclass
class Preparations:
    """Phase lists and supply groups pulled out of generated text."""

    immediate: list[str] = field(default_factory=list)
    short_term: list[str] = field(default_factory=list)
    long_term: list[str] = field(default_factory=list)
    supplies: list[dict[str, Any]] = field(default_factory=list)
    location_specific: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.immediate or self.short_term or self.long_term
            or self.supplies or self.location_specific
        )
