"""
Pydantic models — Data Contracts for the ReadyPlan API.

These schemas are the single source of truth for request/response shapes.
Fields are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from preparedness.models import Household

RiskLevelName = Literal["high", "medium", "low"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------- Survey (inbound) ---------- #

class AnalyzeRequest(CamelModel):
    location: str = Field(..., min_length=1, description="City, state or postal code")
    address: str | None = None
    household_size: int = Field(default=1, ge=1, le=50)
    housing_type: Literal["house", "apartment", "mobile", "condo"] = "house"
    special_needs: bool = False
    pets: bool = False
    mobility_issues: bool = False
    budget: Literal["low", "medium", "high"] = "medium"
    timeframe: Literal["immediate", "week", "month"] = "month"

    def to_household(self) -> Household:
        return Household(
            size=self.household_size,
            housing_type=self.housing_type,
            special_needs=self.special_needs,
            pets=self.pets,
            mobility_issues=self.mobility_issues,
            budget=self.budget,
            timeframe=self.timeframe,
        )


# ---------- Plan (outbound) ---------- #

class Coordinates(CamelModel):
    lat: float
    lng: float


class Location(CamelModel):
    city: str
    state: str
    zip_code: str
    formatted_address: str
    coordinates: Coordinates


class WeatherReport(CamelModel):
    temperature: float | None = None
    humidity: float | None = None
    wind_speed: float | None = None
    conditions: str = "Unknown"
    precipitation: float = 0.0


class RiskEntry(CamelModel):
    id: str
    level: RiskLevelName


class RiskCard(CamelModel):
    id: str
    title: str
    description: str
    emoji: str
    tip: str
    level: RiskLevelName
    explanation: str


class RiskBuckets(CamelModel):
    high: list[RiskCard] = []
    medium: list[RiskCard] = []
    low: list[RiskCard] = []


class ResponseSteps(CamelModel):
    before: list[str]
    during: list[str]
    after: list[str]


class DisasterCard(RiskCard):
    steps: ResponseSteps


class SupplyItem(CamelModel):
    name: str
    purchase_links: dict[str, str]


class SupplyCategory(CamelModel):
    category: str
    items: list[SupplyItem]
    priority: RiskLevelName
    estimated_cost: str
    reason: str


class ActionPlan(CamelModel):
    phase: Literal["immediate", "short-term", "long-term"]
    title: str
    steps: list[str]
    timeline: str
    resources: list[str]


class EvacuationRoute(CamelModel):
    name: str
    description: str
    notes: str = ""
    disaster: str | None = None


class EmergencyContact(CamelModel):
    name: str
    phone: str
    type: str


class PreparednessPlan(CamelModel):
    location: Location
    weather: WeatherReport
    risk_source: str
    plan_status: Literal["complete", "defaults"]
    active_disasters: list[str]
    risk_assessment: list[RiskEntry]
    risks: RiskBuckets
    disasters: list[DisasterCard]
    supplies: list[SupplyCategory]
    action_plans: list[ActionPlan]
    evacuation_routes: list[EvacuationRoute]
    emergency_contacts: list[EmergencyContact]


# ---------- Reference data ---------- #

class DisasterInfo(CamelModel):
    id: str
    title: str
    description: str
    emoji: str
    tip: str
    steps: ResponseSteps


class Resource(CamelModel):
    name: str
    website: str
    phone: str = ""


class ChecklistSection(CamelModel):
    title: str
    items: list[str]
