from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_ISO_ALPHA2 = re.compile(r"^[A-Z]{2}$")
_YEAR_PREFIX = re.compile(r"\s*(\d{4})")


class FetchStatus(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Coordinates(_Frozen):
    latitude: float
    longitude: float


class Currency(_Frozen):
    name: str = ""
    code: str = ""
    symbol: str = ""

    @field_validator("code")
    @classmethod
    def _upper_code(cls, value: str) -> str:
        return value.strip().upper()


class EconomicMetric(_Frozen):
    year: str
    gdp: Optional[float] = None
    inflation: Optional[float] = None


class Landmark(_Frozen):
    name: str
    description: str = ""
    type: str = ""
    emoji: Optional[str] = None
    url: Optional[str] = None


class EmergencyNumbers(_Frozen):
    police: str = ""
    ambulance: str = ""
    fire: str = ""


class SafetyAdvisory(_Frozen):
    score: float = 0.0
    message: str = ""
    regionsToAvoid: List[str] = Field(default_factory=list)
    healthRisks: List[str] = Field(default_factory=list)
    visaInfo: str = ""

    @field_validator("score")
    @classmethod
    def _clamp_score(cls, value: float) -> float:
        return min(max(value, 0.0), 5.0)


class CountryProfile(_Frozen):
    """Snapshot for one country as produced by the profile generator.

    ``isoAlpha2`` is the identity key: two profiles with the same code
    describe the same country even when their text differs (for example
    after a fetch in another language).
    """

    name: str
    officialName: str = ""
    isoAlpha2: str
    capital: str
    population: str
    currency: Currency
    languages: List[str] = Field(default_factory=list)
    region: str = ""
    description: str
    funFacts: List[str] = Field(default_factory=list)
    economicHistory: List[EconomicMetric]
    landmarks: List[Landmark]
    climate: str = ""
    internetTLD: str = ""
    callingCode: str = ""
    timezones: List[str]
    coordinates: Coordinates
    capitalCoordinates: Coordinates
    emergencyNumbers: EmergencyNumbers
    safetyAdvisory: SafetyAdvisory

    @field_validator("isoAlpha2")
    @classmethod
    def _validate_iso(cls, value: str) -> str:
        code = value.strip().upper()
        if not _ISO_ALPHA2.match(code):
            raise ValueError(f"isoAlpha2 must be a two-letter code, got {value!r}")
        return code

    @field_validator("economicHistory")
    @classmethod
    def _chronological(cls, value: List[EconomicMetric]) -> List[EconomicMetric]:
        years = [_YEAR_PREFIX.match(metric.year) for metric in value]
        if not all(years):
            # Free-form labels ("FY2021/22", "last year") keep generator order.
            return value
        keyed = [(int(match.group(1)), metric) for match, metric in zip(years, value)]
        keyed.sort(key=lambda item: item[0])
        return [metric for _, metric in keyed]

    def same_country(self, other: Optional["CountryProfile"]) -> bool:
        return other is not None and other.isoAlpha2 == self.isoAlpha2

    @property
    def primary_timezone(self) -> Optional[str]:
        return self.timezones[0] if self.timezones else None

    def primary_languages(self, limit: int = 3) -> List[str]:
        return self.languages[:limit]


class TranslatedContent(_Frozen):
    description: str
    funFacts: List[str] = Field(default_factory=list)


class NewsSource(_Frozen):
    title: str
    uri: str


class NewsResult(_Frozen):
    content: str
    sources: List[NewsSource] = Field(default_factory=list)


class WeatherData(_Frozen):
    temperature: float
    feelsLike: float
    humidity: float
    windSpeed: float
    windDirection: float
    weatherCode: int
    isDay: bool


class TravelAdvisory(_Frozen):
    score: float
    message: str = ""
    updated: str = ""
    isoAlpha2: str = ""
