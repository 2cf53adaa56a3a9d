from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

# Immutable value records handed to the dashboard. Every adapter returns one of these, never None.

@dataclass(frozen=True)
class WeatherRecord:
    location: str
    description: str
    temperature_celsius: float
    wind_speed_display: str


@dataclass(frozen=True)
class QuoteRecord:
    content: str
    author: str


@dataclass(frozen=True)
class CountryRecord:
    name: str
    capital: str
    population: int
    region: str
    subregion: str
    currencies: Tuple[str, ...]
    languages: Tuple[str, ...]
    flag_url: str

    @property
    def formatted_population(self):
        """Population with thousands separators, e.g. 331449281 -> '331,449,281'."""
        return f"{self.population:,}"


CITY_NOT_FOUND = WeatherRecord("City not found", "N/A", 0.0, "N/A")
WEATHER_UNAVAILABLE = WeatherRecord("Error loading weather", "Unable to fetch data", 0.0, "N/A")

FALLBACK_QUOTE = QuoteRecord("The only way to do great work is to love what you do.", "Steve Jobs")

COUNTRY_NOT_FOUND = CountryRecord(
    name="Country not found",
    capital="N/A",
    population=0,
    region="N/A",
    subregion="N/A",
    currencies=("N/A",),
    languages=("N/A",),
    flag_url="",
)


# Why an upstream lookup could not produce a record.
class FailureKind(Enum):
    TRANSPORT = "transport"
    MALFORMED = "malformed"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Fetched:
    value: Any

    ok = True


@dataclass(frozen=True)
class Failed:
    kind: FailureKind
    detail: str = ""

    ok = False

    def __str__(self):
        return f"{self.kind.value}: {self.detail}" if self.detail else self.kind.value
