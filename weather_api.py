import logging
from enum import IntEnum

from models import (
    CITY_NOT_FOUND,
    WEATHER_UNAVAILABLE,
    Failed,
    FailureKind,
    Fetched,
    WeatherRecord,
)
from upstream import DEFAULT_TIMEOUT, FORECAST_URL, GEO_URL, finite, get_json

logger = logging.getLogger(__name__)

UNKNOWN_WEATHER = "Unknown weather"

# WMO weather codes the dashboard knows how to describe.
class WeatherCode(IntEnum):
    CLEAR_SKY = 0
    MAINLY_CLEAR = 1
    PARTLY_CLOUDY = 2
    OVERCAST = 3
    FOG = 45
    RIME_FOG = 48
    DRIZZLE_LIGHT = 51
    DRIZZLE_MODERATE = 53
    DRIZZLE_DENSE = 55
    RAIN_SLIGHT = 61
    RAIN_MODERATE = 63
    RAIN_HEAVY = 65
    SNOW_SLIGHT = 71
    SNOW_MODERATE = 73
    SNOW_HEAVY = 75
    THUNDERSTORM = 95


WEATHER_DESCRIPTIONS = {
    WeatherCode.CLEAR_SKY: "Clear sky",
    WeatherCode.MAINLY_CLEAR: "Mainly clear",
    WeatherCode.PARTLY_CLOUDY: "Partly cloudy",
    WeatherCode.OVERCAST: "Overcast",
    WeatherCode.FOG: "Fog",
    WeatherCode.RIME_FOG: "Fog",
    WeatherCode.DRIZZLE_LIGHT: "Light rain",
    WeatherCode.DRIZZLE_MODERATE: "Light rain",
    WeatherCode.DRIZZLE_DENSE: "Light rain",
    WeatherCode.RAIN_SLIGHT: "Rain",
    WeatherCode.RAIN_MODERATE: "Rain",
    WeatherCode.RAIN_HEAVY: "Rain",
    WeatherCode.SNOW_SLIGHT: "Snow",
    WeatherCode.SNOW_MODERATE: "Snow",
    WeatherCode.SNOW_HEAVY: "Snow",
    WeatherCode.THUNDERSTORM: "Thunderstorm",
}

# Maps a numeric weather code to text; anything outside the table is "Unknown weather".
def describe_weather_code(code: int) -> str:
    return WEATHER_DESCRIPTIONS.get(code, UNKNOWN_WEATHER)

# Resolves a city name to its best geocoding match.
def _geocode(city: str, session, timeout, url):
    params = {"name": city, "count": 1, "language": "en", "format": "json"}
    outcome = get_json(session, url, params, timeout)
    if not outcome.ok:
        return outcome
    results = outcome.value.get("results") if isinstance(outcome.value, dict) else None
    if not isinstance(results, list) or not results:
        return Failed(FailureKind.NOT_FOUND, f"no geocoding results for '{city}'")
    try:
        first = results[0]
        return Fetched({
            "latitude": finite(first["latitude"]),
            "longitude": finite(first["longitude"]),
            "country_code": str(first["country_code"]),
        })
    except Exception as e:
        return Failed(FailureKind.MALFORMED, f"unexpected geocoding result: {e!r}")

# Fetches current conditions for a geocoded place and shapes them into a WeatherRecord.
def _current_weather(city: str, place: dict, session, timeout, url):
    params = {
        "latitude": f"{place['latitude']:.2f}",
        "longitude": f"{place['longitude']:.2f}",
        "current_weather": "true",
        "timezone": "auto",
    }
    outcome = get_json(session, url, params, timeout)
    if not outcome.ok:
        return outcome
    try:
        current = outcome.value["current_weather"]
        temperature = finite(current["temperature"])
        wind_speed = finite(current["windspeed"])
        code = int(finite(current["weathercode"]))
        return Fetched(WeatherRecord(
            location=f"{city}, {place['country_code'].upper()}",
            description=describe_weather_code(code),
            temperature_celsius=temperature,
            wind_speed_display=f"{wind_speed:.1f} km/h",
        ))
    except Exception as e:
        return Failed(FailureKind.MALFORMED, f"unexpected forecast payload: {e!r}")


def lookup_current_weather(city: str, session=None, timeout: float = DEFAULT_TIMEOUT,
                           geo_url: str = GEO_URL, forecast_url: str = FORECAST_URL):
    """
    Two-hop lookup: geocode `city`, then read the current weather at those coordinates.
    Returns Fetched(WeatherRecord) or Failed; never raises.
    """
    try:
        place = _geocode(city, session, timeout, geo_url)
        if not place.ok:
            return place
        return _current_weather(city, place.value, session, timeout, forecast_url)
    except Exception as e:
        return Failed(FailureKind.MALFORMED, f"weather lookup aborted: {e!r}")

# Public entry point. Always returns a fully populated WeatherRecord.
def get_current_weather(city: str, session=None, timeout: float = DEFAULT_TIMEOUT,
                        geo_url: str = GEO_URL, forecast_url: str = FORECAST_URL) -> WeatherRecord:
    outcome = lookup_current_weather(city, session, timeout, geo_url, forecast_url)
    if outcome.ok:
        return outcome.value
    logger.warning("Weather lookup for %r failed (%s)", city, outcome)
    if outcome.kind is FailureKind.NOT_FOUND:
        return CITY_NOT_FOUND
    return WEATHER_UNAVAILABLE
