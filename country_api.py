import logging
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import quote

from models import COUNTRY_NOT_FOUND, CountryRecord, Failed, FailureKind, Fetched
from upstream import COUNTRY_URL, DEFAULT_TIMEOUT, finite, get_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionalField:
    """
    One optional key of a REST Countries entry.
    When the key is absent (or null) the record gets `default`; otherwise `extract` is applied to the raw value.
    """
    key: str
    default: Any
    extract: Callable[[Any], Any]

    def read(self, entry: dict):
        raw = entry.get(self.key)
        if raw is None:
            return self.default
        return self.extract(raw)


def _first_capital(capitals):
    if isinstance(capitals, list) and capitals:
        return str(capitals[0])
    return "N/A"

# {"USD": {"name": "United States dollar"}} -> ("United States dollar (USD)",), in upstream order.
def _format_currencies(currencies: dict):
    return tuple(f"{currency['name']} ({code})" for code, currency in currencies.items())


def _language_names(languages: dict):
    return tuple(str(name) for name in languages.values())


def _flag_png(flags: dict):
    return str(flags["png"])


OPTIONAL_FIELDS = {
    "capital": OptionalField("capital", "N/A", _first_capital),
    "subregion": OptionalField("subregion", "N/A", str),
    "currencies": OptionalField("currencies", (), _format_currencies),
    "languages": OptionalField("languages", (), _language_names),
    "flag_url": OptionalField("flags", "", _flag_png),
}

# Builds a CountryRecord from one REST Countries entry. Required fields raise when missing.
def parse_country(entry: dict) -> CountryRecord:
    population = int(finite(entry["population"]))
    if population < 0:
        raise ValueError(f"negative population {population}")
    optional = {attr: field.read(entry) for attr, field in OPTIONAL_FIELDS.items()}
    return CountryRecord(
        name=str(entry["name"]["common"]),
        population=population,
        region=str(entry["region"]),
        **optional,
    )


def lookup_country(name: str, session=None, timeout: float = DEFAULT_TIMEOUT, base_url: str = COUNTRY_URL):
    """
    Partial-name lookup against REST Countries. The first entry of the returned array is used as-is;
    upstream ordering decides between similarly named matches.
    """
    try:
        url = f"{base_url}/{quote(name, safe='')}"
    except Exception as e:
        return Failed(FailureKind.MALFORMED, f"country name cannot be sent: {e!r}")
    outcome = get_json(session, url, {"fullText": "false"}, timeout)
    if not outcome.ok:
        return outcome
    matches = outcome.value
    if not isinstance(matches, list) or not matches:
        return Failed(FailureKind.NOT_FOUND, f"no countries matching '{name}'")
    try:
        return Fetched(parse_country(matches[0]))
    except Exception as e:
        return Failed(FailureKind.MALFORMED, f"unexpected country entry: {e!r}")

# Returns facts for the best-matching country, or the "Country not found" record on any failure.
def get_country_info(name: str, session=None, timeout: float = DEFAULT_TIMEOUT,
                     base_url: str = COUNTRY_URL) -> CountryRecord:
    outcome = lookup_country(name, session, timeout, base_url)
    if outcome.ok:
        return outcome.value
    logger.warning("Country lookup for %r failed (%s)", name, outcome)
    return COUNTRY_NOT_FOUND
