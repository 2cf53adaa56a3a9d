import math
import threading
from dataclasses import dataclass

import requests

from models import Failed, FailureKind, Fetched

DEFAULT_TIMEOUT = 20

GEO_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
QUOTE_URL = "https://api.quotable.io/random"
COUNTRY_URL = "https://restcountries.com/v3.1/name"


@dataclass(frozen=True)
class UpstreamURLs:
    """Base URLs of the services the dashboard reads from. Passed explicitly to every lookup."""
    geo: str = GEO_URL
    forecast: str = FORECAST_URL
    quote: str = QUOTE_URL
    country: str = COUNTRY_URL


class ThreadLocalSession:
    """
    requests-compatible `get` backed by one requests.Session per thread,
    so lookups submitted to a thread pool never share a Session.
    """

    def __init__(self):
        self._local = threading.local()
        self._sessions = []
        self._lock = threading.Lock()

    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def get(self, url, **kwargs):
        return self._session().get(url, **kwargs)

    def close(self):
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()

# Rejects NaN and +/-Infinity, which Python's json module accepts.
def finite(value) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"non-finite number {value!r}")
    return number

# Issues one GET and parses the JSON body, returning Fetched(payload) or Failed(kind).
def get_json(session, url: str, params: dict | None = None, timeout: float = DEFAULT_TIMEOUT):
    """
    `session` is anything with a requests-style `get` (a requests.Session, or a stub in tests).
    None falls back to the module-level requests API.
    """
    http = session if session is not None else requests
    try:
        response = http.get(url, params=params, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        return Failed(FailureKind.TRANSPORT, f"GET {url} failed: {e}")
    except Exception as e:
        # e.g. a name that cannot be encoded into the request
        return Failed(FailureKind.MALFORMED, f"GET {url} could not be sent: {e!r}")
    try:
        return Fetched(response.json())
    except Exception as e:
        return Failed(FailureKind.MALFORMED, f"GET {url} returned unusable JSON: {e!r}")
