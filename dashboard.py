from dataclasses import dataclass

import country_api
import quote_api
import weather_api
from models import CountryRecord, QuoteRecord, WeatherRecord
from upstream import DEFAULT_TIMEOUT, UpstreamURLs


@dataclass(frozen=True)
class DashboardView:
    weather: WeatherRecord
    quote: QuoteRecord
    country: CountryRecord
    current_city: str
    current_country: str

# Gathers all three panels for one page. Each adapter already returns a usable record on failure.
def compose_dashboard(city: str, country: str, session=None, timeout: float = DEFAULT_TIMEOUT,
                      executor=None, urls: UpstreamURLs | None = None):
    """
    Runs the weather, quote and country lookups and bundles them with the inputs (echoed back as form defaults).
    `urls` selects the upstream services; the public endpoints are used when it is omitted.
    With an `executor` (e.g. a ThreadPoolExecutor) the three lookups run as independent tasks
    and are joined here; otherwise they run one after another.
    """
    urls = urls or UpstreamURLs()
    weather_call = (weather_api.get_current_weather, city, session, timeout, urls.geo, urls.forecast)
    quote_call = (quote_api.get_random_quote, session, timeout, urls.quote)
    country_call = (country_api.get_country_info, country, session, timeout, urls.country)

    if executor is None:
        weather, quote, country_info = (fn(*args) for fn, *args in (weather_call, quote_call, country_call))
    else:
        futures = [executor.submit(*call) for call in (weather_call, quote_call, country_call)]
        weather, quote, country_info = (future.result() for future in futures)

    return DashboardView(
        weather=weather,
        quote=quote,
        country=country_info,
        current_city=city,
        current_country=country,
    )
