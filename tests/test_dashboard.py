from concurrent.futures import ThreadPoolExecutor

from dashboard import DashboardView, compose_dashboard
from models import COUNTRY_NOT_FOUND, FALLBACK_QUOTE, WEATHER_UNAVAILABLE
from stubs import FORECAST_LONDON, GEO_LONDON, QUOTE, UNITED_KINGDOM, FakeResponse, FakeSession, healthy_routes, unreachable_routes
from upstream import UpstreamURLs

def test_healthy_upstreams_end_to_end():
    view = compose_dashboard("London", "United Kingdom", session=FakeSession(healthy_routes()))
    assert view.weather.location.startswith("London, GB")
    assert view.quote.content and view.quote.author
    assert view.country.name == "United Kingdom"
    assert (view.current_city, view.current_country) == ("London", "United Kingdom")

def test_all_upstreams_unreachable_yields_sentinels():
    view = compose_dashboard("London", "United Kingdom", session=FakeSession(unreachable_routes()))
    assert view == DashboardView(
        weather=WEATHER_UNAVAILABLE,
        quote=FALLBACK_QUOTE,
        country=COUNTRY_NOT_FOUND,
        current_city="London",
        current_country="United Kingdom",
    )

def test_one_outage_does_not_affect_other_panels():
    routes = healthy_routes()
    routes["quotable"] = unreachable_routes()["quotable"]
    view = compose_dashboard("London", "United Kingdom", session=FakeSession(routes))
    assert view.quote == FALLBACK_QUOTE
    assert view.weather.description == "Partly cloudy"
    assert view.country.capital == "London"

def test_timeout_is_passed_to_every_upstream_call():
    session = FakeSession(healthy_routes())
    compose_dashboard("London", "United Kingdom", session=session, timeout=3)
    assert len(session.calls) == 4
    assert all(call["timeout"] == 3 for call in session.calls)

def test_executor_gives_same_view_as_sequential():
    sequential = compose_dashboard("London", "United Kingdom", session=FakeSession(healthy_routes()))
    with ThreadPoolExecutor(max_workers=3) as pool:
        parallel = compose_dashboard("London", "United Kingdom", session=FakeSession(healthy_routes()), executor=pool)
    assert parallel == sequential

def test_unusable_bodies_everywhere_still_compose():
    routes = {
        "geocoding-api": FakeResponse(text="[" * 100000),
        "quotable": FakeResponse(text='{"content": "x"'),
        "restcountries": FakeResponse(text='[{"name": {"common": "X"}, "population": Infinity, "region": "R"}]'),
    }
    view = compose_dashboard("Lon\ud800don", "X", session=FakeSession(routes))
    assert (view.weather, view.quote, view.country) == (WEATHER_UNAVAILABLE, FALLBACK_QUOTE, COUNTRY_NOT_FOUND)

def test_healthy_weather_with_broken_country_body():
    routes = healthy_routes()
    routes["restcountries"] = FakeResponse(text='[{"name": {"common": "X"}, "population": Infinity, "region": "R"}]')
    view = compose_dashboard("London", "X", session=FakeSession(routes))
    assert view.weather.location == "London, GB"
    assert view.country == COUNTRY_NOT_FOUND

def test_explicit_urls_route_every_lookup():
    routes = {"geo.test": GEO_LONDON, "wx.test": FORECAST_LONDON, "q.test": QUOTE, "c.test": [UNITED_KINGDOM]}
    urls = UpstreamURLs(geo="http://geo.test", forecast="http://wx.test", quote="http://q.test", country="http://c.test")
    view = compose_dashboard("London", "United Kingdom", session=FakeSession(routes), urls=urls)
    assert view.weather.description == "Partly cloudy"
    assert view.quote.author == "Aristotle"
    assert view.country.name == "United Kingdom"
