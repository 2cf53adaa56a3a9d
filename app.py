import atexit
import logging
import os
from concurrent.futures import ThreadPoolExecutor

from flask import Flask, render_template, request

from dashboard import compose_dashboard
from upstream import ThreadLocalSession, UpstreamURLs


def _env_flag(name, default="0"):
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")

# App factory: sets configuration, builds the shared HTTP client, and registers the dashboard route.
def create_app():
    app = Flask(__name__)
    defaults = UpstreamURLs()
    app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret")
    app.config["DEFAULT_CITY"] = os.environ.get("DEFAULT_CITY", "London")
    app.config["DEFAULT_COUNTRY"] = os.environ.get("DEFAULT_COUNTRY", "United Kingdom")
    app.config["HTTP_TIMEOUT"] = float(os.environ.get("HTTP_TIMEOUT", "20"))
    app.config["DASHBOARD_PARALLEL"] = _env_flag("DASHBOARD_PARALLEL")
    app.config["GEO_URL"] = os.environ.get("GEO_URL", defaults.geo)
    app.config["FORECAST_URL"] = os.environ.get("FORECAST_URL", defaults.forecast)
    app.config["QUOTE_URL"] = os.environ.get("QUOTE_URL", defaults.quote)
    app.config["COUNTRY_URL"] = os.environ.get("COUNTRY_URL", defaults.country)

    # Adapters only ever call .get on it; each worker thread gets its own requests.Session.
    session = ThreadLocalSession()
    app.extensions["http_session"] = session
    atexit.register(session.close)
    if app.config["DASHBOARD_PARALLEL"]:
        executor = ThreadPoolExecutor(max_workers=3)
        app.extensions["dashboard_executor"] = executor
        atexit.register(executor.shutdown, wait=False)

    @app.route("/", methods=["GET"])
    def dashboard():
        city = (request.args.get("city") or "").strip() or app.config["DEFAULT_CITY"]
        country = (request.args.get("country") or "").strip() or app.config["DEFAULT_COUNTRY"]
        urls = UpstreamURLs(
            geo=app.config["GEO_URL"],
            forecast=app.config["FORECAST_URL"],
            quote=app.config["QUOTE_URL"],
            country=app.config["COUNTRY_URL"],
        )

        view = compose_dashboard(
            city,
            country,
            session=app.extensions["http_session"],
            timeout=app.config["HTTP_TIMEOUT"],
            executor=app.extensions.get("dashboard_executor"),
            urls=urls,
        )
        return render_template("dashboard.html", view=view)

    return app

if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    app.run(debug=True)
