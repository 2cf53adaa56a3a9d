import pytest
from app import create_app

# Creates a Flask app configured for tests; upstream calls go through a stub session per test.
@pytest.fixture()
def app(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.delenv("DASHBOARD_PARALLEL", raising=False)
    app = create_app()
    app.config.update(TESTING=True)
    yield app

@pytest.fixture()
def client(app):
    return app.test_client()
