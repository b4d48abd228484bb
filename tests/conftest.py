from types import SimpleNamespace

import pytest

from totp_backend import create_app
from totp_core import counter_clock, display

@pytest.fixture()
def app():
    app = create_app({"APP_ENV": "testing"})
    yield app

@pytest.fixture()
def client(app):
    return app.test_client()

@pytest.fixture()
def frozen_time(monkeypatch):
    """Pin the wall clock seen by the engine; returns a setter."""
    state = {"now": 59.0}
    fake_time = SimpleNamespace(time=lambda: state["now"])
    monkeypatch.setattr(counter_clock, "time", fake_time)
    monkeypatch.setattr(display, "time", fake_time)

    def set_time(value):
        state["now"] = float(value)

    return set_time
