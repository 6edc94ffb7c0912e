import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from labyrinth import create_app  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_labyrinth_env(monkeypatch):
    """Keep developer shells from leaking behavior overrides into tests."""
    for key in (
        "LABYRINTH_VISIBILITY_RADIUS",
        "LABYRINTH_FADE_DELAY_MS",
        "LABYRINTH_CHANGE_INTERVAL_MS",
        "LABYRINTH_LOG_LEVEL",
        "LABYRINTH_LOG_JSON",
    ):
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: coarse generation timing guardrails")
