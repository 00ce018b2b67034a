"""Shared test fixtures for pytest suite.

Provides fixtures for:
- api_key: model credential set for every test (autouse)
- no_api_key: credential removed from the environment
- make_response: factory for fake requests.Response objects
- client: Flask test client

All outbound HTTP and model calls are mocked in the tests themselves.
"""
from unittest.mock import MagicMock

import pytest
import requests

from app import app as flask_app


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setenv("OLLAMA_API_KEY", "test-key")
    monkeypatch.delenv("OLLAMA_MODEL", raising=False)
    monkeypatch.delenv("OLLAMA_HOST", raising=False)
    monkeypatch.delenv("REQUEST_TIMEOUT", raising=False)
    return "test-key"


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("OLLAMA_API_KEY", raising=False)


@pytest.fixture
def make_response():
    """Build a MagicMock shaped like requests.Response."""
    def _make(text="", json_data=None, status_code=200):
        resp = MagicMock()
        resp.status_code = status_code
        resp.text = text
        resp.json.return_value = json_data
        if status_code >= 400:
            resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
        else:
            resp.raise_for_status.return_value = None
        return resp
    return _make


@pytest.fixture
def client():
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as c:
        yield c
