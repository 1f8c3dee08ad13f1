import sys
from pathlib import Path

import pytest
import requests

_BACKEND = Path(__file__).resolve().parent
if str(_BACKEND) not in sys.path:
    sys.path.insert(0, str(_BACKEND))


class FakeResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._invalid_json:
            raise ValueError("not json")
        return self._payload


def gemini_payload(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class FakeGemini:
    """Stands in for requests.post; replays queued answers in order."""

    def __init__(self):
        self.replies = []
        self.calls = []

    def reply(self, text):
        self.replies.append(FakeResponse(200, gemini_payload(text)))
        return self

    def respond(self, response):
        self.replies.append(response)
        return self

    def fail(self, exc):
        self.replies.append(exc)
        return self

    @property
    def prompts(self):
        return [call["json"]["contents"][0]["parts"][0]["text"] for call in self.calls]

    def __call__(self, url, params=None, json=None, timeout=None):
        self.calls.append({"url": url, "params": params, "json": json, "timeout": timeout})
        if not self.replies:
            raise AssertionError("unexpected Gemini call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def fake_gemini(monkeypatch):
    fake = FakeGemini()
    monkeypatch.setattr(requests, "post", fake)
    return fake


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def client(api_key):
    from fastapi.testclient import TestClient
    from paraphraser.main import app

    return TestClient(app)
