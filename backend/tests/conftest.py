"""Shared fixtures: in-process HTTP client and a scripted model client."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from costume.config import settings
from costume.main import app
from costume.pipeline.model_client import get_model_client


class FakeModelClient:
    """Stands in for ChatCompletionClient; replies with scripted text.

    ``reply`` may be a string or an exception instance to raise.
    """

    def __init__(self, reply: str | BaseException = "") -> None:
        self.reply = reply
        self.calls: list[list[dict[str, str]]] = []

    async def complete(self, messages: list[dict[str, str]]) -> str:
        self.calls.append(messages)
        if isinstance(self.reply, BaseException):
            raise self.reply
        return self.reply


def model_reply(items: list[dict[str, Any]], prose: str = "Here is your costume:") -> str:
    """Build a model-style reply: prose followed by a fenced JSON payload."""
    return f"{prose}\n```json\n{json.dumps({'items': items})}\n```"


WIZARD_ITEMS: list[dict[str, Any]] = [
    {
        "itemId": "hat-1",
        "category": "accessory",
        "name": "Pointed Wizard Hat",
        "searchTerm": "wizard hat",
        "brand": "Generic",
        "price": 12.99,
        "vendor": "Amazon",
    },
    {
        "category": "top",
        "name": "Flowing Robe",
        "searchTerm": "wizard robe adult",
        "brand": "Spirit",
        "price": 34.5,
        "vendor": "Spirit Halloween",
    },
    {
        "category": "bottom",
        "name": "Black Trousers",
        "price": 20,
        "vendor": "Target",
    },
    {
        "category": "footwear",
        "name": "Pointed Boots",
        "price": "$25.00",
        "vendor": "Bob's Costume Shack",
        "vendorTrusted": True,
    },
]


@pytest.fixture
def fake_model():
    """Install a FakeModelClient as the app's model client."""
    fake = FakeModelClient(model_reply(WIZARD_ITEMS))
    app.dependency_overrides[get_model_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_model_client, None)


@pytest.fixture
def api_key(monkeypatch):
    """Configure a dummy model credential on the process-wide settings."""
    monkeypatch.setattr(settings, "openai_api_key", "sk-test-key")
    return "sk-test-key"


@pytest.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
