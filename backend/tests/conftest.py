"""
Shared test fixtures for the feed analysis suite.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.models import Message

FIXED_NOW = datetime(2025, 9, 10, 10, 0, 0, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════════
# Core fixtures
# ══════════════════════════════════════════════════════════════════

@pytest.fixture()
def now():
    return FIXED_NOW


@pytest.fixture()
def make_message():
    """Factory for core messages with neutral defaults."""
    def _make(**overrides) -> Message:
        fields = {
            "author_id": "user_1",
            "content": "ok",
            "timestamp": "2025-09-10T09:50:00Z",
            "reactions": 0,
            "shares": 0,
            "views": 1,
            "hashtags": (),
        }
        fields.update(overrides)
        fields["hashtags"] = tuple(fields["hashtags"])
        return Message(**fields)
    return _make


# ══════════════════════════════════════════════════════════════════
# FastAPI Test Client
# ══════════════════════════════════════════════════════════════════

@pytest.fixture()
def client():
    """TestClient with the request clock pinned to FIXED_NOW."""
    from app.main import app, get_now

    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def wire_message():
    """Factory for request-body message dicts."""
    def _make(**overrides) -> dict:
        payload = {
            "user_id": "user_123",
            "content": "ok",
            "timestamp": "2025-09-10T10:00:00Z",
            "reactions": 0,
            "shares": 0,
            "views": 1,
            "hashtags": [],
        }
        payload.update(overrides)
        return payload
    return _make
