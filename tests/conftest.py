"""Shared fixtures for Session Digest tests."""

import pytest


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "smoke: mark test as smoke test (fast, critical path - included in CI)"
    )


@pytest.fixture
def mock_env_vars(monkeypatch, tmp_path):
    """Clear digest settings from the environment so defaults apply."""
    for name in (
        "SESSION_DIGEST_MAX_STRING_LENGTH",
        "SESSION_DIGEST_MAX_CONTAINER_SIZE",
        "SESSION_DIGEST_TRUNCATION_MARKER",
        "SESSION_DIGEST_VERBOSE_SOURCES",
        "SESSION_DIGEST_LOG_LEVEL",
        "SESSION_DIGEST_LOG_JSON",
        "SESSION_DIGEST_MAX_EVENTS",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def base_timestamp():
    """Absolute timestamp of the first event in the sample recordings."""
    return 1704067200000


@pytest.fixture
def sample_recording(base_timestamp):
    """Recording exercising every summarized event kind."""
    t = base_timestamp
    return [
        {"type": 4, "timestamp": t, "windowId": "w1", "data": {"href": "https://example.com/login", "width": 1920, "height": 1080}},
        {"type": 0, "timestamp": t + 10, "windowId": "w1", "data": {}},
        {"type": 1, "timestamp": t + 20, "windowId": "w1", "data": {}},
        {"type": 2, "timestamp": t + 30, "windowId": "w1", "data": {"node": {"id": 1, "childNodes": []}}},
        # Mouse movement
        {"type": 3, "timestamp": t + 100, "windowId": "w1", "data": {"source": 1, "positions": [{"x": 1, "y": 2}]}},
        {"type": 3, "timestamp": t + 250, "windowId": "w1", "data": {"source": 1, "positions": [{"x": 3, "y": 4}]}},
        # Mouse down (dropped), click
        {"type": 3, "timestamp": t + 290, "windowId": "w1", "data": {"source": 2, "type": 1, "id": 5}},
        {"type": 3, "timestamp": t + 300, "windowId": "w1", "data": {"source": 2, "type": 2, "id": 5}},
        # Input
        {"type": 3, "timestamp": t + 1000, "windowId": "w1", "data": {"source": 5, "id": 5, "text": "hello"}},
        # Mutation + custom + plugin
        {"type": 3, "timestamp": t + 1500, "windowId": "w1", "data": {"source": 0, "adds": [{"parentId": 2, "node": {"id": 10, "tagName": "div"}}], "removes": [{"id": 7, "parentId": 2}]}},
        {"type": 5, "timestamp": t + 1600, "windowId": "w1", "data": {"tag": "checkout", "payload": {"step": 1}}},
        {"type": 6, "timestamp": t + 1700, "windowId": "w1", "data": {"plugin": "rrweb/console@1", "payload": {"level": "log"}}},
        # Viewport resize
        {"type": 3, "timestamp": t + 2000, "windowId": "w1", "data": {"source": 4, "width": 800, "height": 600}},
        # Scroll (dropped by default)
        {"type": 3, "timestamp": t + 2100, "windowId": "w1", "data": {"source": 3, "id": 1, "x": 0, "y": 400}},
        # Unknown event type
        {"type": 42, "timestamp": t + 65000, "windowId": "w1", "data": {}},
    ]
