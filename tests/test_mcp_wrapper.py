# -*- coding: utf-8 -*-
"""Tests for the MCP wrapper that forwards tool calls to the timeline service.

The wrapper's httpx.Client is replaced with FastAPI's TestClient so calls
reach the service app in-process.
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from mcp_wrappers.timeline import mcp_service
from services.timeline_service.app import app
from timeline_server.models import CityInput, CityTimeline, ConvertedWindow, TimelineItemView


@pytest.fixture
def service(monkeypatch):
    monkeypatch.setattr(mcp_service.httpx, "Client", lambda timeout=None: TestClient(app))


def test_convert_local_event_time(service) -> None:
    result = mcp_service._convert_local_event_time(
        "2025-07-15T18:00:00", "2025-07-15T21:00:00", "Asia/Tokyo", "Europe/Berlin"
    )

    assert isinstance(result, ConvertedWindow)
    assert result.formatted == "July 15, 2025, 11:00-14:00 CEST"


def test_format_and_difference(service) -> None:
    formatted = mcp_service._format_event_time_range(
        "2025-07-15T18:00:00", "2025-07-15T21:00:00", False, "Europe/London"
    )
    difference = mcp_service._describe_time_difference("Europe/London", "Asia/Tokyo", "2025-01-15T12:00:00Z")

    assert formatted == "18:00-21:00 BST"
    assert difference == "9 hours ahead"


def test_build_city_timeline_returns_dataclasses(service) -> None:
    timeline = mcp_service._build_city_timeline(
        "2025-07-15T18:00:00",
        "2025-07-15T21:00:00",
        False,
        [
            CityInput(id="tokyo", name="Tokyo", timezone="Asia/Tokyo"),
            {"id": "nyc", "name": "New York", "timezone": "America/New_York"},
        ],
        user_timezone="Europe/Berlin",
    )

    assert isinstance(timeline, CityTimeline)
    assert all(isinstance(item, TimelineItemView) for item in timeline.items)
    assert [item.city_name for item in timeline.items if item.kind == "city"] == ["Tokyo", "New York"]


def test_build_city_timeline_with_no_cities(service) -> None:
    assert mcp_service._build_city_timeline("2025-07-15T18:00:00", "2025-07-15T21:00:00", False, []) is None


def test_show_city_timeline(service) -> None:
    table = mcp_service._show_city_timeline(
        "2025-07-15T18:00:00",
        "2025-07-15T21:00:00",
        False,
        [CityInput(id="tokyo", name="Tokyo", timezone="Asia/Tokyo")],
        user_timezone="Asia/Tokyo",
    )

    assert "18:00-21:00 JST" in table


def test_service_errors_become_runtime_errors(service) -> None:
    with pytest.raises(RuntimeError, match="HTTP error from timeline service: 400"):
        mcp_service._convert_local_event_time("later", "2025-07-15T21:00:00", "Asia/Tokyo")


def test_timeouts_become_runtime_errors(monkeypatch) -> None:
    class TimingOutClient:
        def __init__(self, timeout=None) -> None:
            self.timeout = timeout

        def __enter__(self):
            return self

        def __exit__(self, *exc_info) -> None:
            return None

        def post(self, url, json=None):
            raise httpx.ReadTimeout("timed out")

    monkeypatch.setattr(mcp_service.httpx, "Client", TimingOutClient)

    with pytest.raises(RuntimeError, match="timed out after 30.0 seconds"):
        mcp_service._describe_time_difference("Europe/Berlin", "Asia/Tokyo")
