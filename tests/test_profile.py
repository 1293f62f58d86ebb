import pytest
import requests

from adb_markers.core.models import Marker, MarkerTable, Phase
from adb_markers.markers import profile as profile_module
from adb_markers.markers.profile import (
    MARKER_COLUMNS,
    fetch_profile,
    merge_into_profile,
    profile_with_device_markers,
)
from adb_markers.markers.schema import default_categories, marker_schema

from conftest import RESET_MS


def _profile(start_time=0):
    return {
        "meta": {"startTime": start_time,
                 "categories": [{"name": "Idle"}, {"name": "Other"}]},
        "threads": [
            {"stringArray": ["a", "b"],
             "markers": {"data": [{}], "name": [1], "startTime": [5],
                         "endTime": [None], "phase": [0], "category": [1],
                         "length": 1}},
            {"stringArray": ["untouched"], "markers": {"length": 0}},
        ],
    }


def _table():
    return MarkerTable(
        categories=default_categories(),
        markers=[
            Marker(name="screen", start_time=0, end_time=10,
                   phase=Phase.INTERVAL, data={"type": "abs"}),
            Marker(name="ActivityManager", start_time=3, end_time=None,
                   phase=Phase.INSTANT, category=1, data={"type": "alc"}),
            Marker(name="screen", start_time=20, end_time=None,
                   phase=Phase.START, data={"type": "abs"}),
        ],
        marker_schema=marker_schema(),
    )


def test_merge_replaces_first_thread_markers():
    profile = merge_into_profile(_profile(), _table())
    thread = profile["threads"][0]
    assert thread["stringArray"] == ["(root)", "screen", "ActivityManager"]

    markers = thread["markers"]
    assert markers["length"] == 3
    assert markers["name"] == [1, 2, 1]
    assert markers["startTime"] == [0, 3, 20]
    assert markers["endTime"] == [10, None, None]
    assert markers["phase"] == [1, 0, 2]
    assert markers["category"] == [2, 3, 2]
    for column in MARKER_COLUMNS:
        assert len(markers[column]) == 3

    assert profile["threads"][1]["stringArray"] == ["untouched"]


def test_merge_appends_categories_and_schema():
    profile = merge_into_profile(_profile(), _table())
    names = [c["name"] for c in profile["meta"]["categories"]]
    assert names == ["Idle", "Other", "Android - BatteryStats", "Android - logcat"]
    assert [s["name"] for s in profile["meta"]["markerSchema"]] == ["abs", "alc"]


class _Response:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} Client Error")

    def json(self):
        return self.payload


def test_fetch_profile_passes_timeout(monkeypatch):
    seen = {}

    def fake_get(url, timeout=None):
        seen.update(url=url, timeout=timeout)
        return _Response({"ok": True})

    monkeypatch.setattr(profile_module.requests, "get", fake_get)
    assert fetch_profile("http://localhost:2121/profile", timeout=5) == {"ok": True}
    assert seen == {"url": "http://localhost:2121/profile", "timeout": 5}


def test_fetch_profile_raises_on_http_error(monkeypatch):
    monkeypatch.setattr(profile_module.requests, "get",
                        lambda url, timeout=None: _Response(None, status=404))
    with pytest.raises(requests.HTTPError):
        fetch_profile("http://localhost:2121/profile")


def test_profile_start_time_is_the_marker_origin(monkeypatch, fake_bridge):
    monkeypatch.setattr(profile_module.requests, "get",
                        lambda url, timeout=None: _Response(_profile(RESET_MS + 200)))
    profile = profile_with_device_markers(fake_bridge, "http://x/profile")
    assert fake_bridge.logcat_calls == [(RESET_MS + 200) / 1000]
    # 7 battery markers at or after the origin plus 4 log records
    assert profile["threads"][0]["markers"]["length"] == 11
