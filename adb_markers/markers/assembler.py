"""
Marker assembly — battery history and logcat onto one profiler timeline.

decode checkin → resolve names → pair intervals → origin shift   (category 0)
decode logcat  → one instant marker per record                  (category 1)

All times are milliseconds relative to the caller's origin: battery times
are device milliseconds, logcat epoch seconds are scaled by 1000.
"""

import math
from dataclasses import replace
from typing import List, Optional

from adb_markers.batterystats.checkin import parse_checkin
from adb_markers.batterystats.intervals import IntervalReconstructor
from adb_markers.batterystats.resolver import resolve_events
from adb_markers.core.constants import (
    BATTERY_MARKER_TYPE,
    LOGCAT_CATEGORY_INDEX,
    LOGCAT_MARKER_TYPE,
)
from adb_markers.core.models import LogEvent, Marker, MarkerTable, Phase
from adb_markers.core.utils import LOG_LEVELS
from adb_markers.logs.logcat import parse_logcat
from adb_markers.markers.schema import default_categories, marker_schema


def battery_markers(checkin_text: str,
                    reconstructor: Optional[IntervalReconstructor] = None) -> List[Marker]:
    """Decode a checkin dump into resolved, interval-paired markers (absolute ms)."""
    history = parse_checkin(checkin_text)
    markers = resolve_events(history.events, history.string_table)
    if reconstructor is None:
        reconstructor = IntervalReconstructor()
    return reconstructor.process(markers)


def _check_origin(origin: float):
    if not math.isfinite(origin):
        raise ValueError(f"origin must be a finite number, got {origin!r}")


def _shift(value: Optional[float], origin: float) -> Optional[float]:
    return None if value is None else value - origin


def shift_battery_markers(markers: List[Marker], origin: float = 0) -> List[Marker]:
    """
    Drop markers before ``origin``, make times origin-relative and tag them.

    A "name=value" marker name is split so the value lands in data["name"].
    """
    shifted = []
    for marker in markers:
        if marker.boundary_time < origin:
            continue

        data = dict(marker.data)
        data["type"] = BATTERY_MARKER_TYPE
        name = marker.name
        if "=" in name:
            name, value = name.split("=", 1)
            if value:
                data["name"] = value

        shifted.append(replace(
            marker,
            name=name,
            start_time=_shift(marker.start_time, origin),
            end_time=_shift(marker.end_time, origin),
            data=data,
        ))
    return shifted


def logcat_markers(events: List[LogEvent], origin: float = 0) -> List[Marker]:
    """One instant marker per log record, named after its tag."""
    return [
        Marker(
            name=ev.tag,
            start_time=ev.time * 1000 - origin,
            end_time=None,
            phase=Phase.INSTANT,
            category=LOGCAT_CATEGORY_INDEX,
            data={
                "type": LOGCAT_MARKER_TYPE,
                "msg": ev.message,
                "level": LOG_LEVELS.get(ev.level, ev.level),
                "pid": ev.pid,
                "tid": ev.tid,
                "section": ev.section,
            },
        )
        for ev in events
    ]


def assemble_markers(checkin_text: str,
                     logcat_text: Optional[str] = None,
                     origin: float = 0,
                     reconstructor: Optional[IntervalReconstructor] = None) -> MarkerTable:
    """
    Build the marker table from already captured dumps.

    Battery markers come first, then logcat markers, each in stream order.
    Raises StringTableLookupError if the checkin dump references an
    undefined string, and ValueError for a NaN or infinite origin.
    """
    _check_origin(origin)
    markers = shift_battery_markers(battery_markers(checkin_text, reconstructor), origin)
    if logcat_text:
        markers.extend(logcat_markers(parse_logcat(logcat_text), origin))

    return MarkerTable(
        categories=default_categories(),
        markers=markers,
        marker_schema=marker_schema(),
    )


def markers_from_adb(bridge, origin: float = 0,
                     reconstructor: Optional[IntervalReconstructor] = None) -> MarkerTable:
    """
    Capture both dumps from the device and assemble them.

    logcat is asked only for records since the origin (in seconds); with a
    zero origin the bridge falls back to the most recent lines.
    """
    _check_origin(origin)
    checkin_text = bridge.battery_history()
    logcat_text = bridge.logcat(origin / 1000)
    return assemble_markers(checkin_text, logcat_text, origin, reconstructor)
