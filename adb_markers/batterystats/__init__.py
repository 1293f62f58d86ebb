"""Batterystats package — checkin history decoding, name resolution, interval pairing."""
from adb_markers.batterystats.checkin import CheckinDecoder, parse_checkin
from adb_markers.batterystats.resolver import (
    map_enum_value,
    pairing_key,
    resolve_event,
    resolve_events,
)
from adb_markers.batterystats.intervals import IntervalReconstructor, merge_interval_markers
