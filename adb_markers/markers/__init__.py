"""Markers package — assembly, presentation schema, profile merge, summaries."""
from adb_markers.markers.assembler import (
    assemble_markers,
    battery_markers,
    logcat_markers,
    markers_from_adb,
    shift_battery_markers,
)
from adb_markers.markers.schema import default_categories, marker_schema
from adb_markers.markers.profile import fetch_profile, merge_into_profile, profile_with_device_markers
from adb_markers.markers.summary import summarize_markers
