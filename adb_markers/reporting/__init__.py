"""Reporting package -- text and JSON-lines dumps of decode stages."""
from adb_markers.reporting.dumps import format_events, format_logcat_jsonl, format_markers_jsonl
