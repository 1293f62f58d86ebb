"""
Presentation metadata handed to the profiler with every marker table.

The category order and the markerSchema descriptors are what the profiler's
external marker ingestion expects; do not reorder them.
"""

from typing import List

from adb_markers.core.constants import BATTERY_MARKER_TYPE, LOGCAT_MARKER_TYPE
from adb_markers.core.models import Category


def default_categories() -> List[Category]:
    """Fresh category list: index 0 battery history, index 1 logcat."""
    return [
        Category(name="Android - BatteryStats", color="yellow", subcategories=["Other"]),
        Category(name="Android - logcat", color="yellow", subcategories=["Other"]),
    ]


def marker_schema() -> List[dict]:
    """Fresh copy of the marker presentation schema for "abs" and "alc"."""
    return [
        {
            "name": BATTERY_MARKER_TYPE,
            "tooltipLabel": "{marker.name} {marker.data.name}",
            "tableLabel": "{marker.data.name}",
            "chartLabel": "{marker.data.name}",
            "display": ["marker-chart", "marker-table"],
            "data": [
                {
                    "key": "name",
                    "label": "Name event",
                    "format": "string",
                    "searchable": True,
                },
                {
                    "key": "uid",
                    "label": "User id",
                    "format": "string",
                    "searchable": True,
                },
                {
                    "key": "raw",
                    "label": "Checkin event",
                    "format": "string",
                },
            ],
        },
        {
            "name": LOGCAT_MARKER_TYPE,
            "tooltipLabel": "{marker.name} {marker.data.msg}",
            "tableLabel": "[{marker.data.section}] {marker.data.level} — {marker.data.msg}",
            "display": ["marker-chart", "marker-table"],
            "data": [
                {
                    "key": "msg",
                    "label": "Message",
                    "format": "string",
                    "searchable": True,
                },
                {
                    "key": "level",
                    "label": "Log level",
                    "format": "string",
                    "searchable": True,
                },
                {
                    "key": "pid",
                    "label": "Process",
                    "format": "pid",
                    "searchable": True,
                },
                {
                    "key": "tid",
                    "label": "Thread",
                    "format": "tid",
                    "searchable": True,
                },
                {
                    "key": "section",
                    "label": "Section",
                    "format": "string",
                },
            ],
        },
    ]
