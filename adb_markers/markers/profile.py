"""
Profile merge — inject the marker table into a Firefox profiler profile.

The profiler serves its current profile as JSON. The first thread's markers
are replaced with ours, our categories are appended after the profile's own,
and marker names are interned into the thread's string array.
"""

from typing import Dict

import requests

from adb_markers.core.models import MarkerTable
from adb_markers.markers.assembler import markers_from_adb

# Column arrays of the profile's marker table
MARKER_COLUMNS = ("data", "name", "startTime", "endTime", "phase", "category")


def fetch_profile(url: str, timeout: float = 30.0) -> dict:
    """GET the profile JSON. HTTP and connection errors propagate."""
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.json()


def merge_into_profile(profile: dict, table: MarkerTable) -> dict:
    """Replace the first thread's markers with ``table``. Mutates and returns ``profile``."""
    thread = profile["threads"][0]
    thread["stringArray"] = ["(root)"]
    string_index: Dict[str, int] = {"(root)": 0}

    markers = thread["markers"]
    for key in MARKER_COLUMNS:
        markers[key] = []
    markers["length"] = 0

    meta = profile["meta"]
    meta["markerSchema"] = table.marker_schema
    category_offset = len(meta["categories"])
    meta["categories"].extend(c.to_dict() for c in table.categories)

    for marker in table.markers:
        if marker.name not in string_index:
            string_index[marker.name] = len(thread["stringArray"])
            thread["stringArray"].append(marker.name)

        markers["phase"].append(int(marker.phase))
        markers["data"].append(marker.data)
        markers["name"].append(string_index[marker.name])
        markers["startTime"].append(marker.start_time)
        markers["endTime"].append(marker.end_time)
        markers["category"].append(marker.category + category_offset)
        markers["length"] += 1

    return profile


def profile_with_device_markers(bridge, profile_url: str,
                                timeout: float = 30.0) -> dict:
    """Fetch the profile and merge markers captured since its start time."""
    profile = fetch_profile(profile_url, timeout=timeout)
    table = markers_from_adb(bridge, profile["meta"]["startTime"])
    return merge_into_profile(profile, table)
