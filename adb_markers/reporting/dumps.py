"""
Plain-text debugging dumps of the intermediate decode stages.

  format_events        — string table + reset-relative history codes
  format_markers_jsonl — resolved battery markers, one JSON tuple per line
  format_logcat_jsonl  — logcat records, one JSON object per line
"""

import json
from typing import List

from adb_markers.core.models import CheckinHistory, LogEvent, Marker


def format_events(history: CheckinHistory) -> str:
    """
    Render the checkin decode for eyeballing:

        <index>=<uid>,<string>        (one per string table entry)
        <blank line>
        <ms since reset>, <code>      (one per history code)
    """
    reset_time = history.reset_time or 0
    table = "\n".join(f"{e.index}={e.uid},{e.text}" for e in history.string_table)
    events = "\n".join(f"{ev.time - reset_time}, {ev.code}" for ev in history.events)
    return table + "\n\n" + events


def format_markers_jsonl(markers: List[Marker]) -> str:
    return "\n".join(json.dumps(m.to_tuple()) for m in markers)


def format_logcat_jsonl(events: List[LogEvent]) -> str:
    return "\n".join(json.dumps(ev.to_dict()) for ev in events)
