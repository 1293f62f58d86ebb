"""
LogcatDecoder — Parses `logcat --format=epoch,UTC,usec,printable,long` dumps.

The long format prints one record per blank-line-separated block:

    --------- beginning of main
    [ 1700000000.123456  1234: 1250 I/ActivityManager ]
    Start proc 4321:com.example/u0a123 for activity

    [ 1700000000.124001  1234: 1250 W/ActivityManager ]
    Slow operation: 63ms so far

Each "beginning of" banner opens a new log buffer section. Records whose
header does not match are dropped and counted; they never fail the decode.

Usage:
    from adb_markers.logs import parse_logcat

    events = parse_logcat(stdout)
"""

import re
from typing import Dict, List, Optional

from adb_markers.core.constants import LOGCAT_SECTION_MARKER
from adb_markers.core.models import LogEvent
from adb_markers.core.utils import warn


# [ <epoch.usec> <pid>: <tid> <LEVEL>/<tag> ]\n<message>
_RECORD_RE = re.compile(
    r"\[\s+([0-9.]+)"                # [ 1700000000.123456
    r"\s+([0-9]+):\s*([0-9]+)"       # pid: tid
    r" ([A-Z])/(.*[^ ]) +\]"         # L/tag ]
    r"\n(.*)"                        # first message line
)


class LogcatDecoder:
    """
    Splits a logcat dump into sections and records.

    One instance per decode; ``metadata`` reports how many records were
    seen, parsed and skipped.
    """

    def __init__(self):
        self._metadata: Dict = {
            "source_type": "logcat",
            "sections": 0,
            "records": 0,
            "parsed_records": 0,
            "skipped_records": 0,
        }

    def decode(self, text: str) -> List[LogEvent]:
        events: List[LogEvent] = []
        for section in text.split(LOGCAT_SECTION_MARKER):
            line_break = section.find("\n")
            if line_break == -1:
                continue
            section_name = section[:line_break]
            self._metadata["sections"] += 1

            for record in section[line_break + 1:].split("\n\n"):
                if not record:
                    continue
                self._metadata["records"] += 1
                event = self._parse_record(section_name, record)
                if event is None:
                    self._metadata["skipped_records"] += 1
                    warn(f"failed to parse logcat record: {record!r}")
                    continue
                self._metadata["parsed_records"] += 1
                events.append(event)

        return events

    def _parse_record(self, section: str, record: str) -> Optional[LogEvent]:
        match = _RECORD_RE.search(record)
        if not match:
            return None
        time, pid, tid, level, tag, message = match.groups()
        return LogEvent(
            section=section,
            time=float(time),
            pid=pid,
            tid=int(tid),
            level=level,
            tag=tag,
            message=message,
        )

    def get_metadata(self) -> dict:
        return dict(self._metadata)


def parse_logcat(text: str) -> List[LogEvent]:
    """One-call decode of a logcat dump into LogEvents, in stream order."""
    return LogcatDecoder().decode(text)
