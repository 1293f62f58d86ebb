"""
CheckinDecoder — Turns `dumpsys batterystats -c --history` output into
absolute-time history events plus the string table they reference.

Two record types matter:

    9,hsp,<index>,<uid>,"<string>"      string table entry
    9,h,0:RESET:TIME:<epoch ms>         history reset, sets the time base
    9,h,<delta ms>,<code>,<code>...     codes happening <delta> ms later
    9,h,<delta ms>                      time advance only

Deltas are relative to a running cursor that starts at the RESET time. A
positive delta moves the cursor; a zero or negative one stamps its codes at
cursor + delta and leaves the cursor where it was, so several lines can share
a timestamp. Every other checkin record (9,0,i,vers,... and friends) is
ignored.
"""

import re
from typing import Dict, List, Optional

from adb_markers.core.constants import (
    HISTORY_PREFIX,
    RESET_PREFIX,
    STRING_TABLE_PREFIX,
)
from adb_markers.core.models import (
    CheckinHistory,
    RawBatteryEvent,
    StringTable,
    StringTableEntry,
)
from adb_markers.core.utils import info, warn

# Leading integer, as the device prints it ("0:START" reads as 0)
_LEADING_INT_RE = re.compile(r"^\s*([-+]?\d+)")


def _leading_int(text: str) -> Optional[int]:
    match = _LEADING_INT_RE.match(text)
    return int(match.group(1)) if match else None


class CheckinDecoder:
    """Single pass over a checkin dump. Use one instance per dump."""

    def __init__(self):
        self.events: List[RawBatteryEvent] = []
        self.string_table = StringTable()
        self.reset_time: Optional[int] = None
        self._cursor: Optional[int] = None
        self._metadata: Dict = {
            "source_type": "checkin",
            "total_lines": 0,
            "string_table_lines": 0,
            "history_lines": 0,
            "skipped_lines": 0,
            "malformed_lines": 0,
        }

    def decode(self, text: str) -> CheckinHistory:
        for line in text.split("\n"):
            self._metadata["total_lines"] += 1
            line = line.rstrip("\r")

            if line.startswith(STRING_TABLE_PREFIX):
                self._metadata["string_table_lines"] += 1
                if not self._parse_string_table_line(line):
                    self._metadata["malformed_lines"] += 1
            elif line.startswith(HISTORY_PREFIX):
                self._metadata["history_lines"] += 1
                if not self._parse_history_line(line[len(HISTORY_PREFIX):]):
                    self._metadata["malformed_lines"] += 1
            else:
                self._metadata["skipped_lines"] += 1

        if self._metadata["skipped_lines"]:
            info(f"ignored {self._metadata['skipped_lines']} checkin line(s) "
                 f"without a history or string table prefix")
        if self._metadata["malformed_lines"]:
            warn(f"skipped {self._metadata['malformed_lines']} malformed "
                 f"checkin line(s)")

        return CheckinHistory(
            events=self.events,
            string_table=self.string_table,
            reset_time=self.reset_time,
            metadata=dict(self._metadata),
        )

    def _parse_string_table_line(self, line: str) -> bool:
        # The string itself may contain commas; only split off index and uid.
        parts = line[len(STRING_TABLE_PREFIX):].split(",", 2)
        if len(parts) < 3:
            return False
        index = _leading_int(parts[0])
        if index is None:
            return False
        self.string_table.add(StringTableEntry(index=index, uid=parts[1],
                                               text=parts[2]))
        return True

    def _parse_history_line(self, body: str) -> bool:
        if body.startswith(RESET_PREFIX):
            reset_time = _leading_int(body[len(RESET_PREFIX):])
            if reset_time is None:
                return False
            self.reset_time = reset_time
            self._cursor = reset_time
            return True

        if self._cursor is None:
            # No RESET seen yet: nothing to measure the delta from.
            return False

        if "," not in body:
            delta = _leading_int(body)
            if delta is None:
                return False
            self._cursor += delta
            return True

        parts = body.split(",")
        delta = _leading_int(parts[0])
        if delta is None:
            return False
        time = self._cursor + delta
        for code in parts[1:]:
            if code:
                self.events.append(RawBatteryEvent(time=time, code=code))
        if delta > 0:
            self._cursor += delta
        return True


def parse_checkin(text: str) -> CheckinHistory:
    """One-call decode of a checkin dump."""
    return CheckinDecoder().decode(text)
