"""
Shared data models — dataclasses used across multiple packages.

All decoder, assembler and server data structures live here to avoid
circular imports and ensure consistent serialization.
"""

from dataclasses import dataclass, field as dataclass_field
from enum import IntEnum
from typing import Dict, Iterator, List, Optional

from adb_markers.core.constants import MARKER_SCHEMA


# ---------------------------------------------------------------------------
# Checkin (battery history) models
# ---------------------------------------------------------------------------

class StringTableLookupError(LookupError):
    """A history code referenced a string table index that was never defined."""

    def __init__(self, index: int):
        super().__init__(f"string table has no entry at index {index}")
        self.index = index


@dataclass
class StringTableEntry:
    """One "9,hsp," line: an out-of-line string and the uid that owns it."""
    index: int
    uid: str                  # owner id as printed; "0" means no app
    text: str                 # still quoted, exactly as printed

    def to_dict(self) -> dict:
        return {"index": self.index, "uid": self.uid, "text": self.text}


class StringTable:
    """
    Sparse index → StringTableEntry mapping.

    Indices are whatever the dump printed; gaps are normal. Looking up an
    index that was never defined raises StringTableLookupError.
    """

    def __init__(self):
        self._entries: Dict[int, StringTableEntry] = {}

    def add(self, entry: StringTableEntry):
        self._entries[entry.index] = entry

    def lookup(self, index: int) -> StringTableEntry:
        try:
            return self._entries[index]
        except KeyError:
            raise StringTableLookupError(index) from None

    def __contains__(self, index: int) -> bool:
        return index in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[StringTableEntry]:
        """Entries in ascending index order."""
        for index in sorted(self._entries):
            yield self._entries[index]


@dataclass
class RawBatteryEvent:
    """A history code stamped with its absolute device time."""
    time: int                 # absolute device clock, milliseconds
    code: str                 # e.g. "+w=3", "-S", "Pss=2", "Ewl=14"

    def to_dict(self) -> dict:
        return {"time": self.time, "event": self.code}


@dataclass
class CheckinHistory:
    """Everything one pass over a checkin dump produces."""
    events: List[RawBatteryEvent]
    string_table: StringTable
    reset_time: Optional[int]
    metadata: Dict = dataclass_field(default_factory=dict)


# ---------------------------------------------------------------------------
# Marker models
# ---------------------------------------------------------------------------

class Phase(IntEnum):
    """Marker phase; the integer values are part of the wire format."""
    INSTANT = 0
    INTERVAL = 1
    START = 2
    END = 3


@dataclass
class DecodedEvent:
    """A RawBatteryEvent after symbol, string table and enum resolution."""
    name: str                 # e.g. "wake_lock", "phone_signal_strength=good"
    raw_code: str             # the code as it appeared in the dump
    phase: Phase
    key: str                  # bare code used to pair starts with ends
    uid: Optional[int] = None


@dataclass
class Marker:
    """
    One timeline entry.

    INSTANT and START markers have only start_time, END markers only
    end_time, INTERVAL markers both. Times are in milliseconds.
    """
    name: str
    start_time: Optional[float]
    end_time: Optional[float]
    phase: Phase
    category: int = 0
    data: Dict = dataclass_field(default_factory=dict)

    @property
    def boundary_time(self) -> Optional[float]:
        """The time that decides whether the marker falls before an origin."""
        if self.phase in (Phase.END, Phase.INTERVAL):
            return self.end_time
        return self.start_time

    @property
    def duration(self) -> Optional[float]:
        if self.phase != Phase.INTERVAL:
            return None
        return self.end_time - self.start_time

    def to_tuple(self) -> list:
        """Positional wire form, ordered by MARKER_SCHEMA."""
        row = [None] * len(MARKER_SCHEMA)
        row[MARKER_SCHEMA["name"]] = self.name
        row[MARKER_SCHEMA["startTime"]] = self.start_time
        row[MARKER_SCHEMA["endTime"]] = self.end_time
        row[MARKER_SCHEMA["phase"]] = int(self.phase)
        row[MARKER_SCHEMA["category"]] = self.category
        row[MARKER_SCHEMA["data"]] = self.data
        return row


@dataclass
class Category:
    """A profiler marker category. Markers refer to it by list position."""
    name: str
    color: str
    subcategories: List[str] = dataclass_field(default_factory=lambda: ["Other"])

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "color": self.color,
            "subcategories": list(self.subcategories),
        }


@dataclass
class MarkerTable:
    """Assembler output: categories, markers and their presentation schema."""
    categories: List[Category]
    markers: List[Marker]
    marker_schema: List[dict]

    def to_dict(self) -> dict:
        return {
            "categories": [c.to_dict() for c in self.categories],
            "markers": {
                "data": [m.to_tuple() for m in self.markers],
                "schema": dict(MARKER_SCHEMA),
            },
            "markerSchema": self.marker_schema,
        }


# ---------------------------------------------------------------------------
# logcat models
# ---------------------------------------------------------------------------

@dataclass
class LogEvent:
    """A single record from a logcat "long" format dump."""
    section: str              # log buffer: "main", "system", "crash", ...
    time: float               # Unix epoch seconds, microsecond precision
    pid: str
    tid: int
    level: str                # one letter: V, D, I, W, E, F
    tag: str
    message: str              # first line of the message body

    def to_dict(self) -> dict:
        return {
            "section": self.section,
            "time": self.time,
            "pid": self.pid,
            "tid": self.tid,
            "level": self.level,
            "tag": self.tag,
            "msg": self.message,
        }
