"""
Event name resolution for battery history codes.

Turns the terse checkin codes into readable marker names:

    +r          → running            (START)
    -S          → screen             (END)
    Pss=3       → phone_signal_strength=good
    +Ewl=14     → wake_lock_in=<string table entry 14>, uid from the entry
    Zz=1        → Zz=1               (unknown codes pass through)

The only failure is a reference to a string table index that the dump never
defined, which raises StringTableLookupError.
"""

import re
from typing import List, Optional, Tuple

from adb_markers.core.constants import (
    BATTERY_CATEGORY_INDEX,
    EVENT_NAMES,
    NO_UID,
    SYMBOL_NAMES,
    VALUE_NAMES,
)
from adb_markers.core.models import (
    DecodedEvent,
    Marker,
    Phase,
    RawBatteryEvent,
    StringTable,
)

# E<two letter event>=<string table index>
_STRING_REF_RE = re.compile(r"^E([a-z]{2})=([0-9]+)$")


def pairing_key(raw_code: str) -> Tuple[Phase, str]:
    """
    Split a raw code into its phase and the bare key used for pairing.

    "+w=<idx>" starts are keyed as plain "w" so they pair with "-w".
    """
    if raw_code.startswith("+"):
        phase, key = Phase.START, raw_code[1:]
    elif raw_code.startswith("-"):
        phase, key = Phase.END, raw_code[1:]
    else:
        phase, key = Phase.INSTANT, raw_code

    if key.startswith("w="):
        key = "w"
    return phase, key


def map_enum_value(code: str, value: str) -> str:
    """Translate an enumerated value for a short code; unknown values pass."""
    table = VALUE_NAMES.get(code)
    if table is None:
        return value
    return table.get(value, value)


def _strip_quotes(text: str) -> str:
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text


def _parse_uid(uid: str) -> Optional[int]:
    if uid == NO_UID:
        return None
    try:
        return int(uid)
    except ValueError:
        return None


def resolve_event(event: RawBatteryEvent, string_table: StringTable) -> DecodedEvent:
    phase, key = pairing_key(event.code)
    name = key
    uid = None

    match = _STRING_REF_RE.match(key)
    if match:
        short_name, index = match.groups()
        entry = string_table.lookup(int(index))
        name = f"{EVENT_NAMES.get(short_name, short_name)}={_strip_quotes(entry.text)}"
        uid = _parse_uid(entry.uid)
    elif key in SYMBOL_NAMES:
        name = SYMBOL_NAMES[key]

    # Also applies to resolved string references ("ch=<str>" → "charging=<str>")
    if "=" in name:
        code, value = name.split("=", 1)
        if code in SYMBOL_NAMES:
            name = f"{SYMBOL_NAMES[code]}={map_enum_value(code, value)}"

    return DecodedEvent(name=name, raw_code=event.code, phase=phase,
                        key=key, uid=uid)


def to_marker(event: RawBatteryEvent, decoded: DecodedEvent) -> Marker:
    data = {"raw": decoded.raw_code}
    if decoded.uid is not None:
        data["uid"] = decoded.uid

    is_end = decoded.phase == Phase.END
    return Marker(
        name=decoded.name,
        start_time=None if is_end else event.time,
        end_time=event.time if is_end else None,
        phase=decoded.phase,
        category=BATTERY_CATEGORY_INDEX,
        data=data,
    )


def resolve_events(events: List[RawBatteryEvent],
                   string_table: StringTable) -> List[Marker]:
    """Resolve every event into a marker, preserving order."""
    return [to_marker(ev, resolve_event(ev, string_table)) for ev in events]
