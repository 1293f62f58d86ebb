"""
Core package — shared constants, utilities, configuration and data models.

This is the foundation layer with no local dependencies.
"""

from adb_markers.core.utils import LOG_LEVELS, format_absolute_time, info, warn
from adb_markers.core.constants import (
    EVENT_NAMES,
    MARKER_SCHEMA,
    SYMBOL_NAMES,
    VALUE_NAMES,
)
from adb_markers.core.models import (
    Category,
    CheckinHistory,
    DecodedEvent,
    LogEvent,
    Marker,
    MarkerTable,
    Phase,
    RawBatteryEvent,
    StringTable,
    StringTableEntry,
    StringTableLookupError,
)
from adb_markers.core.config import Settings, load_settings
