"""Bridge package -- captures from the attached device via adb."""
from adb_markers.bridge.adb import AdbBridge, AdbError, device_date_string
