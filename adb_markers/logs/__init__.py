"""Logs package — logcat dump decoding."""
from adb_markers.logs.logcat import LogcatDecoder, parse_logcat
