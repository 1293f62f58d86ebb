"""
AdbBridge — runs the `adb` command-line tool and returns its output.

Every capture used by the decoders and the HTTP routes goes through here.
Failures of any kind (missing binary, nonzero exit, anything printed on
stderr, output over the size cap) surface as AdbError. No retries.
"""

import math
import shlex
import subprocess
import tempfile
import threading
import time
from datetime import datetime
from typing import Optional

from adb_markers.core.constants import LOGCAT_DEFAULT_TAIL, LOGCAT_FORMAT
from adb_markers.core.utils import warn


class AdbError(RuntimeError):
    """An adb invocation failed or produced unusable output."""


def device_date_string(dt: datetime) -> str:
    """`date` argument understood by toolbox: MMDDhhmmYY.ss (two-digit year)."""
    return dt.strftime("%m%d%H%M%y.%S")


class AdbBridge:
    """Thin wrapper over the adb binary for one attached device."""

    def __init__(self, adb_path: str = "adb",
                 max_output_bytes: int = 50 * 1024 * 1024,
                 timeout: Optional[float] = None):
        self.adb_path = adb_path
        self.max_output_bytes = max_output_bytes
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "AdbBridge":
        return cls(adb_path=settings.adb_path,
                   max_output_bytes=settings.max_output_bytes)

    # ------------------------------------------------------------------
    # Raw invocation
    # ------------------------------------------------------------------
    def run(self, command: str) -> str:
        """
        Run ``adb <command>`` and return stdout as text.

        At most ``max_output_bytes + 1`` bytes of stdout are ever held; a
        process that prints more is killed. stderr is spooled to a temporary
        file so a chatty stderr cannot stall the stdout pipe. ``timeout``
        bounds the whole invocation, reading included.
        """
        argv = [self.adb_path] + shlex.split(command)
        with tempfile.TemporaryFile() as stderr_file:
            try:
                proc = subprocess.Popen(argv, stdout=subprocess.PIPE,
                                        stderr=stderr_file)
            except OSError as e:
                warn(f"adb {command}: {e}")
                raise AdbError(f"adb {command}: {e}") from e

            expired = threading.Event()

            def expire():
                expired.set()
                proc.kill()

            with proc:
                timer = None
                if self.timeout is not None:
                    timer = threading.Timer(self.timeout, expire)
                    timer.start()
                try:
                    stdout = proc.stdout.read(self.max_output_bytes + 1)
                    oversized = len(stdout) > self.max_output_bytes
                    if oversized:
                        proc.kill()
                    returncode = proc.wait()
                finally:
                    if timer is not None:
                        timer.cancel()

            if expired.is_set():
                message = f"adb {command}: timed out after {self.timeout}s"
                warn(message)
                raise AdbError(message)
            if oversized:
                message = f"adb {command}: output exceeds {self.max_output_bytes} bytes"
                warn(message)
                raise AdbError(message)

            stderr_file.seek(0)
            stderr = stderr_file.read()

        if returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            warn(f"adb {command} exited with {returncode}: {message}")
            raise AdbError(f"adb {command} exited with {returncode}: {message}")
        if stderr:
            message = stderr.decode("utf-8", errors="replace").strip()
            warn(f"adb {command} stderr: {message}")
            raise AdbError(message)

        return stdout.decode("utf-8", errors="replace")

    # ------------------------------------------------------------------
    # Captures
    # ------------------------------------------------------------------
    def battery_history(self) -> str:
        return self.run("shell dumpsys batterystats -c --history")

    def battery_checkin(self) -> str:
        return self.run("shell dumpsys batterystats -c")

    def battery_verbose(self) -> str:
        return self.run("shell dumpsys batterystats")

    def logcat(self, start_time: Optional[float] = None) -> str:
        """
        Dump logcat in epoch/usec long format.

        ``start_time`` is epoch seconds; when falsy the last
        LOGCAT_DEFAULT_TAIL lines are returned instead.
        """
        since = start_time or LOGCAT_DEFAULT_TAIL
        return self.run(f"logcat -t {since} --format={LOGCAT_FORMAT}")

    # ------------------------------------------------------------------
    # Device preparation
    # ------------------------------------------------------------------
    def set_device_clock(self) -> str:
        """Set the device clock to host local time, on a whole second."""
        now = time.time()
        second = math.ceil(now)
        time.sleep(second - now)
        return self.run(f"shell su -c date {device_date_string(datetime.fromtimestamp(second))}")

    def reset(self) -> str:
        """Unplug, clear battery stats, enable full history, sync the clock."""
        outputs = [
            self.run("shell dumpsys battery unplug"),
            self.run("shell dumpsys batterystats --reset"),
            self.run("shell dumpsys batterystats --enable full-history"),
            self.set_device_clock(),
        ]
        return "\n".join(outputs)
