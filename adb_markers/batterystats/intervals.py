"""
IntervalReconstructor — Pairs "+code" starts with "-code" ends.

Battery history reports most states as a start code and a later end code.
The reconstructor folds each matched pair into one INTERVAL marker placed
where the end was, and drops the start:

    +S @100, -S @250   →   screen [100, 250]  raw "+S -S"

Only the most recent unmatched start of a key can be paired. A second start
before the end replaces the pending one, leaving the first as a standalone
START marker; this is counted in ``overwritten_starts``. Ends with no pending
start stay END markers.
"""

from dataclasses import replace
from typing import Dict, List, Set

from adb_markers.batterystats.resolver import pairing_key
from adb_markers.core.models import Marker, Phase


class IntervalReconstructor:
    """Single-pass start/end pairing over resolved battery markers."""

    def __init__(self):
        self.paired = 0
        self.overwritten_starts = 0
        self.unmatched_starts = 0
        self.unmatched_ends = 0

    def process(self, markers: List[Marker]) -> List[Marker]:
        # key -> the START marker still waiting for its end
        pending: Dict[str, Marker] = {}
        consumed: Set[int] = set()
        result: List[Marker] = []
        overwritten = 0

        for marker in markers:
            raw = marker.data.get("raw", "")

            if marker.phase == Phase.START and raw.startswith("+"):
                _, key = pairing_key(raw)
                if key in pending:
                    overwritten += 1
                pending[key] = marker

            elif marker.phase == Phase.END and raw.startswith("-"):
                _, key = pairing_key(raw)
                start = pending.pop(key, None)
                if start is not None:
                    consumed.add(id(start))
                    self.paired += 1
                    data = dict(marker.data)
                    data["raw"] = f"{start.data['raw']} {raw}"
                    marker = replace(
                        marker,
                        start_time=start.start_time,
                        phase=Phase.INTERVAL,
                        data=data,
                    )
                else:
                    self.unmatched_ends += 1

            result.append(marker)

        self.overwritten_starts += overwritten
        self.unmatched_starts += len(pending) + overwritten
        return [m for m in result if id(m) not in consumed]

    def get_summary(self) -> dict:
        return {
            "paired_intervals": self.paired,
            "overwritten_starts": self.overwritten_starts,
            "unmatched_starts": self.unmatched_starts,
            "unmatched_ends": self.unmatched_ends,
        }


def merge_interval_markers(markers: List[Marker]) -> List[Marker]:
    """One-call pairing, discarding the diagnostic counters."""
    return IntervalReconstructor().process(markers)
