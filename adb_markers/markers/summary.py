"""Summary statistics over an assembled marker table."""

from collections import Counter, defaultdict
from typing import Dict, List, Union

import numpy as np

from adb_markers.core.models import Marker, MarkerTable, Phase


def summarize_markers(markers: Union[MarkerTable, List[Marker]],
                      top_n: int = 10) -> dict:
    """
    Count markers by phase, type and name, and describe interval durations.

    Returns:
        {
          "total_markers": int,
          "by_phase": {"instant": n, "interval": n, "start": n, "end": n},
          "by_type": {"abs": n, "alc": n},
          "top_names": {name: count} (top_n most frequent),
          "intervals": {name: {count, total_ms, mean_ms, median_ms, max_ms}},
        }
    """
    if isinstance(markers, MarkerTable):
        markers = markers.markers

    by_phase = Counter(Phase(m.phase).name.lower() for m in markers)
    by_type = Counter(m.data.get("type", "untyped") for m in markers)
    by_name = Counter(m.name for m in markers)

    durations: Dict[str, List[float]] = defaultdict(list)
    for m in markers:
        if m.phase == Phase.INTERVAL:
            durations[m.name].append(m.duration)

    intervals = {}
    for name in sorted(durations):
        arr = np.asarray(durations[name], dtype=float)
        intervals[name] = {
            "count": int(arr.size),
            "total_ms": round(float(arr.sum()), 1),
            "mean_ms": round(float(np.mean(arr)), 1),
            "median_ms": round(float(np.median(arr)), 1),
            "max_ms": round(float(np.max(arr)), 1),
        }

    return {
        "total_markers": len(markers),
        "by_phase": {p.name.lower(): by_phase.get(p.name.lower(), 0) for p in Phase},
        "by_type": dict(sorted(by_type.items(), key=lambda x: -x[1])),
        "top_names": dict(by_name.most_common(top_n)),
        "intervals": intervals,
    }
