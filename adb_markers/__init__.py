"""
adb-markers

Decodes Android battery history (`dumpsys batterystats -c --history`) and
logcat dumps into Firefox profiler timeline markers.

Package structure:
  core/          - Foundation: constants, utils, config, shared models
  logs/          - logcat dump decoding
  batterystats/  - checkin history decoding, name resolution, interval pairing
  markers/       - marker assembly, presentation schema, profile merge, summaries
  bridge/        - adb invocation
  reporting/     - text / JSON-lines dumps of intermediate stages
  server/        - Flask routes (python -m adb_markers serve)
"""

__version__ = "0.1.0"
