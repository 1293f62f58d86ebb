"""Server package -- Flask routes for the profiler's external marker source."""
from adb_markers.server.app import create_app, run_server
