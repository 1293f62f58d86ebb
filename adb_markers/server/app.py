"""
HTTP server for the Firefox profiler's external marker source.

Point `devtools.performance.recording.markers.external-url` at
http://localhost:<port>/markers and the profiler will request
/markers?start=<ms>&end=<ms> when a recording is captured.

Routes:
    /reset          prepare the device (unplug, reset stats, sync clock)
    /dump           raw `dumpsys batterystats -c`
    /dump-verbose   raw `dumpsys batterystats`
    /events         decoded string table and reset-relative history codes
    /events.json    resolved battery markers, JSON lines
    /logcat.json    decoded logcat records, JSON lines
    /markers        the assembled marker table (JSON)
    /profile        the profiler's profile with our markers merged in
    /summary        counts and interval statistics for /markers
"""

import math
from datetime import datetime

import requests
from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from adb_markers.batterystats.checkin import parse_checkin
from adb_markers.batterystats.intervals import IntervalReconstructor
from adb_markers.batterystats.resolver import resolve_events
from adb_markers.bridge.adb import AdbBridge, AdbError
from adb_markers.core.config import Settings
from adb_markers.core.models import StringTableLookupError
from adb_markers.core.utils import info
from adb_markers.logs.logcat import parse_logcat
from adb_markers.markers.assembler import markers_from_adb
from adb_markers.markers.profile import profile_with_device_markers
from adb_markers.markers.summary import summarize_markers
from adb_markers.reporting.dumps import (
    format_events,
    format_logcat_jsonl,
    format_markers_jsonl,
)


def _plain_text(body: str, status: int = 200) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def create_app(settings: Settings = None, bridge: AdbBridge = None) -> Flask:
    """Build the Flask app. ``bridge`` defaults to one built from ``settings``."""
    settings = settings or Settings()
    bridge = bridge or AdbBridge.from_settings(settings)

    app = Flask(__name__)
    app.json.sort_keys = False
    CORS(app)

    @app.before_request
    def log_request():
        print(datetime.now(), request.full_path.rstrip("?"), flush=True)

    @app.errorhandler(AdbError)
    @app.errorhandler(StringTableLookupError)
    @app.errorhandler(requests.RequestException)
    @app.errorhandler(ValueError)
    def handle_failure(e):
        print(f"{request.path}: {e}", flush=True)
        return _plain_text(f"{e}\n", status=500)

    @app.route("/reset")
    def reset():
        return _plain_text(bridge.reset())

    @app.route("/dump")
    def dump():
        return _plain_text(bridge.battery_checkin())

    @app.route("/dump-verbose")
    def dump_verbose():
        return _plain_text(bridge.battery_verbose())

    @app.route("/events")
    def events():
        return _plain_text(format_events(parse_checkin(bridge.battery_history())))

    @app.route("/events.json")
    def events_json():
        history = parse_checkin(bridge.battery_history())
        markers = resolve_events(history.events, history.string_table)
        return _plain_text(format_markers_jsonl(markers))

    @app.route("/logcat.json")
    def logcat_json():
        return _plain_text(format_logcat_jsonl(parse_logcat(bridge.logcat())))

    @app.route("/markers")
    def markers():
        origin = request.args.get("start", default=0.0, type=float)
        if ("start" not in request.args and "end" not in request.args) \
                or not math.isfinite(origin):
            print("markers: unexpected case", flush=True)
            return _plain_text("markers: unexpected case\n", status=500)
        return jsonify(markers_from_adb(bridge, origin).to_dict())

    @app.route("/profile")
    def profile():
        return jsonify(profile_with_device_markers(
            bridge, settings.profile_url, timeout=settings.profile_timeout_sec))

    @app.route("/summary")
    def summary():
        origin = request.args.get("start", default=0.0, type=float)
        reconstructor = IntervalReconstructor()
        result = summarize_markers(markers_from_adb(bridge, origin, reconstructor))
        result["pairing"] = reconstructor.get_summary()
        return jsonify(result)

    return app


def run_server(settings: Settings):
    """Serve until interrupted."""
    app = create_app(settings)
    info(f"Ensure devtools.performance.recording.markers.external-url is set to "
         f"http://localhost:{settings.port}/markers in 'about:config'.")
    app.run(host=settings.host, port=settings.port, debug=False)
