"""
CLI entry point for adb-markers.

Usage:
    python -m adb_markers serve [--host H] [--port P] [--config FILE]
    python -m adb_markers decode --checkin FILE [--logcat FILE] [--start MS]
                                 [--format FORMAT] [--output FILE] [--verbose]
    python -m adb_markers reset [--config FILE]
"""

import argparse
import json
import os
import sys
import time

from adb_markers.batterystats.checkin import CheckinDecoder
from adb_markers.batterystats.intervals import IntervalReconstructor
from adb_markers.batterystats.resolver import resolve_events
from adb_markers.bridge.adb import AdbBridge, AdbError
from adb_markers.core.config import load_settings
from adb_markers.core.models import StringTableLookupError
from adb_markers.core.utils import format_absolute_time
from adb_markers.logs.logcat import LogcatDecoder
from adb_markers.markers.assembler import assemble_markers
from adb_markers.markers.summary import summarize_markers
from adb_markers.reporting.dumps import (
    format_events,
    format_logcat_jsonl,
    format_markers_jsonl,
)

DECODE_FORMATS = ["markers", "events", "events-json", "logcat-json", "summary"]


def _read(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def _decode(args) -> str:
    """Render the requested view of the captured dumps."""

    def log(msg: str):
        if args.verbose:
            print(msg, file=sys.stderr)

    t0 = time.time()
    checkin_text = _read(args.checkin)
    logcat_text = _read(args.logcat) if args.logcat else None

    if args.format == "events":
        return format_events(CheckinDecoder().decode(checkin_text))

    if args.format == "events-json":
        history = CheckinDecoder().decode(checkin_text)
        log(f"  Checkin: {history.metadata}")
        if history.reset_time is not None:
            log(f"  History reset at {format_absolute_time(history.reset_time / 1000)} UTC")
        return format_markers_jsonl(resolve_events(history.events, history.string_table))

    if args.format == "logcat-json":
        decoder = LogcatDecoder()
        events = decoder.decode(logcat_text or "")
        log(f"  logcat: {decoder.get_metadata()}")
        return format_logcat_jsonl(events)

    reconstructor = IntervalReconstructor()
    table = assemble_markers(checkin_text, logcat_text, args.start, reconstructor)
    log(f"  Assembled {len(table.markers)} markers in {time.time()-t0:.2f}s")
    log(f"  Pairing: {reconstructor.get_summary()}")

    if args.format == "summary":
        summary = summarize_markers(table)
        summary["pairing"] = reconstructor.get_summary()
        return json.dumps(summary, indent=2)

    return json.dumps(table.to_dict())


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="adb_markers",
        description="Turn Android battery history and logcat into profiler markers",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- serve command ---
    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve markers to the Firefox profiler",
    )
    serve_parser.add_argument("--host", default=None,
                              help="Interface to bind (default: 0.0.0.0)")
    serve_parser.add_argument("--port", "-p", type=int, default=None,
                              help="Port to listen on (default: $PORT or 2222)")
    serve_parser.add_argument("--config", "-c", default=None,
                              help="Path to a YAML settings file")

    # --- decode command ---
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode captured dumps without a device",
    )
    decode_parser.add_argument(
        "--checkin", required=True,
        help="Output of `adb shell dumpsys batterystats -c --history`",
    )
    decode_parser.add_argument(
        "--logcat", default=None,
        help="Output of `adb logcat --format=epoch,UTC,usec,printable,long`",
    )
    decode_parser.add_argument(
        "--start", "-s", type=float, default=0.0,
        help="Origin in device epoch milliseconds (default: 0)",
    )
    decode_parser.add_argument(
        "--format", "-f", default="markers", choices=DECODE_FORMATS,
        help="What to print (default: markers)",
    )
    decode_parser.add_argument("--output", "-o", default=None,
                               help="Write to this file instead of stdout")
    decode_parser.add_argument("--verbose", "-v", action="store_true",
                               help="Print decode statistics")

    # --- reset command ---
    reset_parser = subparsers.add_parser(
        "reset",
        help="Reset battery stats and sync the device clock",
    )
    reset_parser.add_argument("--config", "-c", default=None,
                              help="Path to a YAML settings file")

    args = parser.parse_args(argv)

    if args.command == "serve":
        from adb_markers.server.app import run_server

        settings = load_settings(args.config)
        if args.host:
            settings.host = args.host
        if args.port:
            settings.port = args.port
        run_server(settings)

    elif args.command == "decode":
        for path in (args.checkin, args.logcat):
            if path and not os.path.exists(path):
                print(f"Error: File not found: {path}", file=sys.stderr)
                sys.exit(1)
        try:
            output = _decode(args)
        except (StringTableLookupError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        if args.output:
            with open(args.output, "w") as f:
                f.write(output)
            print(f"Wrote {args.output}", file=sys.stderr)
        else:
            print(output)

    elif args.command == "reset":
        bridge = AdbBridge.from_settings(load_settings(args.config))
        try:
            print(bridge.reset())
        except AdbError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
