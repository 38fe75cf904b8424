from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any

from shutter_speed.config import AppConfig, CameraProfile, load_config
from shutter_speed.utils.logging_utils import configure_logging
from shutter_speed.value import ShutterFilter, ShutterSpeed, StopGrouping, find_nearest_seconds, known_values


logger = logging.getLogger(__name__)

_STOP_CHOICES = [s.value for s in StopGrouping]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shutter-speed")
    parser.add_argument("--config", default=None, help="Path to YAML camera profile config")
    parser.add_argument("--log-level", default=None, help="Override config log level")
    sub = parser.add_subparsers(dest="command", required=True)

    decode = sub.add_parser("decode", help="Show label and duration for a firmware code")
    decode.add_argument("code", type=int, help="Shutter speed code")
    decode.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    parse = sub.add_parser("parse", help="Look up the code for a label such as 1/125 or Bulb")
    parse.add_argument("label", help="Shutter speed label")
    parse.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    nearest = sub.add_parser("nearest", help="Find the closest known shutter speed")
    nearest.add_argument("target", help="Code, label, or (with --seconds) a duration")
    nearest.add_argument("--seconds", action="store_true", help="Treat target as a duration in seconds")
    nearest.add_argument("--stop", choices=_STOP_CHOICES, default=None, help="Restrict to one stop grouping")
    nearest.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    table = sub.add_parser("table", help="List every known shutter speed")
    table.add_argument("--stop", choices=_STOP_CHOICES, default=None, help="Restrict to one stop grouping")
    table.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    exif = sub.add_parser("exif", help="Snap an image's EXIF exposure time to a known shutter speed")
    exif.add_argument("input", help="Image or RAW file path")
    exif.add_argument("--stop", choices=_STOP_CHOICES, default=None, help="Restrict to one stop grouping")
    exif.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    return parser


def _load_app_config(args: argparse.Namespace) -> AppConfig:
    config = load_config(args.config) if args.config else AppConfig()
    configure_logging(args.log_level or config.log_level, config.log_file)
    return config


def _profile_filter(profile: CameraProfile, stop: str | None) -> ShutterFilter:
    if stop is None:
        return profile.accepts
    wanted = StopGrouping(stop)
    return lambda value: value.stop is wanted and profile.accepts(value)


def _print_value(value: ShutterSpeed, as_json: bool) -> None:
    if as_json:
        print(json.dumps(value.to_json_dict(), indent=2))
        return
    label = value.label or "(unknown)"
    print(f"{value.code:>10}  {label:<12} {value.seconds:.6g}s  stop={value.stop.value}")


def _cmd_decode(args: argparse.Namespace) -> int:
    _load_app_config(args)
    _print_value(ShutterSpeed.from_code(args.code), args.json)
    return 0


def _cmd_parse(args: argparse.Namespace) -> int:
    _load_app_config(args)
    value = ShutterSpeed.for_label(args.label)
    if value is None:
        print(f"no shutter speed matches label {args.label!r}", file=sys.stderr)
        return 1
    _print_value(value, args.json)
    return 0


def _cmd_nearest(args: argparse.Namespace) -> int:
    config = _load_app_config(args)
    accept = _profile_filter(config.camera, args.stop)

    target: Any = args.target
    if args.seconds:
        value = find_nearest_seconds(float(target), accept)
    else:
        if target.lstrip("-").isdigit():
            target = int(target)
        value = ShutterSpeed.find_nearest(target, accept)

    if value is None:
        print(f"no shutter speed near {args.target!r}", file=sys.stderr)
        return 1
    _print_value(value, args.json)
    return 0


def _cmd_table(args: argparse.Namespace) -> int:
    _load_app_config(args)
    values = known_values(args.stop)
    if args.json:
        print(json.dumps([v.to_json_dict() for v in values], indent=2))
        return 0
    for value in values:
        _print_value(value, False)
    return 0


def _cmd_exif(args: argparse.Namespace) -> int:
    from shutter_speed.exif_metadata import extract_exposure_metadata, snap_exposure

    config = _load_app_config(args)
    input_path = Path(args.input).expanduser().resolve()
    md = extract_exposure_metadata(input_path)
    if md.exposure_time_s is None:
        print(f"no exposure time found in {input_path}", file=sys.stderr)
        return 1

    value = snap_exposure(md, _profile_filter(config.camera, args.stop))
    if value is None:
        print(f"no shutter speed near {md.exposure_time_s:.6g}s", file=sys.stderr)
        return 1

    if args.json:
        payload = {
            "input_path": str(input_path),
            "exposure_time_s": md.exposure_time_s,
            "metadata_source": md.source,
            "shutter_speed": value.to_json_dict(),
        }
        print(json.dumps(payload, indent=2))
        return 0

    print(f"Input: {input_path}")
    print(f"Exposure time: {md.exposure_time_s:.6g}s (via {md.source})")
    _print_value(value, False)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "decode":
            return _cmd_decode(args)
        if args.command == "parse":
            return _cmd_parse(args)
        if args.command == "nearest":
            return _cmd_nearest(args)
        if args.command == "table":
            return _cmd_table(args)
        if args.command == "exif":
            return _cmd_exif(args)

        parser.error(f"unknown command: {args.command}")
        return 2
    except Exception as exc:
        logger.exception("fatal error")
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
