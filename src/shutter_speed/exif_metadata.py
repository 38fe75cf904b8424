from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
import shutil
import subprocess
from typing import Any

from shutter_speed.value import ShutterFilter, ShutterSpeed, find_nearest_seconds


logger = logging.getLogger(__name__)

# exifread handles TIFF-structured containers; everything else goes to exiftool.
_EXIFREAD_SUFFIXES = {".jpg", ".jpeg", ".tif", ".tiff", ".cr2", ".dng", ".nef", ".arw", ".rw2", ".orf", ".pef"}


@dataclass
class ExposureMetadata:
    exposure_time_s: float | None = None
    source: str | None = None


def _ratio_like_to_float(value: Any) -> float | None:
    if value is None:
        return None

    # exifread wraps tag values in a list of Ratio objects.
    tag_values = getattr(value, "values", None)
    if tag_values is not None and not callable(tag_values):
        value = tag_values
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        value = value[0]

    if hasattr(value, "num") and hasattr(value, "den"):
        den = float(getattr(value, "den", 0) or 0)
        if den == 0.0:
            return None
        return float(getattr(value, "num", 0)) / den

    if isinstance(value, str) and "/" in value:
        num, _, den = value.partition("/")
        try:
            den_f = float(den)
            return float(num) / den_f if den_f != 0.0 else None
        except ValueError:
            return None

    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _positive(value: float | None) -> float | None:
    if value is None or value <= 0:
        return None
    return value


def _extract_with_exifread(path: Path) -> ExposureMetadata:
    import exifread  # type: ignore

    try:
        with path.open("rb") as f:
            tags = exifread.process_file(f, details=False)
    except OSError:
        logger.debug("exifread could not read %s", path, exc_info=True)
        return ExposureMetadata()

    exposure = _positive(_ratio_like_to_float(tags.get("EXIF ExposureTime")))
    if exposure is None:
        return ExposureMetadata()
    return ExposureMetadata(exposure_time_s=exposure, source="exifread")


def _extract_with_exiftool(path: Path) -> ExposureMetadata:
    exiftool = shutil.which("exiftool")
    if exiftool is None:
        return ExposureMetadata()

    proc = subprocess.run(
        [exiftool, "-j", "-n", "-ExposureTime", str(path)],
        capture_output=True,
        text=True,
        check=False,
    )
    if proc.returncode != 0:
        logger.debug("exiftool failed for %s: %s", path, proc.stderr.strip())
        return ExposureMetadata()

    try:
        rows = json.loads(proc.stdout)
    except json.JSONDecodeError:
        logger.debug("exiftool returned non-JSON output for %s", path)
        return ExposureMetadata()
    if not rows:
        return ExposureMetadata()

    exposure = _positive(_ratio_like_to_float(rows[0].get("ExposureTime")))
    if exposure is None:
        return ExposureMetadata()
    return ExposureMetadata(exposure_time_s=exposure, source="exiftool")


def extract_exposure_metadata(path: Path) -> ExposureMetadata:
    """Read the exposure time of an image file.

    Preference order:
    1) Python exifread for TIFF-structured formats
    2) exiftool CLI (if installed)
    """

    if path.suffix.lower() in _EXIFREAD_SUFFIXES:
        md = _extract_with_exifread(path)
        if md.exposure_time_s is not None:
            return md

    return _extract_with_exiftool(path)


def snap_exposure(md: ExposureMetadata, accept: ShutterFilter | None = None) -> ShutterSpeed | None:
    if md.exposure_time_s is None:
        return None
    speed = find_nearest_seconds(md.exposure_time_s, accept)
    if speed is not None:
        logger.debug("exposure %.6gs -> %s (code %s)", md.exposure_time_s, speed.label, speed.code)
    return speed


def nearest_shutter_speed(path: Path, accept: ShutterFilter | None = None) -> ShutterSpeed | None:
    md = extract_exposure_metadata(path)
    if md.exposure_time_s is None:
        logger.info("no exposure time found in %s", path)
        return None
    return snap_exposure(md, accept)
