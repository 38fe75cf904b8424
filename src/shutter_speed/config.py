from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from shutter_speed.tables import ALL_CODES
from shutter_speed.value import ShutterSpeed, StopGrouping


@dataclass
class CameraProfile:
    name: str | None = None
    available_codes: frozenset[int] | None = None
    stops: tuple[StopGrouping, ...] = (StopGrouping.ONE_HALF, StopGrouping.ONE_THIRD)

    def accepts(self, value: ShutterSpeed) -> bool:
        if value.stop not in self.stops:
            return False
        if self.available_codes is not None and value.code not in self.available_codes:
            return False
        return True


@dataclass
class AppConfig:
    camera: CameraProfile = field(default_factory=CameraProfile)
    log_level: str = "WARNING"
    log_file: Path | None = None


def _expand_path(value: str | None, base: Path) -> Path | None:
    if value in (None, ""):
        return None
    path = Path(value)
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _as_codes(raw: Any) -> frozenset[int] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ValueError("camera.available_codes must be a list of integer codes")
    codes: set[int] = set()
    for item in raw:
        if isinstance(item, bool) or not isinstance(item, int):
            raise ValueError(f"camera.available_codes entries must be integers, got {item!r}")
        if item not in ALL_CODES:
            raise ValueError(f"camera.available_codes has unknown shutter speed code {item}")
        codes.add(item)
    return frozenset(codes)


def _as_stops(raw: Any) -> tuple[StopGrouping, ...]:
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not raw:
        raise ValueError("camera.stops must be a non-empty list of '1/2' or '1/3'")
    try:
        return tuple(StopGrouping(str(v)) for v in raw)
    except ValueError as exc:
        raise ValueError(f"camera.stops accepts only '1/2' or '1/3': {raw!r}") from exc


def load_config(path: str | Path) -> AppConfig:
    try:
        import yaml  # type: ignore
    except Exception as exc:
        raise RuntimeError("PyYAML is required for config loading. Install with: pip install PyYAML") from exc

    cfg_path = Path(path).expanduser().resolve()
    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"config root must be a mapping: {cfg_path}")

    base = cfg_path.parent
    camera_raw = raw.get("camera") or {}
    if not isinstance(camera_raw, dict):
        raise ValueError("camera section must be a mapping")

    camera = CameraProfile(
        name=camera_raw.get("name"),
        available_codes=_as_codes(camera_raw.get("available_codes")),
        stops=_as_stops(camera_raw.get("stops", ["1/2", "1/3"])),
    )

    return AppConfig(
        camera=camera,
        log_level=str(raw.get("log_level", "WARNING")),
        log_file=_expand_path(raw.get("log_file"), base),
    )
