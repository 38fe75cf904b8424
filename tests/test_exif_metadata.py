from __future__ import annotations

from pathlib import Path

from shutter_speed import exif_metadata
from shutter_speed.exif_metadata import ExposureMetadata, _ratio_like_to_float, nearest_shutter_speed, snap_exposure


class _Ratio:
    def __init__(self, num: int, den: int) -> None:
        self.num = num
        self.den = den


class _Tag:
    def __init__(self, values: list[_Ratio]) -> None:
        self.values = values


def test_ratio_like_to_float_ratio_object() -> None:
    assert _ratio_like_to_float(_Ratio(1, 50)) == 0.02
    assert _ratio_like_to_float(_Ratio(1, 0)) is None


def test_ratio_like_to_float_tag_wrapper() -> None:
    assert _ratio_like_to_float(_Tag([_Ratio(1, 125)])) == 0.008
    assert _ratio_like_to_float([_Ratio(4, 1)]) == 4.0
    assert _ratio_like_to_float([]) is None


def test_ratio_like_to_float_plain_values() -> None:
    assert _ratio_like_to_float("0.5") == 0.5
    assert _ratio_like_to_float("1/250") == 0.004
    assert _ratio_like_to_float("1/0") is None
    assert _ratio_like_to_float("fast") is None


def test_extract_exposure_metadata_falls_back_to_exiftool(monkeypatch, tmp_path: Path) -> None:
    calls: list[str] = []

    def fake_exifread(path: Path) -> ExposureMetadata:
        calls.append("exifread")
        return ExposureMetadata()

    def fake_exiftool(path: Path) -> ExposureMetadata:
        calls.append("exiftool")
        return ExposureMetadata(exposure_time_s=0.008, source="exiftool")

    monkeypatch.setattr(exif_metadata, "_extract_with_exifread", fake_exifread)
    monkeypatch.setattr(exif_metadata, "_extract_with_exiftool", fake_exiftool)

    md = exif_metadata.extract_exposure_metadata(tmp_path / "frame.NEF")
    assert calls == ["exifread", "exiftool"]
    assert md.exposure_time_s == 0.008

    calls.clear()
    exif_metadata.extract_exposure_metadata(tmp_path / "frame.CR3")
    assert calls == ["exiftool"]


def test_extract_with_exiftool_missing_binary(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(exif_metadata.shutil, "which", lambda name: None)
    assert exif_metadata._extract_with_exiftool(tmp_path / "frame.CR3") == ExposureMetadata()


def test_extract_with_exifread_unreadable_file(tmp_path: Path) -> None:
    assert exif_metadata._extract_with_exifread(tmp_path / "missing.jpg") == ExposureMetadata()


def test_nearest_shutter_speed_snaps_exposure(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        exif_metadata,
        "extract_exposure_metadata",
        lambda path: ExposureMetadata(exposure_time_s=1 / 120, source="exifread"),
    )
    speed = nearest_shutter_speed(tmp_path / "frame.jpg")
    assert speed is not None
    assert speed.label == "1/125"

    speed = nearest_shutter_speed(tmp_path / "frame.jpg", lambda v: v.code != 112)
    assert speed is not None
    assert speed.label == "1/100"


def test_nearest_shutter_speed_without_exposure(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(exif_metadata, "extract_exposure_metadata", lambda path: ExposureMetadata())
    assert nearest_shutter_speed(tmp_path / "frame.jpg") is None


def test_snap_exposure() -> None:
    md = ExposureMetadata(exposure_time_s=0.0166, source="exiftool")
    speed = snap_exposure(md)
    assert speed is not None
    assert speed.label == "1/60"

    speed = snap_exposure(md, lambda v: v.stop.value == "1/3")
    assert speed is not None
    assert speed.code == 91

    assert snap_exposure(ExposureMetadata()) is None
