from __future__ import annotations

import pytest

from shutter_speed.tables import ALL_CODES
from shutter_speed.value import ShutterSpeed, StopGrouping, find_nearest_seconds


def _brute_force_nearest(seconds: float, accept=None) -> int | None:
    best: tuple[float, int] | None = None
    for code, candidate in ALL_CODES.items():
        if accept is not None and not accept(ShutterSpeed(code)):
            continue
        difference = abs(candidate - seconds)
        if best is None or difference < best[0]:
            best = (difference, code)
    return None if best is None else best[1]


@pytest.mark.parametrize("seconds", [0.009, 0.0001, 0.35, 1.1, 7.0, 45.0, 1 / 100, 1 / 7, 0.0])
def test_find_nearest_seconds_matches_brute_force(seconds: float) -> None:
    found = find_nearest_seconds(seconds)
    assert found is not None
    assert found.code == _brute_force_nearest(seconds)


def test_find_nearest_by_code_returns_exact_entry() -> None:
    found = ShutterSpeed.find_nearest(112)
    assert found is not None
    assert found.code == 112


def test_find_nearest_tie_prefers_half_stop_entry() -> None:
    # 21 (third-stop) and 20 (half-stop) both hold 20 seconds.
    found = ShutterSpeed.find_nearest(21)
    assert found is not None
    assert found.code == 20


def test_find_nearest_by_label() -> None:
    found = ShutterSpeed.find_nearest("1/110")
    assert found is not None
    assert found.label == "1/100"

    found = ShutterSpeed.find_nearest("1/8000")
    assert found is not None
    assert found.code == 160


def test_find_nearest_unparseable_label() -> None:
    assert ShutterSpeed.find_nearest("fast") is None


def test_find_nearest_named_code_targets_zero_seconds() -> None:
    found = ShutterSpeed.find_nearest("Bulb")
    assert found is not None
    assert found.code == 160

    found = ShutterSpeed.find_nearest(0)
    assert found is not None
    assert found.code == 160


def test_find_nearest_filter_rejecting_true_nearest() -> None:
    def accept(value: ShutterSpeed) -> bool:
        return value.code != 112

    found = find_nearest_seconds(0.008, accept)
    assert found is not None
    assert found.code != 112
    assert found.code == _brute_force_nearest(0.008, accept)


def test_find_nearest_filter_by_stop() -> None:
    found = ShutterSpeed.find_nearest(68, lambda v: v.stop is StopGrouping.ONE_THIRD)
    assert found is not None
    assert found.code == 69


def test_find_nearest_filter_rejecting_everything() -> None:
    assert ShutterSpeed.find_nearest(56, lambda v: False) is None


def test_find_nearest_infinite_target_respects_filter() -> None:
    found = find_nearest_seconds(float("inf"), lambda v: v.code != 16)
    assert found is not None
    assert found.code != 16

    found = ShutterSpeed.find_nearest("9" * 400, lambda v: v.stop is StopGrouping.ONE_THIRD)
    assert found is not None
    assert found.stop is StopGrouping.ONE_THIRD
    assert found.code == 21
