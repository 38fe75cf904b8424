from __future__ import annotations

from dataclasses import dataclass, field
import enum
import logging
from typing import Any, Callable, Mapping

import numpy as np

from shutter_speed.tables import ALL_CODES, HALF_STOP_CODES, NAME_BY_CODE, NAMED_CODES, THIRD_STOP_CODES
from shutter_speed.utils.formatting import format_seconds_label, parse_seconds_label


logger = logging.getLogger(__name__)

_MATCH_TOLERANCE_S = 1e-5
_THIRD_STOP_SUFFIX = " (1/3)"


class StopGrouping(str, enum.Enum):
    ONE_HALF = "1/2"
    ONE_THIRD = "1/3"


ShutterFilter = Callable[["ShutterSpeed"], bool]


@dataclass(frozen=True)
class ShutterSpeed:
    """Shutter-speed setting identified by a camera firmware code.

    ``seconds``, ``label`` and ``stop`` are derived from ``code`` once at
    construction. Codes missing from every table are not an error: they give
    zero seconds and an empty label.
    """

    code: int
    seconds: float = field(init=False, compare=False)
    label: str = field(init=False, compare=False)
    stop: StopGrouping = field(init=False, compare=False)

    def __post_init__(self) -> None:
        name = NAME_BY_CODE.get(self.code)
        if name is not None:
            seconds = 0.0
            label = name
        elif self.code in THIRD_STOP_CODES:
            seconds = THIRD_STOP_CODES[self.code]
            label = format_seconds_label(seconds) + _THIRD_STOP_SUFFIX
        else:
            seconds = HALF_STOP_CODES.get(self.code, 0.0)
            label = format_seconds_label(seconds)
            if not label:
                logger.debug("unknown shutter speed code %s", self.code)

        stop = StopGrouping.ONE_THIRD if self.code in THIRD_STOP_CODES else StopGrouping.ONE_HALF
        object.__setattr__(self, "seconds", seconds)
        object.__setattr__(self, "label", label)
        object.__setattr__(self, "stop", stop)

    @classmethod
    def from_code(cls, code: int) -> "ShutterSpeed":
        return cls(int(code))

    @classmethod
    def for_label(cls, label: str) -> "ShutterSpeed | None":
        """Reverse lookup of a label produced by ``label`` (or typed by a user).

        Mode names (``"Bulb"``) match exactly. Numeric labels must land within
        1e-5 s of a table entry; a ``1/3`` marker after the number searches the
        third-stop table instead of the half-stop one.
        """

        if label in NAMED_CODES:
            return cls(NAMED_CODES[label])

        parsed = parse_seconds_label(label)
        if parsed is None:
            logger.debug("unparseable shutter speed label %r", label)
            return None

        table = THIRD_STOP_CODES if parsed.one_third else HALF_STOP_CODES
        code = _match_code(table, parsed.seconds)
        if code is None:
            logger.debug("no shutter speed code for label %r (%.6gs)", label, parsed.seconds)
            return None
        return cls(code)

    @classmethod
    def find_nearest(
        cls,
        value_or_label: int | str,
        accept: ShutterFilter | None = None,
    ) -> "ShutterSpeed | None":
        """Closest known shutter speed to a code or label.

        ``accept`` limits the candidates, e.g. to the speeds a body supports.
        Returns None for an unparseable label or when nothing passes ``accept``.
        A numeric label targets its parsed seconds even without an exact table
        entry, so ``"1/110"`` finds ``1/100`` instead of returning None.
        """

        if isinstance(value_or_label, str):
            seconds = _label_seconds(value_or_label)
            if seconds is None:
                return None
        else:
            seconds = cls(int(value_or_label)).seconds
        return find_nearest_seconds(seconds, accept)

    def as_number(self) -> int:
        return self.code

    def as_label(self) -> str:
        return self.label

    def __int__(self) -> int:
        return self.code

    def __str__(self) -> str:
        return self.label

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "value": int(self.code),
            "seconds": float(self.seconds),
            "stop": self.stop.value,
        }


_CANDIDATE_CODES = np.fromiter(ALL_CODES.keys(), dtype=np.int64, count=len(ALL_CODES))
_CANDIDATE_SECONDS = np.fromiter(ALL_CODES.values(), dtype=np.float64, count=len(ALL_CODES))


def _match_code(table: Mapping[int, float], seconds: float) -> int | None:
    for code, table_seconds in table.items():
        if abs(table_seconds - seconds) < _MATCH_TOLERANCE_S:
            return code
    return None


def _label_seconds(label: str) -> float | None:
    if label in NAMED_CODES:
        return 0.0
    parsed = parse_seconds_label(label)
    if parsed is None:
        logger.debug("unparseable shutter speed label %r", label)
        return None
    return parsed.seconds


def find_nearest_seconds(seconds: float, accept: ShutterFilter | None = None) -> ShutterSpeed | None:
    """Nearest known shutter speed to a duration in seconds.

    Candidates are scanned in ``ALL_CODES`` order (half-stop entries, then
    third-stop); on equal distance the earlier candidate wins.
    """

    differences = np.abs(_CANDIDATE_SECONDS - float(seconds))
    candidates = np.arange(len(_CANDIDATE_CODES))
    if accept is not None:
        mask = np.fromiter(
            (bool(accept(ShutterSpeed(int(code)))) for code in _CANDIDATE_CODES),
            dtype=bool,
            count=len(_CANDIDATE_CODES),
        )
        candidates = np.flatnonzero(mask)
        if candidates.size == 0:
            logger.debug("no shutter speed candidate accepted for %.6gs", seconds)
            return None

    # argmin over accepted indices only; an infinite target makes every difference inf.
    best = int(candidates[np.argmin(differences[candidates])])
    return ShutterSpeed(int(_CANDIDATE_CODES[best]))


def known_values(stop: StopGrouping | str | None = None) -> list[ShutterSpeed]:
    values = [ShutterSpeed(code) for code in ALL_CODES]
    if stop is None:
        return values
    wanted = StopGrouping(stop)
    return [v for v in values if v.stop is wanted]
