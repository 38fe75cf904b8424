from __future__ import annotations

from dataclasses import dataclass
import re


# Values conceptually equal to 0.3 can land just under it in float math.
_DECIMAL_THRESHOLD_S = 0.2999

_LABEL_RE = re.compile(r"(\d+(?:\.\d+)?)(?:\s*/\s*(\d+))?(?:\s+(.*))?", re.ASCII)
_TRAILING_ZERO_RE = re.compile(r"\.0+$")


@dataclass(frozen=True)
class ParsedLabel:
    seconds: float
    one_third: bool


def format_seconds_label(seconds: float) -> str:
    if seconds > _DECIMAL_THRESHOLD_S:
        return _TRAILING_ZERO_RE.sub("", f"{seconds:.1f}")
    if seconds > 0.0:
        return f"1/{round(1.0 / seconds)}"
    return ""


def parse_seconds_label(label: str) -> ParsedLabel | None:
    """Parse a numeric shutter label such as ``"1/125"``, ``"2.5"`` or ``"1/6 (1/3)"``.

    The numerator may be decimal, the denominator is an integer, and any text
    after whitespace is free-form; a ``1/3`` marker in that text flags a
    third-stop label. Returns None when no number is present or the
    denominator is zero.
    """

    m = _LABEL_RE.search(label)
    if not m:
        return None

    seconds = float(m.group(1))
    if m.group(2):
        denominator = float(m.group(2))
        if denominator == 0.0:
            return None
        seconds /= denominator
    return ParsedLabel(seconds=seconds, one_third="1/3" in (m.group(3) or ""))
