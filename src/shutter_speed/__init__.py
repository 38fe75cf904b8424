from .tables import ALL_CODES, HALF_STOP_CODES, NAMED_CODES, THIRD_STOP_CODES
from .value import ShutterFilter, ShutterSpeed, StopGrouping, find_nearest_seconds, known_values

__all__ = [
    "ALL_CODES",
    "HALF_STOP_CODES",
    "NAMED_CODES",
    "THIRD_STOP_CODES",
    "ShutterFilter",
    "ShutterSpeed",
    "StopGrouping",
    "find_nearest_seconds",
    "known_values",
]
