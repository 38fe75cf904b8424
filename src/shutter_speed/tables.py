from __future__ import annotations

from types import MappingProxyType
from typing import Mapping


# Codes that name a shutter mode rather than a duration.
NAMED_CODES: Mapping[str, int] = MappingProxyType(
    {
        "Auto": 0,
        "Bulb": 12,
        "NotValid": 4294967295,
    }
)

NAME_BY_CODE: Mapping[int, str] = MappingProxyType({code: name for name, code in NAMED_CODES.items()})

HALF_STOP_CODES: Mapping[int, float] = MappingProxyType(
    {
        16: 30.0,
        19: 25.0,
        20: 20.0,
        24: 15.0,
        27: 13.0,
        28: 10.0,
        32: 8.0,
        36: 6.0,
        37: 5.0,
        40: 4.0,
        43: 3.2,
        44: 3.0,
        45: 2.5,
        48: 2.0,
        51: 1.6,
        52: 1.5,
        53: 1.3,
        56: 1.0,
        59: 0.8,
        60: 0.7,
        61: 0.6,
        64: 0.5,
        67: 0.4,
        68: 0.3,
        72: 0.25,
        75: 0.2,
        76: 1 / 6,
        80: 0.125,
        84: 0.1,
        85: 1 / 13,
        88: 1 / 15,
        92: 0.05,
        93: 0.04,
        96: 1 / 30,
        99: 0.025,
        100: 1 / 45,
        101: 0.02,
        104: 1 / 60,
        107: 0.0125,
        108: 1 / 90,
        109: 0.01,
        112: 0.008,
        115: 0.00625,
        116: 1 / 180,
        117: 0.005,
        120: 0.004,
        123: 0.003125,
        124: 1 / 350,
        125: 0.0025,
        128: 0.002,
        131: 0.0015625,
        132: 1 / 750,
        133: 0.00125,
        136: 0.001,
        139: 0.0008,
        140: 1 / 1500,
        141: 0.000625,
        144: 0.0005,
        147: 0.0004,
        148: 1 / 3000,
        149: 0.0003125,
        152: 0.00025,
        155: 0.0002,
        156: 1 / 6000,
        157: 0.00015625,
        160: 0.000125,
    }
)

# Interleaved between half-stop entries; keys never collide with HALF_STOP_CODES.
THIRD_STOP_CODES: Mapping[int, float] = MappingProxyType(
    {
        21: 20.0,
        29: 10.0,
        35: 6.0,
        69: 0.3,
        77: 1 / 6,
        83: 0.1,
        91: 0.05,
    }
)

ALL_CODES: Mapping[int, float] = MappingProxyType({**HALF_STOP_CODES, **THIRD_STOP_CODES})
