"""
Status decoding for earbud manufacturer data.

This sub-package extracts the left, right and case readings from the fixed
byte layout of the payload and keeps the last accepted value of each.
"""
from podstatus.parsing.status.decode import (
    decode_fixed_bytes,
    StatusDecoder,
    MIN_PAYLOAD_LENGTH,
)
from podstatus.parsing.status.latch import (
    LatchState,
    StatusLine,
    MAX_READING,
    PLACEHOLDER_LINE,
)

__all__ = [
    "decode_fixed_bytes",
    "StatusDecoder",
    "MIN_PAYLOAD_LENGTH",
    "LatchState",
    "StatusLine",
    "MAX_READING",
    "PLACEHOLDER_LINE",
]
