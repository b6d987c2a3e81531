"""
Decoder for the fixed-layout status bytes carried in manufacturer data.

The payload that follows the marker company ID holds the bud readings in
byte 6 (left in the high nibble, right in the low nibble) and the case
reading in the low nibble of byte 7.
"""
from __future__ import annotations

from typing import Optional, TextIO

from podstatus.core.binary import high_nibble, low_nibble
from podstatus.parsing.status.latch import PLACEHOLDER_LINE, LatchState, StatusLine

# Byte offsets of the readings inside the payload.
BUDS_OFFSET = 6
CASE_OFFSET = 7

# Shortest payload that contains both offsets.
MIN_PAYLOAD_LENGTH = CASE_OFFSET + 1


def decode_fixed_bytes(data: bytes, marker_found: bool, state: LatchState) -> Optional[StatusLine]:
    """
    Extract the three readings from ``data`` and latch them into ``state``.

    Args:
        data: Raw payload bytes.
        marker_found: Whether the marker value preceded this payload.
        state: The latch to update.

    Returns:
        The post-update status line, or ``None`` when the payload is not
        eligible (no marker, empty, or shorter than ``MIN_PAYLOAD_LENGTH``).
        The latch is untouched in that case.
    """
    if not marker_found or len(data) < MIN_PAYLOAD_LENGTH:
        return None
    buds = data[BUDS_OFFSET]
    return state.accept(
        left=high_nibble(buds),
        right=low_nibble(buds),
        case=low_nibble(data[CASE_OFFSET]),
    )


class StatusDecoder:
    """Owns the latch and writes one flushed line per accepted payload."""

    def __init__(self, state: LatchState, sink: TextIO) -> None:
        self.state = state
        self.sink = sink

    def decode(self, data: bytes, marker_found: bool) -> Optional[StatusLine]:
        line = decode_fixed_bytes(data, marker_found, self.state)
        if line is not None:
            self._write(line.format())
        return line

    def write_placeholder(self) -> None:
        self._write(PLACEHOLDER_LINE)

    def _write(self, text: str) -> None:
        self.sink.write(text + "\n")
        self.sink.flush()
