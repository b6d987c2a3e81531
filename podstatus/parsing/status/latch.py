"""
Latched status values for the left bud, right bud and charging case.

Readings arrive over a lossy radio link, so a value outside the accepted range
never replaces the last good one. The latch keeps one slot per field.
"""
from __future__ import annotations

from dataclasses import dataclass

# Highest raw reading accepted into the latch; raw values are nibbles (0-15).
MAX_READING = 10

# Scale from a raw reading to the rendered percentage.
READING_SCALE = 10

# Line written before any device data has been seen.
PLACEHOLDER_LINE = "L: NA R: NA C: NA"


@dataclass(frozen=True)
class StatusLine:
    """
    A snapshot of the three latched readings.

    Attributes:
        left: Raw latched reading for the left bud (0-10).
        right: Raw latched reading for the right bud (0-10).
        case: Raw latched reading for the case (0-10).
    """
    left: int
    right: int
    case: int

    def as_percentages(self) -> tuple[int, int, int]:
        return (
            self.left * READING_SCALE,
            self.right * READING_SCALE,
            self.case * READING_SCALE,
        )

    def format(self) -> str:
        left, right, case = self.as_percentages()
        return f"L: {left} R: {right} C: {case}"


@dataclass
class LatchState:
    left: int = 0
    right: int = 0
    case: int = 0

    def accept(self, left: int, right: int, case: int) -> StatusLine:
        """
        Apply a new set of raw readings.

        Each reading replaces its slot only when it is ``<= MAX_READING``;
        out-of-range readings are dropped and the previous value is kept.

        Returns:
            The status line built from the post-update latch values.
        """
        if left <= MAX_READING:
            self.left = left
        if right <= MAX_READING:
            self.right = right
        if case <= MAX_READING:
            self.case = case
        return self.status_line()

    def status_line(self) -> StatusLine:
        return StatusLine(left=self.left, right=self.right, case=self.case)
