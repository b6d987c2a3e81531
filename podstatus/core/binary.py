from __future__ import annotations


def high_nibble(byte_value: int) -> int:
    return (byte_value >> 4) & 0x0F


def low_nibble(byte_value: int) -> int:
    return byte_value & 0x0F
