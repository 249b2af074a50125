"""32-bit word helpers shared by the generator and the seeders."""

from __future__ import annotations

__all__ = [
    "STATE_WORDS",
    "WORD_MASK",
    "to_int32",
    "to_uint32",
]

STATE_WORDS = 32
WORD_MASK = 0xFFFFFFFF
_SIGN_BIT = 0x80000000


def to_uint32(value: int) -> int:
    return int(value) & WORD_MASK


def to_int32(value: int) -> int:
    word = int(value) & WORD_MASK
    if word & _SIGN_BIT:
        return word - (1 << 32)
    return word
