from __future__ import annotations

import random

from .words import STATE_WORDS, WORD_MASK, to_int32

# MSVCRT `rand()` LCG step: seed = seed * 214013 + 2531011
_LCG_MUL = 0x343FD
_LCG_ADD = 0x269EC3


def expand_seed(seed: int) -> list[int]:
    """Deterministically build a 32-word state vector from a single integer.

    Each word is the full 32-bit LCG state after one more step, not the
    15-bit `rand()` slice.
    """
    state = int(seed) & WORD_MASK
    words: list[int] = []
    for _ in range(STATE_WORDS):
        state = (state * _LCG_MUL + _LCG_ADD) & WORD_MASK
        words.append(to_int32(state))
    return words


def genstate() -> list[int]:
    """Draw a state vector from the host `random` module.

    Not reproducible; only meant for convenience seeding.
    """
    return [to_int32(int(random.random() * 2**32)) for _ in range(STATE_WORDS)]


__all__ = [
    "expand_seed",
    "genstate",
]
