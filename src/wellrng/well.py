from __future__ import annotations

from collections.abc import Sequence

import msgspec

from .seeding import expand_seed, genstate
from .words import STATE_WORDS, WORD_MASK, to_int32, to_uint32

# WELL1024a parameters:
# k=1024, w=32, r=32, p=0
# m1=3, m2=24, m3=10
# T0=M1, T1=M3(8), T2=M3(-19), T3=M3(-14)
# T4=M3(-11), T5=M3(-7), T6=M3(-13), T7=M0
_M1 = 3
_M2 = 24
_M3 = 10
_INDEX_MASK = STATE_WORDS - 1

POSITIVE_MASK = 2**31 - 1
SCALE = 1 / (2**31 - 1)


class InvalidStateLength(ValueError):
    pass


class WellState(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """Copy of a generator's state vector together with its state pointer."""

    words: tuple[int, ...]
    pointer: int = 0


def _sar8(word: int) -> int:
    # Sign-replicating shift of a 32-bit word.
    if word & 0x80000000:
        return (word >> 8) | 0xFF000000
    return word >> 8


class Well1024a:
    """WELL1024a generator over a 32-word circular state.

    Two generators built from the same state vector and pointer produce the
    same sequence for the same sequence of calls. Not cryptographically secure,
    and not safe to share between threads without a lock.
    """

    __slots__ = ("_state", "_n", "_bit_word", "_next_bit")

    SCALE = SCALE
    POSITIVE_MASK = POSITIVE_MASK
    STATE_WORDS = STATE_WORDS

    def __init__(self, state: Sequence[int] | None = None) -> None:
        if state is None:
            state = genstate()
        self._state: list[int] = []
        self._n = 0
        self._bit_word = 0
        self._next_bit = 32
        self.set_state(state, 0)

    @classmethod
    def from_seed(cls, seed: int) -> Well1024a:
        return cls(expand_seed(seed))

    @property
    def pointer(self) -> int:
        return self._n

    def get_state(self) -> list[int]:
        """Return a copy of the state vector as signed 32-bit words.

        The state pointer is not included; read `pointer` or use `snapshot()`.
        """
        return [to_int32(word) for word in self._state]

    def set_state(self, state: Sequence[int], pointer: int = 0) -> None:
        """Install a 32-word state vector and state pointer.

        The vector is copied, the pointer is taken modulo 32, and any cached
        bits from `rand_bits()` are discarded.
        """
        if len(state) != STATE_WORDS:
            raise InvalidStateLength(f"state vector must have {STATE_WORDS} words, got {len(state)}")
        words = [to_uint32(word) for word in state]
        self._state = words
        self._n = int(pointer) % STATE_WORDS
        self._bit_word = 0
        self._next_bit = 32

    def snapshot(self) -> WellState:
        return WellState(words=tuple(self.get_state()), pointer=self._n)

    def restore(self, snapshot: WellState) -> None:
        self.set_state(snapshot.words, snapshot.pointer)

    def _step(self) -> int:
        state = self._state
        n = self._n

        z0 = state[(n + 31) & _INDEX_MASK]
        v_m1 = state[(n + _M1) & _INDEX_MASK]
        v_m2 = state[(n + _M2) & _INDEX_MASK]
        v_m3 = state[(n + _M3) & _INDEX_MASK]
        z1 = z0 ^ v_m1 ^ _sar8(v_m1)
        z2 = (v_m2 ^ (v_m2 << 19) ^ v_m3 ^ (v_m3 << 14)) & WORD_MASK

        state[n] = z1 ^ z2
        n = (n + 31) & _INDEX_MASK
        self._n = n
        word = (z0 ^ (z0 << 11) ^ z1 ^ (z1 << 7) ^ z2 ^ (z2 << 13)) & WORD_MASK
        state[n] = word
        return word

    def rand(self, include_negative: bool = False) -> int:
        """Return a random int on [0, 2^31-1], or [-2^31, 2^31-1] with `include_negative`."""
        word = self._step()
        if include_negative:
            return to_int32(word)
        return word & POSITIVE_MASK

    def random(self, include_negative: bool = False) -> float:
        """Return a random float on [0, 1), or (-1, 1) with `include_negative`.

        Both ranges use the same scale, so the signed range is slightly lopsided.
        """
        # rand() == 2^31-1 maps to exactly 1.0; kept for sequence compatibility.
        return self.rand(include_negative) * SCALE

    def rand_int(self, a: int, b: int) -> int:
        """Return a random int on the inclusive range [a, b] (modulo reduction)."""
        if b < a:
            raise ValueError(f"empty range: [{a}, {b}]")
        dist = 1 + b - a
        return (self.rand() % dist) + a

    def rand_bits(self, bits: int) -> int:
        """Return `bits` random bits, reusing one generator word across calls.

        Much cheaper than `rand_int()` for powers of two. Switching widths
        between calls drops whatever is left of the cached word on refill.
        """
        if not 1 <= bits <= 31:
            raise ValueError(f"bits must be in 1..31, got {bits}")
        mask = (1 << bits) - 1
        unshift = 0
        if self._next_bit + bits <= 32:
            unshift = self._next_bit
            self._next_bit += bits
        else:
            self._bit_word = self._step()
            self._next_bit = bits
        return (self._bit_word >> unshift) & mask

    randInt = rand_int
    randBits = rand_bits


__all__ = [
    "InvalidStateLength",
    "POSITIVE_MASK",
    "SCALE",
    "Well1024a",
    "WellState",
]
