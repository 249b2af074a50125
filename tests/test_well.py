from __future__ import annotations

import random

import pytest

from wellrng.seeding import expand_seed
from wellrng.well import POSITIVE_MASK, SCALE, InvalidStateLength, Well1024a, WellState


def _mixed_calls(rng: Well1024a) -> list[int | float]:
    out: list[int | float] = []
    for idx in range(200):
        match idx % 6:
            case 0:
                out.append(rng.rand())
            case 1:
                out.append(rng.rand(True))
            case 2:
                out.append(rng.random())
            case 3:
                out.append(rng.rand_int(-5, 17))
            case 4:
                out.append(rng.rand_bits(1 + idx % 31))
            case _:
                out.append(rng.random(True))
    return out


def test_constants() -> None:
    assert POSITIVE_MASK == 2**31 - 1
    assert SCALE == 1 / (2**31 - 1)
    assert Well1024a.SCALE == SCALE
    assert Well1024a.POSITIVE_MASK == POSITIVE_MASK
    assert Well1024a.STATE_WORDS == 32


def test_identical_seeds_produce_identical_mixed_sequences() -> None:
    seed = expand_seed(0xBEEF)
    assert _mixed_calls(Well1024a(seed)) == _mixed_calls(Well1024a(seed))


def test_set_state_with_pointer_matches_between_instances() -> None:
    seed = expand_seed(42)
    a = Well1024a(expand_seed(1))
    b = Well1024a(expand_seed(2))
    a.set_state(seed, 17)
    b.set_state(seed, 17 + 32 * 3)
    assert a.pointer == b.pointer == 17
    assert _mixed_calls(a) == _mixed_calls(b)


def test_negative_pointer_is_reduced_modulo_32() -> None:
    rng = Well1024a(expand_seed(3))
    rng.set_state(expand_seed(3), -1)
    assert rng.pointer == 31


def test_implicit_seeding_builds_valid_state() -> None:
    rng = Well1024a()
    state = rng.get_state()
    assert len(state) == 32
    assert all(-(2**31) <= word < 2**31 for word in state)
    assert rng.pointer == 0


def test_implicit_seeding_draws_from_host_random(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(random, "random", lambda: 0.5)
    rng = Well1024a()
    assert rng.get_state() == [-(2**31)] * 32


@pytest.mark.parametrize("length", [0, 1, 31, 33, 64])
def test_construct_rejects_wrong_length(length: int) -> None:
    with pytest.raises(InvalidStateLength):
        Well1024a([0] * length)


def test_set_state_wrong_length_leaves_state_untouched() -> None:
    seed = expand_seed(7)
    rng = Well1024a(seed)
    rng.rand()
    rng.rand_bits(4)
    before = rng.snapshot()

    with pytest.raises(InvalidStateLength, match="32 words"):
        rng.set_state([1] * 31, 5)

    assert rng.snapshot() == before
    reference = Well1024a(seed)
    reference.rand()
    reference.rand_bits(4)
    assert [rng.rand_bits(4) for _ in range(20)] == [reference.rand_bits(4) for _ in range(20)]


def test_invalid_state_length_is_a_value_error() -> None:
    assert issubclass(InvalidStateLength, ValueError)


def test_get_state_returns_independent_copy() -> None:
    rng = Well1024a(expand_seed(11))
    reference = Well1024a(expand_seed(11))

    exported = rng.get_state()
    exported[:] = [0] * 32

    assert rng.get_state() == reference.get_state()
    assert [rng.rand() for _ in range(50)] == [reference.rand() for _ in range(50)]


def test_set_state_does_not_alias_caller_list() -> None:
    seed = expand_seed(12)
    caller = list(seed)
    rng = Well1024a(caller)
    caller[0] ^= 0x1234
    caller[31] = 0

    reference = Well1024a(seed)
    assert rng.get_state() == seed
    assert [rng.rand() for _ in range(50)] == [reference.rand() for _ in range(50)]


def test_get_state_reports_signed_words() -> None:
    state = [0] * 32
    state[0] = 0xFFFFFFFF
    state[1] = 0x80000000
    state[2] = 2**40 + 5
    rng = Well1024a(state)
    exported = rng.get_state()
    assert exported[:3] == [-1, -(2**31), 5]


def test_ranges_hold_over_many_draws() -> None:
    rng = Well1024a(expand_seed(0xC0FFEE))
    for _ in range(2000):
        assert 0 <= rng.rand() <= 2**31 - 1
        assert -(2**31) <= rng.rand(True) <= 2**31 - 1
        assert 0.0 <= rng.random() < 1.0
        assert abs(rng.random(True)) <= 1.0 + SCALE
        assert 3 <= rng.rand_int(3, 9) <= 9


def test_signed_outputs_cover_both_signs() -> None:
    rng = Well1024a(expand_seed(99))
    values = [rng.rand(True) for _ in range(500)]
    assert any(value < 0 for value in values)
    assert any(value > 0 for value in values)


def test_rand_int_degenerate_range_is_constant() -> None:
    for seed in (0, 1, 0xDEADBEEF):
        rng = Well1024a(expand_seed(seed))
        assert all(rng.rand_int(5, 5) == 5 for _ in range(100))
    zero = Well1024a([0] * 32)
    assert zero.rand_int(5, 5) == 5


def test_rand_int_is_modulo_of_rand() -> None:
    a = Well1024a(expand_seed(5))
    b = Well1024a(expand_seed(5))
    for _ in range(100):
        assert a.rand_int(-10, 250) == (b.rand() % 261) - 10


def test_rand_int_rejects_empty_range_without_stepping() -> None:
    rng = Well1024a(expand_seed(5))
    before = rng.snapshot()
    with pytest.raises(ValueError):
        rng.rand_int(3, 2)
    assert rng.snapshot() == before


def test_camel_case_aliases() -> None:
    a = Well1024a(expand_seed(8))
    b = Well1024a(expand_seed(8))
    assert a.randInt(1, 6) == b.rand_int(1, 6)
    assert a.randBits(5) == b.rand_bits(5)


def test_rand_bits_range() -> None:
    rng = Well1024a(expand_seed(21))
    for bits in range(1, 32):
        for _ in range(20):
            assert 0 <= rng.rand_bits(bits) < 2**bits


@pytest.mark.parametrize("bits", [0, 32, -1])
def test_rand_bits_rejects_out_of_range_widths(bits: int) -> None:
    rng = Well1024a(expand_seed(21))
    with pytest.raises(ValueError):
        rng.rand_bits(bits)


def test_rand_bits_slices_one_word(unit_state: list[int]) -> None:
    rng = Well1024a(unit_state)
    assert rng.rand_bits(8) == 129
    assert rng.pointer == 31
    assert [rng.rand_bits(8) for _ in range(3)] == [0, 0, 0]
    assert rng.pointer == 31

    # Cache exhausted: the next call steps the generator again.
    assert rng.rand_bits(8) == 0
    assert rng.pointer == 30


def test_rand_bits_slices_match_full_word() -> None:
    seed = expand_seed(0x5EED)
    word = Well1024a(seed).rand(True) & 0xFFFFFFFF
    rng = Well1024a(seed)
    chunks = [rng.rand_bits(4) for _ in range(8)]
    assert chunks == [(word >> shift) & 0xF for shift in range(0, 32, 4)]


def test_rand_bits_mixed_widths_drop_leftover_bits() -> None:
    seed = expand_seed(0x5EED)
    words = Well1024a(seed)
    first = words.rand(True) & 0xFFFFFFFF
    second = words.rand(True) & 0xFFFFFFFF

    rng = Well1024a(seed)
    assert rng.rand_bits(20) == first & 0xFFFFF
    # 12 bits remain, 13 are requested: refill from the next word.
    assert rng.rand_bits(13) == second & 0x1FFF
    assert rng.rand_bits(19) == (second >> 13) & 0x7FFFF


def test_set_state_resets_bit_cache(unit_state: list[int]) -> None:
    rng = Well1024a(unit_state)
    assert rng.rand_bits(8) == 129
    rng.set_state(unit_state)
    assert rng.rand_bits(8) == 129


def test_snapshot_restore_reproduces_continuation() -> None:
    rng = Well1024a(expand_seed(0xABCDEF))
    for _ in range(45):
        rng.rand()
    snap = rng.snapshot()
    expected = [rng.rand(True) for _ in range(100)]

    other = Well1024a(expand_seed(1))
    other.restore(snap)
    assert other.pointer == snap.pointer
    assert [other.rand(True) for _ in range(100)] == expected


def test_snapshot_is_immutable_value() -> None:
    rng = Well1024a(expand_seed(4))
    snap = rng.snapshot()
    assert isinstance(snap, WellState)
    assert isinstance(snap.words, tuple)
    assert len(snap.words) == 32
    with pytest.raises(AttributeError):
        snap.pointer = 3  # type: ignore[misc]


def test_restore_rejects_short_snapshot() -> None:
    rng = Well1024a(expand_seed(4))
    before = rng.snapshot()
    with pytest.raises(InvalidStateLength):
        rng.restore(WellState(words=(0,) * 16, pointer=0))
    assert rng.snapshot() == before


def test_from_seed_matches_expanded_vector() -> None:
    a = Well1024a.from_seed(0x1234)
    b = Well1024a(expand_seed(0x1234))
    assert a.get_state() == b.get_state()
    assert [a.rand() for _ in range(20)] == [b.rand() for _ in range(20)]


def test_random_top_of_range_maps_to_one(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Well1024a, "rand", lambda self, include_negative=False: POSITIVE_MASK)
    rng = Well1024a([0] * 32)
    assert rng.random() == 1.0
