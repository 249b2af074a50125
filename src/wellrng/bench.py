"""Timing harness comparing `Well1024a` against the host `random` module.

Each case runs the same number of calls through the generator and through an
equivalent expression built on the host uniform source.
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from dataclasses import dataclass

import msgspec

from .well import POSITIVE_MASK, Well1024a

CASE_NAMES: tuple[str, ...] = ("random", "rand", "rand_int", "rand_bits", "random_signed")
CASE_LABELS: dict[str, str] = {
    "random": "T1/random",
    "rand": "T2/rand",
    "rand_int": "T3/rand_int",
    "rand_bits": "T4/rand_bits",
    "random_signed": "T5/random_signed",
}
IMPLEMENTATIONS: tuple[str, ...] = ("well", "host")

DEFAULT_ITERATIONS = 1_000_000


class BenchConfigError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class BenchConfig:
    iterations: int = DEFAULT_ITERATIONS
    int_min: int = 2
    int_max: int = 12
    bits: int = 3
    seed: int | None = None
    cases: tuple[str, ...] = CASE_NAMES

    def validate(self) -> None:
        if self.iterations <= 0:
            raise BenchConfigError(f"iterations must be positive, got {self.iterations}")
        if self.int_max < self.int_min:
            raise BenchConfigError(f"empty integer range: [{self.int_min}, {self.int_max}]")
        if not 1 <= self.bits <= 31:
            raise BenchConfigError(f"bits must be in 1..31, got {self.bits}")
        if not self.cases:
            raise BenchConfigError("no benchmark cases selected")
        unknown = [name for name in self.cases if name not in CASE_LABELS]
        if unknown:
            raise BenchConfigError(f"unknown benchmark cases: {', '.join(unknown)}")


class BenchTiming(msgspec.Struct, forbid_unknown_fields=True):
    case: str
    implementation: str
    iterations: int
    elapsed_ms: float


class BenchReport(msgspec.Struct, forbid_unknown_fields=True):
    iterations: int
    seeded: bool = False
    timings: list[BenchTiming] = msgspec.field(default_factory=list)

    def timing(self, case: str, implementation: str) -> BenchTiming | None:
        for entry in self.timings:
            if entry.case == case and entry.implementation == implementation:
                return entry
        return None


def _well_calls(rng: Well1024a, config: BenchConfig) -> dict[str, Callable[[], object]]:
    lo = int(config.int_min)
    hi = int(config.int_max)
    bits = int(config.bits)
    return {
        "random": rng.random,
        "rand": rng.rand,
        "rand_int": lambda: rng.rand_int(lo, hi),
        "rand_bits": lambda: rng.rand_bits(bits),
        "random_signed": lambda: rng.random(True),
    }


def _host_calls(uniform: Callable[[], float], config: BenchConfig) -> dict[str, Callable[[], object]]:
    lo = int(config.int_min)
    spread = int(config.int_max) - lo + 1
    bit_spread = 2 ** int(config.bits)
    scale = POSITIVE_MASK
    return {
        "random": uniform,
        "rand": lambda: int(uniform() * scale),
        "rand_int": lambda: int(uniform() * spread + lo),
        "rand_bits": lambda: int(uniform() * bit_spread),
        # The host source loses a bit here that WELL keeps.
        "random_signed": lambda: (uniform() - 0.5) * 2,
    }


def _time_calls(call: Callable[[], object], iterations: int, clock: Callable[[], int]) -> float:
    start = clock()
    for _ in range(iterations):
        call()
    stop = clock()
    return (stop - start) / 1e6


def run_bench(
    config: BenchConfig,
    *,
    clock: Callable[[], int] = time.perf_counter_ns,
    host_uniform: Callable[[], float] = random.random,
    on_timing: Callable[[BenchTiming], None] | None = None,
) -> BenchReport:
    """Run every selected case for both implementations, generator first.

    `on_timing` is called with each timing as soon as its case finishes.
    """
    config.validate()
    if config.seed is None:
        rng = Well1024a()
    else:
        rng = Well1024a.from_seed(config.seed)

    calls = {
        "well": _well_calls(rng, config),
        "host": _host_calls(host_uniform, config),
    }
    report = BenchReport(iterations=int(config.iterations), seeded=config.seed is not None)
    for case in config.cases:
        for implementation in IMPLEMENTATIONS:
            elapsed_ms = _time_calls(calls[implementation][case], int(config.iterations), clock)
            timing = BenchTiming(
                case=case,
                implementation=implementation,
                iterations=int(config.iterations),
                elapsed_ms=float(elapsed_ms),
            )
            report.timings.append(timing)
            if on_timing is not None:
                on_timing(timing)
    return report


def format_report(report: BenchReport) -> str:
    lines: list[str] = []
    previous_case: str | None = None
    for entry in report.timings:
        if previous_case is not None and entry.case != previous_case:
            lines.append("")
        previous_case = entry.case
        label = CASE_LABELS.get(entry.case, entry.case)
        lines.append(f"({label}) {entry.implementation} took {entry.elapsed_ms:.3f} ms")
    return "\n".join(lines)


__all__ = [
    "BenchConfig",
    "BenchConfigError",
    "BenchReport",
    "BenchTiming",
    "CASE_NAMES",
    "format_report",
    "run_bench",
]
