"""Plain-text record of one `wellrng bench` run.

Layout, one record per line:

    <utc timestamp> config iterations=... int_range=LO..HI bits=... seed=... cases=...
    <utc timestamp> case label=T1/random impl=well iterations=... elapsed_ms=...
    <utc timestamp> done timings=... well_ms=... host_ms=...
"""

from __future__ import annotations

import datetime as dt
import os
from pathlib import Path
from typing import TextIO

from .bench import CASE_LABELS, BenchConfig, BenchReport, BenchTiming


def _now() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds")


def bench_log_path(base_dir: Path) -> Path:
    stamp = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%S.%fZ")
    return base_dir / "logs" / f"wellrng-bench-{stamp}-pid{os.getpid()}.log"


class BenchLog:
    __slots__ = ("path", "_handle")

    def __init__(self, path: Path) -> None:
        self.path = path
        self._handle: TextIO | None = None

    def __enter__(self) -> BenchLog:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("a", encoding="utf-8")
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def _write(self, kind: str, body: str) -> None:
        if self._handle is None:
            raise RuntimeError(f"bench log is not open: {self.path}")
        self._handle.write(f"{_now()} {kind} {body}\n")
        self._handle.flush()

    def config(self, config: BenchConfig) -> None:
        seed = "entropy" if config.seed is None else f"0x{config.seed & 0xFFFFFFFF:08x}"
        self._write(
            "config",
            f"iterations={config.iterations} int_range={config.int_min}..{config.int_max} "
            f"bits={config.bits} seed={seed} cases={','.join(config.cases)}",
        )

    def timing(self, timing: BenchTiming) -> None:
        label = CASE_LABELS.get(timing.case, timing.case)
        self._write(
            "case",
            f"label={label} impl={timing.implementation} iterations={timing.iterations} "
            f"elapsed_ms={timing.elapsed_ms:.3f}",
        )

    def done(self, report: BenchReport) -> None:
        totals = {"well": 0.0, "host": 0.0}
        for entry in report.timings:
            totals[entry.implementation] = totals.get(entry.implementation, 0.0) + entry.elapsed_ms
        self._write(
            "done",
            f"timings={len(report.timings)} well_ms={totals['well']:.3f} host_ms={totals['host']:.3f}",
        )


__all__ = [
    "BenchLog",
    "bench_log_path",
]
