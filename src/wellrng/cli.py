from __future__ import annotations

from pathlib import Path

import msgspec
import typer

from .bench import CASE_NAMES, BenchConfig, format_report, run_bench
from .benchlog import BenchLog, bench_log_path
from .paths import default_runtime_dir
from .seeding import expand_seed, genstate
from .well import InvalidStateLength, Well1024a


app = typer.Typer(add_completion=False)

SAMPLE_KINDS = ("rand", "random", "rand-int", "rand-bits")


def _parse_int_auto(text: str) -> int:
    try:
        return int(text, 0)
    except ValueError as exc:
        raise typer.BadParameter(f"invalid integer: {text!r}") from exc


def _parse_words(text: str) -> list[int]:
    return [_parse_int_auto(part.strip()) for part in text.split(",") if part.strip()]


def _build_rng(seed: str | None, state_words: str | None, pointer: int) -> Well1024a:
    if seed is not None and state_words is not None:
        raise typer.BadParameter("use either --seed or --state-words, not both", param_hint="--seed")
    if state_words is not None:
        words = _parse_words(state_words)
    elif seed is not None:
        words = expand_seed(_parse_int_auto(seed))
    else:
        words = genstate()
    try:
        rng = Well1024a(words)
    except InvalidStateLength as exc:
        raise typer.BadParameter(str(exc), param_hint="--state-words") from exc
    if pointer:
        rng.set_state(words, pointer)
    return rng


def _sample_one(rng: Well1024a, kind: str, *, negative: bool, low: int, high: int, bits: int) -> int | float:
    if kind == "rand":
        return rng.rand(negative)
    if kind == "random":
        return rng.random(negative)
    if kind == "rand-int":
        return rng.rand_int(low, high)
    return rng.rand_bits(bits)


@app.command("sample")
def cmd_sample(
    kind: str = typer.Argument(..., help="one of: rand, random, rand-int, rand-bits"),
    count: int = typer.Option(10, help="number of values to draw"),
    seed: str | None = typer.Option(None, help="integer seed expanded into a state vector (e.g. 0xBEEF)"),
    state_words: str | None = typer.Option(None, help="explicit state vector as 32 comma-separated words"),
    pointer: int = typer.Option(0, help="state pointer (taken modulo 32)"),
    low: int = typer.Option(0, help="rand-int lower bound (inclusive)"),
    high: int = typer.Option(99, help="rand-int upper bound (inclusive)"),
    bits: int = typer.Option(3, help="rand-bits width (1..31)"),
    negative: bool = typer.Option(False, "--negative", help="include negative values for rand/random"),
    as_json: bool = typer.Option(False, "--json", help="print JSON"),
) -> None:
    """Draw values from a WELL1024a generator."""
    normalized = kind.strip().lower().replace("_", "-")
    if normalized not in SAMPLE_KINDS:
        raise typer.BadParameter(f"unknown kind {kind!r} (expected one of: {', '.join(SAMPLE_KINDS)})", param_hint="KIND")
    if count < 0:
        raise typer.BadParameter("count must not be negative", param_hint="--count")
    if normalized == "rand-int" and high < low:
        raise typer.BadParameter(f"empty range: [{low}, {high}]", param_hint="--high")
    if normalized == "rand-bits" and not 1 <= bits <= 31:
        raise typer.BadParameter("bits must be in 1..31", param_hint="--bits")

    rng = _build_rng(seed, state_words, pointer)
    values = [
        _sample_one(rng, normalized, negative=negative, low=low, high=high, bits=bits)
        for _ in range(count)
    ]
    if as_json:
        payload = {"kind": normalized, "values": values, "pointer": rng.pointer}
        typer.echo(msgspec.json.encode(payload).decode("utf-8"))
        return
    for value in values:
        typer.echo(str(value))


@app.command("state")
def cmd_state(
    seed: str | None = typer.Option(None, help="integer seed expanded into a state vector (e.g. 0xBEEF)"),
    advance: int = typer.Option(0, help="number of rand() calls to run before printing"),
    as_json: bool = typer.Option(False, "--json", help="print JSON"),
) -> None:
    """Print the state pointer and state vector."""
    if advance < 0:
        raise typer.BadParameter("advance must not be negative", param_hint="--advance")
    rng = _build_rng(seed, None, 0)
    for _ in range(advance):
        rng.rand()
    snapshot = rng.snapshot()
    if as_json:
        typer.echo(msgspec.json.encode(snapshot).decode("utf-8"))
        return
    typer.echo(f"pointer={snapshot.pointer}")
    for idx, word in enumerate(snapshot.words):
        typer.echo(f"{idx:02d} 0x{word & 0xFFFFFFFF:08x} {word}")


@app.command("bench")
def cmd_bench(
    iterations: int = typer.Option(1_000_000, help="calls per case and implementation"),
    low: int = typer.Option(2, help="rand_int lower bound (inclusive)"),
    high: int = typer.Option(12, help="rand_int upper bound (inclusive)"),
    bits: int = typer.Option(3, help="rand_bits width"),
    seed: str | None = typer.Option(None, help="integer seed (default: host entropy)"),
    case: list[str] | None = typer.Option(None, "--case", help=f"case to run (repeatable): {', '.join(CASE_NAMES)}"),
    as_json: bool = typer.Option(False, "--json", help="print JSON"),
    log: bool = typer.Option(False, "--log", help="record the run under <base-dir>/logs"),
    base_dir: Path = typer.Option(
        default_runtime_dir(),
        "--base-dir",
        "--runtime-dir",
        help="base path for runtime files (default: per-user OS data dir; override with WELLRNG_RUNTIME_DIR)",
    ),
) -> None:
    """Time the generator against the host `random` module."""
    config = BenchConfig(
        iterations=iterations,
        int_min=low,
        int_max=high,
        bits=bits,
        seed=_parse_int_auto(seed) if seed is not None else None,
        cases=tuple(case) if case else CASE_NAMES,
    )
    try:
        config.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if not log:
        report = run_bench(config)
    else:
        with BenchLog(bench_log_path(base_dir)) as bench_log:
            typer.echo(f"log: {bench_log.path}", err=True)
            bench_log.config(config)
            report = run_bench(config, on_timing=bench_log.timing)
            bench_log.done(report)

    if as_json:
        typer.echo(msgspec.json.encode(report).decode("utf-8"))
        return
    typer.echo(format_report(report))


def main() -> None:
    app()


__all__ = [
    "app",
    "main",
]
