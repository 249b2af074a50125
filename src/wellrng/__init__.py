from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("wellrng")
except PackageNotFoundError:  # pragma: no cover
    # Allow running from source (e.g. `PYTHONPATH=src`) without installed package metadata.
    __version__ = "0.0.0+dev"

from .seeding import expand_seed, genstate
from .well import POSITIVE_MASK, SCALE, InvalidStateLength, Well1024a, WellState

__all__ = [
    "InvalidStateLength",
    "POSITIVE_MASK",
    "SCALE",
    "Well1024a",
    "WellState",
    "expand_seed",
    "genstate",
]
