from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure(config: pytest.Config) -> None:
    # Ensure the local `src/` tree wins over any other editable install that may exist.
    src_dir = Path(__file__).resolve().parents[1] / "src"
    src_str = str(src_dir)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


@pytest.fixture
def zero_state() -> list[int]:
    return [0] * 32


@pytest.fixture
def unit_state() -> list[int]:
    state = [0] * 32
    state[3] = 1
    return state
