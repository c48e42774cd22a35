from __future__ import annotations

from io import StringIO
from typing import Iterator

import pytest
from rich.console import Console

from lib_biome.runtime import _state as runtime_state
from tests._fakes import RecordingSink, StepClock


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=200, color_system=None)


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def step_clock() -> StepClock:
    return StepClock()


@pytest.fixture
def diagnostics() -> list[tuple[str, dict]]:
    return []


@pytest.fixture
def clean_runtime() -> Iterator[None]:
    """Stop and forget any runtime pipeline left behind by a test."""

    try:
        yield
    finally:
        if runtime_state.is_initialised():
            pipeline = runtime_state.current_runtime()
            try:
                pipeline.stop()
            finally:
                runtime_state.clear_runtime()
