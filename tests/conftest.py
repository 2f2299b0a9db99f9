"""Shared fixtures for snowgen tests."""

import logging
import os

import pytest

from snowgen.generator import DEFAULT_EPOCH
from snowgen.utils import reset_default_generator

# Arbitrary instant well after the default epoch (2015-01-01 + 1e6 s)
START_MS = DEFAULT_EPOCH + 1_000_000_000


class FakeClock:
    """Scripted millisecond clock.

    Returns ``value`` on every read. Values queued in ``script`` are consumed
    one per read before falling back to ``value`` (the last scripted value
    sticks).
    """

    def __init__(self, value: int = START_MS) -> None:
        self.value = value
        self.script: list[int] = []
        self.reads = 0

    def __call__(self) -> int:
        self.reads += 1
        if self.script:
            self.value = self.script.pop(0)
        return self.value

    def advance(self, ms: int = 1) -> None:
        self.value += ms


class TickingClock:
    """Clock that moves forward one millisecond every ``every`` reads."""

    def __init__(self, every: int, value: int = START_MS) -> None:
        self.every = every
        self.value = value
        self.reads = 0

    def __call__(self) -> int:
        self.reads += 1
        if self.reads % self.every == 0:
            self.value += 1
        return self.value


def timestamp_of(snowflake_id: int) -> int:
    return snowflake_id >> 22


def datacenter_of(snowflake_id: int) -> int:
    return (snowflake_id >> 17) & 0x1F


def server_of(snowflake_id: int) -> int:
    return (snowflake_id >> 12) & 0x1F


def sequence_of(snowflake_id: int) -> int:
    return snowflake_id & 0xFFF


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests independent of the caller's SNOWGEN_* variables and .env file."""
    for key in list(os.environ):
        if key.startswith("SNOWGEN_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    reset_default_generator()
    yield
    reset_default_generator()
    logger = logging.getLogger("snowgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
