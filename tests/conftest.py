"""Shared fixtures for the bitgenetics tests."""

import pytest

from bitgenetics.xorshift import ScriptedStream, XorShift64Star, set_default_generator


@pytest.fixture
def scripted():
    """Factory for ScriptedStream instances."""
    def _make(*values, cycle=False):
        return ScriptedStream(values, cycle=cycle)
    return _make


@pytest.fixture
def rng():
    """Deterministically seeded generator."""
    return XorShift64Star(seed=0x9E3779B97F4A7C15)


@pytest.fixture
def default_rng_restored():
    """Put back the process-wide generator after the test."""
    previous = set_default_generator(None)
    yield
    set_default_generator(previous)


@pytest.fixture
def clean_env(monkeypatch):
    for suffix in ("SEED", "INTENSITY", "GENOME_SIZE", "LOG_LEVEL"):
        monkeypatch.delenv("BITGENETICS_" + suffix, raising=False)
