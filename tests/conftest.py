"""
Pytest fixtures for the test harness tests
"""
import io
import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from stf import TestRegistry, TestSuite  # noqa: E402


class PassingSuite(TestSuite):
    """Two cases, both pass."""

    def define(self):
        self.declare_case("one plus one", lambda: self.assert_equal(1 + 1, 2))
        self.declare_case("truth", lambda: self.assert_true(True))


class HalfSuite(TestSuite):
    """Two cases, the second fails."""

    def define(self):
        self.declare_case("passes", lambda: self.assert_equal(5, 5))
        self.declare_case("fails", lambda: self.assert_equal(5, 6))


class FailingSuite(TestSuite):
    """One case, fails."""

    def define(self):
        self.declare_case("always false", lambda: self.assert_true(False))


@pytest.fixture
def registry():
    """Empty registry isolated from the process-wide one."""
    return TestRegistry()


@pytest.fixture
def mixed_registry(registry):
    """Suites A (2/2), B (1/2) and C (0/1)."""
    registry.register("A", PassingSuite)
    registry.register("B", HalfSuite)
    registry.register("C", FailingSuite)
    return registry


@pytest.fixture
def passing_registry(registry):
    registry.register("A", PassingSuite)
    return registry


@pytest.fixture
def report_stream():
    return io.StringIO()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No STF_* variables and a working directory without stf.yaml."""
    for name in list(os.environ):
        if name.startswith("STF_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
