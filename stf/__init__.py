"""
Self-Registering Test Harness

Suites group named test cases around shared fixture state. Suites register
themselves with a process-wide registry when their module is imported; one
call runs every registered suite and reports PASSED/FAILED per case and per
suite.

Components:
- assertions: checks that record failures into the running case
- suite: TestSuite, declaring and running cases by name
- registry: TestRegistry, instantiating and running every registered suite
"""

from .assertions import FLOAT_EPSILON, CaseAborted, floats_almost_same, values_equal
from .cli import main, run_all_tests
from .errors import (
    ConfigError,
    DuplicateCaseError,
    DuplicateSuiteError,
    HarnessError,
    UnknownCaseError,
)
from .models import CaseResult, RunResult, SuiteResult, TestCase, TestStatus
from .registry import TestRegistry, add_test, get_registry, register_suite
from .suite import FunctionSuite, TestSuite

__all__ = [
    "TestSuite",
    "FunctionSuite",
    "TestRegistry",
    "get_registry",
    "register_suite",
    "add_test",
    "run_all_tests",
    "main",
    "TestCase",
    "TestStatus",
    "CaseResult",
    "SuiteResult",
    "RunResult",
    "HarnessError",
    "DuplicateCaseError",
    "DuplicateSuiteError",
    "UnknownCaseError",
    "ConfigError",
    "CaseAborted",
    "FLOAT_EPSILON",
    "floats_almost_same",
    "values_equal",
]
