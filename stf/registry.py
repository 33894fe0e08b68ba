"""
Test Registry

Catalog of suite factories keyed by suite name. Drives a full run: every
registered suite is instantiated fresh, asked to define its cases, has every
case executed, and is reported on.

Usage:
    from stf import TestSuite, register_suite, get_registry

    @register_suite
    class ParserSuite(TestSuite):
        def define(self):
            ...

    @register_suite("strings")
    def define_strings(suite):
        suite.declare_case("upper", lambda: suite.assert_equal("a".upper(), "A"))

    ok = get_registry().run_all(sys.stderr)
"""

import functools
import logging
import sys
from typing import Callable, Dict, List, Optional, TextIO

from .errors import DuplicateSuiteError, HarnessError
from .models import RunResult, SuiteResult
from .report import DEFAULT_RESULT_COLUMN, ReportWriter
from .suite import FunctionSuite, TestSuite

logger = logging.getLogger(__name__)

SuiteFactory = Callable[[], TestSuite]


class TestRegistry:
    """
    Maps suite names to zero-argument factories producing new suite instances.

    Entries are added before a run and never removed. Suites run in name
    order; nothing depends on that order except the look of the report.
    """

    __test__ = False

    def __init__(self):
        self._entries: Dict[str, SuiteFactory] = {}

    def register(self, name: str, factory: SuiteFactory) -> None:
        """
        Register a suite factory.

        Raises:
            DuplicateSuiteError: If name is already registered
            HarnessError: If name is empty or factory is not callable
        """
        if not isinstance(name, str) or not name:
            raise HarnessError(f"Suite name must be a non-empty string, got {name!r}")
        if not callable(factory):
            raise HarnessError(f"Factory for suite '{name}' is not callable")
        if name in self._entries:
            raise DuplicateSuiteError(name)

        self._entries[name] = factory
        logger.debug(f"Registered test suite: {name}")

    def add_test(self, suite_class: type, name: str = None) -> None:
        """Register a TestSuite subclass, named after the class by default."""
        self.register(name or suite_class.__name__, suite_class)

    def names(self) -> List[str]:
        return sorted(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def create(self, name: str) -> TestSuite:
        """Instantiate a new suite for name."""
        factory = self._entries.get(name)
        if factory is None:
            raise HarnessError(f"Test suite '{name}' is not registered")

        try:
            suite = factory()
        except HarnessError:
            raise
        except Exception as e:
            raise HarnessError(f"Suite '{name}' could not be created: {e}") from e
        if not isinstance(suite, TestSuite):
            raise HarnessError(
                f"Factory for suite '{name}' returned {type(suite).__name__}, not a TestSuite"
            )
        suite.suite_name = name
        return suite

    # =========================================================================
    # Execution
    # =========================================================================

    def run_suite(self, name: str, writer: ReportWriter) -> SuiteResult:
        """Run every case of a fresh instance of one suite."""
        writer.begin_suite(name)
        logger.info(f"Running suite: {name}")

        suite = self.create(name)
        try:
            suite.define()
        except HarnessError:
            raise
        except Exception as e:
            raise HarnessError(f"Suite '{name}' failed to define its cases: {e}") from e

        result = SuiteResult(name=name)
        for case_name in suite.names():
            passed = suite.run_case(case_name)
            writer.case_result(case_name, passed)
            result.case_results.append(suite.last_result(case_name))

        result.log = suite.get_log()
        writer.suite_log(result.log)
        writer.suite_summary(name, result.passed_count, result.total)
        del suite

        logger.info(f"Suite {name}: {result.passed_count}/{result.total} passed")
        return result

    def run(
        self,
        out: TextIO = None,
        color: bool = False,
        result_column: int = DEFAULT_RESULT_COLUMN,
    ) -> RunResult:
        """
        Run every registered suite, writing the report to out.

        Args:
            out: Report stream, sys.stderr by default
            color: Use ANSI colors in the report
            result_column: Column where [PASSED]/[FAILED] markers start

        Returns:
            RunResult with one SuiteResult per registered suite
        """
        writer = ReportWriter(out or sys.stderr, color=color, result_column=result_column)
        run_result = RunResult()

        for name in self.names():
            run_result.suite_results.append(self.run_suite(name, writer))

        writer.run_summary(run_result.passed_suites, run_result.total)
        logger.info(f"Run finished: {run_result.passed_suites}/{run_result.total} suites passed")
        return run_result

    def run_all(self, out: TextIO = None, **kwargs) -> bool:
        """Run every registered suite. Returns True if every suite fully passed."""
        return self.run(out, **kwargs).passed


_registry: Optional[TestRegistry] = None


def get_registry() -> TestRegistry:
    """Get or create the process-wide test registry."""
    global _registry
    if _registry is None:
        _registry = TestRegistry()
    return _registry


def add_test(suite_class: type, name: str = None, registry: TestRegistry = None) -> None:
    """Register a TestSuite subclass with a registry (the global one by default)."""
    if registry is None:
        registry = get_registry()
    registry.add_test(suite_class, name)


def register_suite(name=None, registry: TestRegistry = None):
    """
    Decorator registering a suite when its module is imported.

    Accepts a TestSuite subclass or a define(suite) function. Works bare
    (@register_suite) or with a name (@register_suite("parser")).
    """

    def decorator(obj):
        target = get_registry() if registry is None else registry
        if isinstance(obj, type):
            if not issubclass(obj, TestSuite):
                raise HarnessError(f"{obj.__name__} is not a TestSuite subclass")
            target.register(name or obj.__name__, obj)
        elif callable(obj):
            suite_name = name or obj.__name__
            target.register(suite_name, functools.partial(FunctionSuite, obj, suite_name))
        else:
            raise HarnessError(f"Cannot register {obj!r} as a test suite")
        return obj

    if callable(name):
        obj, name = name, None
        return decorator(obj)
    return decorator
