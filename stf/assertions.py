"""
Assertion Engine

Predicate checks used inside test case actions. A failed check marks the
running case as failed and, for most checks, appends a diagnostic line to the
suite log naming the running case. Only require_* checks end the case early.

Three families:
    assert_*   - plain checks (assert_true / assert_false are silent)
    expect_*   - checks that log the caller's line and keep going
    require_*  - like expect_*, but stop the current case on failure

Usage:
    class MathSuite(TestSuite):
        def define(self):
            @self.case("addition")
            def _():
                self.expect_equal(1 + 1, 2)
                self.require_true(self.total > 0, "total positive")
                self.expect_equal(self.total / 3, 0.333, "ratio")
"""

import inspect
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Single precision machine epsilon
FLOAT_EPSILON = 1.1920929e-07

NO_RUNNING_CASE = "<no running case>"


class CaseAborted(Exception):
    """Raised by require_* checks to stop the current case."""

    pass


def floats_almost_same(a: float, b: float, epsilon: float = FLOAT_EPSILON) -> bool:
    return abs(a - b) < epsilon


def values_equal(value: Any, expected: Any) -> bool:
    """
    Compare two values the way assert_equal does.

    Numbers compare exactly unless either side is a float, in which case the
    difference must be below FLOAT_EPSILON. Lists and tuples of the same length
    compare element by element with the same rule.
    """
    if isinstance(value, (list, tuple)) and isinstance(expected, (list, tuple)):
        if len(value) != len(expected):
            return False
        return all(values_equal(v, e) for v, e in zip(value, expected))

    if isinstance(value, (int, float)) and isinstance(expected, (int, float)):
        if isinstance(value, float) or isinstance(expected, float):
            try:
                return floats_almost_same(value, expected)
            except OverflowError:
                # int too large to convert to float
                return False

    return value == expected


def _caller_line() -> int:
    """Line number of the first frame outside this module."""
    here = _caller_line.__code__.co_filename
    frame = inspect.currentframe()
    try:
        while frame is not None and frame.f_code.co_filename == here:
            frame = frame.f_back
        return frame.f_lineno if frame is not None else 0
    finally:
        del frame


class AssertionMixin:
    """
    Checks bound to a suite's run state.

    The host class provides the `_failed` flag, the `current_case` property and
    `write_log()`. TestSuite is the only host.
    """

    _failed: bool = False

    @property
    def current_case(self) -> Optional[str]:
        """Host hook: name of the running case, or None between cases."""
        raise NotImplementedError

    def write_log(self, text: str) -> None:
        """Host hook: append text to the suite log."""
        raise NotImplementedError

    def _failure_prefix(self) -> str:
        return f"In:{self.current_case or NO_RUNNING_CASE}"

    def _log_located(self, operation: str, description: str, detail: str) -> None:
        line = _caller_line()
        self.write_log(
            f"{self._failure_prefix()}[line {line}] {operation}({description}) {detail}\n"
        )

    # =========================================================================
    # Plain checks
    # =========================================================================

    def assert_true(self, expression: Any) -> bool:
        """Fail the running case if expression is falsy. Returns the expression's truth."""
        if not expression:
            self._failed = True
        return bool(expression)

    def assert_false(self, expression: Any) -> bool:
        """Fail the running case if expression is truthy. Returns the expression's truth."""
        if expression:
            self._failed = True
        return bool(expression)

    def assert_equal(self, value: Any, expected: Any) -> bool:
        """
        Fail the running case unless value equals expected.

        Floats compare within FLOAT_EPSILON. On mismatch one line naming the
        running case, the expected and the actual value is appended to the log.

        Returns:
            True if the values are equal
        """
        if values_equal(value, expected):
            return True

        self._failed = True
        self.write_log(
            f"{self._failure_prefix()} expected value to be {expected!r} but it was {value!r}\n"
        )
        logger.debug(f"{self._failure_prefix()} equality check failed")
        return False

    # =========================================================================
    # Located checks, continue on failure
    # =========================================================================

    def expect_true(self, expression: Any, description: str = "") -> bool:
        """Returns True if the check passed."""
        if self.assert_true(expression):
            return True
        self._log_located("expect_true", description, "was expected to be true but it was false")
        return False

    def expect_false(self, expression: Any, description: str = "") -> bool:
        """Returns True if the check passed."""
        if not self.assert_false(expression):
            return True
        self._log_located("expect_false", description, "was expected to be false but it was true")
        return False

    def expect_equal(self, value: Any, expected: Any, description: str = "") -> bool:
        if values_equal(value, expected):
            return True
        self._failed = True
        self._log_located(
            "expect_equal",
            description,
            f"expected value to be {expected!r} but it was {value!r}",
        )
        return False

    def expect_not_equal(self, value: Any, other: Any, description: str = "") -> bool:
        if not values_equal(value, other):
            return True
        self._failed = True
        self._log_located(
            "expect_not_equal", description, f"expected value to differ from {other!r}"
        )
        return False

    # =========================================================================
    # Located checks, stop the case on failure
    # =========================================================================

    def require_true(self, expression: Any, description: str = "") -> None:
        if not self.assert_true(expression):
            self._log_located(
                "require_true", description, "was expected to be true but it was false"
            )
            raise CaseAborted(description)

    def require_false(self, expression: Any, description: str = "") -> None:
        if self.assert_false(expression):
            self._log_located(
                "require_false", description, "was expected to be false but it was true"
            )
            raise CaseAborted(description)

    def require_equal(self, value: Any, expected: Any, description: str = "") -> None:
        if values_equal(value, expected):
            return
        self._failed = True
        self._log_located(
            "require_equal",
            description,
            f"expected value to be {expected!r} but it was {value!r}",
        )
        raise CaseAborted(description)
