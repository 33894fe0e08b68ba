"""
Test Suite

A suite owns an ordered set of named test cases sharing one fixture object
(the suite instance itself). The registry creates a fresh instance per run,
calls define() once, then runs every declared case by name.

Usage:
    class CounterSuite(TestSuite):
        def __init__(self):
            super().__init__()
            self.counter = 0

        def define(self):
            @self.case("counter starts at zero")
            def _():
                self.expect_equal(self.counter, 0)

            self.declare_case("increment", self.check_increment)

        def check_increment(self):
            self.counter += 1
            self.assert_equal(self.counter, 1)

    # Function style
    def define_strings(suite):
        suite.declare_case("upper", lambda: suite.assert_equal("a".upper(), "A"))

    FunctionSuite(define_strings)
"""

import io
import logging
import time
from typing import Callable, Dict, List, Optional

from .assertions import AssertionMixin, CaseAborted
from .errors import DuplicateCaseError, HarnessError, UnknownCaseError
from .models import CaseResult, TestCase, TestFunc, TestStatus

logger = logging.getLogger(__name__)


class TestSuite(AssertionMixin):
    """
    Collection of named test cases with shared fixture state.

    Subclasses override define() and call declare_case() (or the case()
    decorator) for each case they offer.
    """

    __test__ = False

    def __init__(self, name: str = None):
        self.suite_name = name or type(self).__name__
        self._cases: List[TestCase] = []
        self._outcomes: List[TestStatus] = []
        self._results: Dict[str, CaseResult] = {}
        self._failed = False
        self._current_index: Optional[int] = None
        self._log = io.StringIO()

    def define(self) -> None:
        """Declare the suite's test cases."""
        raise NotImplementedError(f"{type(self).__name__} must implement define()")

    # =========================================================================
    # Declaration
    # =========================================================================

    def declare_case(self, name: str, func: TestFunc) -> TestCase:
        """
        Append a test case. Its outcome starts as NOT_RUN.

        Raises:
            DuplicateCaseError: If a case with this name already exists
        """
        if any(case.name == name for case in self._cases):
            raise DuplicateCaseError(name, self.suite_name)
        if not callable(func):
            raise HarnessError(f"Test case '{name}' action is not callable")

        case = TestCase(name=name, func=func)
        self._cases.append(case)
        self._outcomes.append(TestStatus.NOT_RUN)
        logger.debug(f"{self.suite_name}: declared case '{name}'")
        return case

    def case(self, name: str) -> Callable[[TestFunc], TestFunc]:
        """Decorator form of declare_case()."""

        def decorator(func: TestFunc) -> TestFunc:
            self.declare_case(name, func)
            return func

        return decorator

    # =========================================================================
    # Execution
    # =========================================================================

    def reset_flags(self) -> None:
        self._failed = False
        self._current_index = None

    def run_case(self, name: str) -> bool:
        """
        Run one case by name and record its outcome.

        Assertion failures mark the case FAILED without stopping it. A
        require_* failure stops the case. Any other exception escaping the
        action also marks it FAILED and is written to the suite log.

        Returns:
            True if the case passed

        Raises:
            UnknownCaseError: If no case has this name
        """
        self.reset_flags()
        index = self._index_of(name)
        case = self._cases[index]
        error = None

        self._current_index = index
        start = time.perf_counter()
        try:
            case.run()
        except CaseAborted:
            self._failed = True
        except HarnessError:
            raise
        except Exception as e:
            self._failed = True
            error = f"{type(e).__name__}: {e}"
            self.write_log(f"In:{name} raised {error}\n")
            logger.debug(f"{self.suite_name}: case '{name}' raised", exc_info=True)
        finally:
            self._current_index = None

        status = TestStatus.FAILED if self._failed else TestStatus.PASSED
        self._outcomes[index] = status
        self._results[name] = CaseResult(
            name=name,
            status=status,
            duration=time.perf_counter() - start,
            error=error,
        )
        logger.debug(f"{self.suite_name}: case '{name}' {status.value}")
        return not self._failed

    def run_all(self) -> bool:
        """Run every case in declaration order. Returns True if all passed."""
        passed = 0
        for name in self.names():
            passed += int(self.run_case(name))
        return passed == len(self._cases)

    # =========================================================================
    # Inspection
    # =========================================================================

    def names(self) -> List[str]:
        return [case.name for case in self._cases]

    def get_outcome(self, name: str) -> TestStatus:
        """Last recorded outcome for a case, NOT_RUN if it never ran."""
        return self._outcomes[self._index_of(name)]

    def get_outcomes(self) -> List[TestStatus]:
        return list(self._outcomes)

    def last_result(self, name: str) -> Optional[CaseResult]:
        self._index_of(name)
        return self._results.get(name)

    @property
    def current_index(self) -> Optional[int]:
        """Index of the case being executed, None when no case is running."""
        return self._current_index

    @property
    def current_case(self) -> Optional[str]:
        if self._current_index is None:
            return None
        return self._cases[self._current_index].name

    @property
    def failed(self) -> bool:
        return self._failed

    def get_log(self) -> str:
        return self._log.getvalue()

    def write_log(self, text: str) -> None:
        self._log.write(text)

    def _index_of(self, name: str) -> int:
        for i, case in enumerate(self._cases):
            if case.name == name:
                return i
        raise UnknownCaseError(name, self.suite_name)

    def __len__(self) -> int:
        return len(self._cases)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.suite_name!r} cases={len(self._cases)}>"


class FunctionSuite(TestSuite):
    """Suite whose cases are declared by a plain define(suite) function."""

    def __init__(self, define_func: Callable[["TestSuite"], None], name: str = None):
        super().__init__(name or define_func.__name__)
        self._define_func = define_func

    def define(self) -> None:
        self._define_func(self)
