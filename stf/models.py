"""
Test Harness Models

Data structures shared by suites, the registry and the report writer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

TestFunc = Callable[[], None]


class TestStatus(str, Enum):
    """Outcome of a single test case."""

    __test__ = False

    NOT_RUN = "not_run"
    PASSED = "passed"
    FAILED = "failed"


@dataclass(frozen=True)
class TestCase:
    """
    A named, zero-argument action performing assertions.

    Owned by exactly one suite and never modified after it is declared.
    """

    __test__ = False

    name: str
    func: TestFunc

    def run(self) -> None:
        self.func()


@dataclass
class CaseResult:
    """Result of the most recent execution of a test case."""

    name: str
    status: TestStatus
    duration: float = 0.0
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status == TestStatus.PASSED


@dataclass
class SuiteResult:
    """Result of running every case of one suite instance."""

    name: str
    case_results: List[CaseResult] = field(default_factory=list)
    log: str = ""

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.case_results if r.passed)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.case_results if r.status == TestStatus.FAILED)

    @property
    def total(self) -> int:
        return len(self.case_results)

    @property
    def passed(self) -> bool:
        """A suite fully passes when every case passed. An empty suite passes."""
        return self.passed_count == self.total


@dataclass
class RunResult:
    """Aggregate result of one registry run."""

    suite_results: List[SuiteResult] = field(default_factory=list)

    @property
    def passed_suites(self) -> int:
        return sum(1 for r in self.suite_results if r.passed)

    @property
    def total(self) -> int:
        return len(self.suite_results)

    @property
    def passed(self) -> bool:
        return self.passed_suites == self.total

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def get(self, suite_name: str) -> Optional[SuiteResult]:
        for result in self.suite_results:
            if result.name == suite_name:
                return result
        return None
