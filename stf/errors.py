"""
Harness Errors

Errors raised when the harness itself is misused. These are configuration-time
problems (a suite declared twice, a case that does not exist) and are never
recorded as test failures.
"""


class HarnessError(Exception):
    """Base class for harness misuse."""

    pass


class DuplicateCaseError(HarnessError):
    """Raised when a suite declares two cases with the same name."""

    def __init__(self, case_name: str, suite_name: str = None):
        self.case_name = case_name
        self.suite_name = suite_name
        message = f"Test case '{case_name}' is already declared"
        if suite_name:
            message += f" in suite '{suite_name}'"
        super().__init__(message)


class UnknownCaseError(HarnessError):
    """Raised when a case is requested by a name the suite never declared."""

    def __init__(self, case_name: str, suite_name: str = None):
        self.case_name = case_name
        self.suite_name = suite_name
        message = f"Test case '{case_name}' is not declared"
        if suite_name:
            message += f" in suite '{suite_name}'"
        super().__init__(message)


class DuplicateSuiteError(HarnessError):
    """Raised when two suites are registered under the same name."""

    def __init__(self, suite_name: str):
        self.suite_name = suite_name
        super().__init__(f"Test suite '{suite_name}' is already registered")


class ConfigError(HarnessError):
    """Raised when harness settings fail validation."""

    pass
