"""
Report Writer

Human-readable run report. One line per case with a right-justified
[PASSED]/[FAILED] marker, the suite log, a passed/total summary per suite and
a final overall result. Not intended to be machine parsed.
"""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

logger = logging.getLogger(__name__)

DEFAULT_RESULT_COLUMN = 60


class Colors:
    """Terminal colors."""

    RED = "\033[31m"
    GREEN = "\033[32m"
    WHITE = "\033[37m"
    END = "\033[0m"


def use_color(stream: TextIO, mode: str = "auto") -> bool:
    """Resolve a color mode (auto / always / never) for a stream."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


class ReportWriter:
    """Writes the run report to a text stream."""

    def __init__(
        self,
        stream: TextIO,
        color: bool = False,
        result_column: int = DEFAULT_RESULT_COLUMN,
    ):
        self.stream = stream
        self.color = color
        self.result_column = result_column

    def _c(self, text: str, code: str) -> str:
        if not self.color:
            return text
        return f"{code}{text}{Colors.END}"

    def _write(self, text: str = "") -> None:
        self.stream.write(text)

    def _line(self, text: str = "") -> None:
        self.stream.write(text + "\n")
        self.stream.flush()

    def marker_line(self, label: str, passed: bool) -> str:
        """Label padded with '-' so the marker starts at result_column."""
        fill = "-" * max(self.result_column - len(label) - 1, 1)
        if passed:
            marker = "[" + self._c("PASSED", Colors.GREEN) + "]"
        else:
            marker = "[" + self._c("FAILED", Colors.RED) + "]"
        return f"{label}{fill}{marker}"

    def begin_suite(self, suite_name: str) -> None:
        self._line()
        self._line(f"Begin testing:{suite_name}")

    def case_result(self, case_name: str, passed: bool) -> None:
        self._line(self.marker_line(f"Running:{case_name}", passed))

    def suite_log(self, log_text: str) -> None:
        if log_text:
            self._write(self._c(log_text.rstrip("\n"), Colors.RED) + "\n")

    def suite_summary(self, suite_name: str, passed: int, total: int) -> None:
        self._line(self._c(f"Result completed tests [{passed}/{total}]", Colors.GREEN))
        self._line(self.marker_line(f"{suite_name} Completed with result", passed == total))

    def run_summary(self, passed_suites: int, total_suites: int) -> None:
        self._line()
        self._line(f"Suites passed [{passed_suites}/{total_suites}]")
        self._line(self.marker_line("Testing ended with result", passed_suites == total_suites))


@contextmanager
def log_target(path: Optional[Union[str, Path]] = None) -> Iterator[TextIO]:
    """
    Open the report destination.

    Yields the opened file when path is given and writable, otherwise
    sys.stderr. Failing to open the file is never fatal.
    """
    if not path:
        yield sys.stderr
        return

    try:
        handle = open(path, "w", encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not open report file {path}: {e}")
        sys.stderr.write(f"Could not create log with filename:{path}\n")
        yield sys.stderr
        return

    sys.stderr.write(f"Writing to file:{path}\n")
    try:
        yield handle
    finally:
        handle.close()
