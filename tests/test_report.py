"""
Report Writer Tests

Tests for report layout, colors and the log destination fallback.
"""
import io

from stf.report import Colors, ReportWriter, log_target, use_color


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


class TestMarkerLines:
    """Test right-justified PASSED/FAILED markers."""

    def test_marker_starts_at_result_column(self):
        writer = ReportWriter(io.StringIO(), result_column=30)
        line = writer.marker_line("Running:short", True)

        assert line.endswith("[PASSED]")
        assert line.index("[") == 29
        assert line.startswith("Running:short---")

    def test_long_label_keeps_one_fill_character(self):
        writer = ReportWriter(io.StringIO(), result_column=20)
        line = writer.marker_line("Running:" + "x" * 40, False)
        assert line.endswith("x-[FAILED]")

    def test_markers_align_across_labels(self):
        writer = ReportWriter(io.StringIO())
        a = writer.marker_line("Running:a", True)
        b = writer.marker_line("Running:a much longer case name", False)
        assert a.index("[") == b.index("[") == 59


class TestReportLayout:
    """Test the full suite/run layout."""

    def setup_method(self):
        self.stream = io.StringIO()
        self.writer = ReportWriter(self.stream)

    def test_suite_block(self):
        self.writer.begin_suite("Math")
        self.writer.case_result("adds", True)
        self.writer.case_result("divides", False)
        self.writer.suite_log("In:divides expected value to be 2 but it was 3\n")
        self.writer.suite_summary("Math", 1, 2)

        lines = self.stream.getvalue().splitlines()
        assert lines[0] == ""
        assert lines[1] == "Begin testing:Math"
        assert lines[2].startswith("Running:adds") and lines[2].endswith("[PASSED]")
        assert lines[3].startswith("Running:divides") and lines[3].endswith("[FAILED]")
        assert lines[4] == "In:divides expected value to be 2 but it was 3"
        assert lines[5] == "Result completed tests [1/2]"
        assert lines[6].startswith("Math Completed with result") and lines[6].endswith("[FAILED]")

    def test_empty_log_writes_nothing(self):
        self.writer.suite_log("")
        assert self.stream.getvalue() == ""

    def test_run_summary(self):
        self.writer.run_summary(3, 3)
        lines = self.stream.getvalue().splitlines()

        assert lines[-2] == "Suites passed [3/3]"
        assert lines[-1].startswith("Testing ended with result")
        assert lines[-1].endswith("[PASSED]")

    def test_no_color_codes_by_default(self):
        self.writer.case_result("adds", True)
        assert "\033[" not in self.stream.getvalue()

    def test_color_codes_when_enabled(self):
        writer = ReportWriter(self.stream, color=True)
        writer.case_result("adds", True)
        writer.case_result("fails", False)

        output = self.stream.getvalue()
        assert f"[{Colors.GREEN}PASSED{Colors.END}]" in output
        assert f"[{Colors.RED}FAILED{Colors.END}]" in output


class TestUseColor:
    """Test color mode resolution."""

    def test_always_and_never(self):
        assert use_color(io.StringIO(), "always") is True
        assert use_color(FakeTTY(), "never") is False

    def test_auto_follows_tty(self):
        assert use_color(FakeTTY(), "auto") is True
        assert use_color(io.StringIO(), "auto") is False

    def test_auto_on_closed_stream(self):
        stream = io.StringIO()
        stream.close()
        assert use_color(stream, "auto") is False


class TestLogTarget:
    """Test opening the report destination."""

    def test_no_path_uses_stderr(self, capsys):
        with log_target(None) as out:
            out.write("report\n")
        assert capsys.readouterr().err == "report\n"

    def test_writes_to_file(self, tmp_path, capsys):
        path = tmp_path / "results.txt"
        with log_target(path) as out:
            out.write("report\n")

        assert path.read_text() == "report\n"
        assert out.closed
        assert f"Writing to file:{path}" in capsys.readouterr().err

    def test_unwritable_path_falls_back_to_stderr(self, tmp_path, capsys):
        path = tmp_path / "missing" / "results.txt"
        with log_target(path) as out:
            out.write("report\n")

        err = capsys.readouterr().err
        assert f"Could not create log with filename:{path}" in err
        assert "report\n" in err
        assert not path.exists()
