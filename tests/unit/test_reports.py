"""Unit tests for the report store."""

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from codeanalyzer.models.analysis import AnalysisResult, Feedback, Report, UiLanguage
from codeanalyzer.reports import ReportNotFoundError, ReportStore


def make_report(report_id: int, file_name: str = "users.js") -> Report:
    """Build a small report."""
    return Report(
        id=report_id,
        file_name=file_name,
        original_code="var x = 1;",
        analysis=AnalysisResult(
            improved_code="const x = 1;",
            feedback=Feedback(overall="Prima", improvements=["Gebruik const"]),
        ),
        ui_language=UiLanguage.NL,
        timestamp=datetime(2026, 3, 1, 9, 30, tzinfo=UTC),
    )


@pytest.fixture
def store(tmp_path: Path) -> ReportStore:
    """Create a store in a temporary directory."""
    return ReportStore(tmp_path / "reports")


class TestReportStore:
    """Tests for ReportStore."""

    def test_save_writes_named_file(self, store: ReportStore) -> None:
        """Test reports are written as report-<id>.json."""
        path = store.save(make_report(1772357400000))

        assert path == store.reports_dir / "report-1772357400000.json"
        assert path.exists()

    def test_saved_json_is_indented_and_readable(self, store: ReportStore) -> None:
        """Test the stored JSON keeps non-ASCII text and uses 2-space indentation."""
        report = make_report(1)
        report.analysis.feedback.overall = "Efficiëntie is goed"

        path = store.save(report)
        text = path.read_text(encoding="utf-8")

        assert "Efficiëntie" in text
        assert '\n  "id": 1,' in text
        assert json.loads(text)["fileName"] == "users.js"

    def test_save_refuses_to_overwrite(self, store: ReportStore) -> None:
        """Test a second report with the same id leaves the first intact."""
        store.save(make_report(5, file_name="first.js"))

        with pytest.raises(FileExistsError):
            store.save(make_report(5, file_name="second.js"))

        assert store.load(5).file_name == "first.js"

    def test_load_round_trip(self, store: ReportStore) -> None:
        """Test a saved report loads back equal."""
        report = make_report(42)
        store.save(report)

        assert store.load(42) == report

    def test_load_missing(self, store: ReportStore) -> None:
        """Test a missing id raises ReportNotFoundError."""
        with pytest.raises(ReportNotFoundError, match="Report not found: 7"):
            store.load(7)

    def test_not_found_is_lookup_error(self) -> None:
        """Test callers can catch LookupError."""
        assert issubclass(ReportNotFoundError, LookupError)

    def test_load_corrupt_file(self, store: ReportStore) -> None:
        """Test invalid JSON raises ValueError."""
        store.reports_dir.mkdir(parents=True)
        store.path_for(9).write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Corrupt report"):
            store.load(9)

    def test_load_incomplete_file(self, store: ReportStore) -> None:
        """Test a report without sections raises ValueError."""
        store.reports_dir.mkdir(parents=True)
        store.path_for(9).write_text('{"id": 9, "timestamp": "2026-01-01T00:00:00+00:00"}')

        with pytest.raises(ValueError):
            store.load(9)

    def test_list_newest_first(self, store: ReportStore) -> None:
        """Test ids are listed in descending order and stray files are ignored."""
        for report_id in (100, 300, 200):
            store.save(make_report(report_id))
        (store.reports_dir / "notes.txt").write_text("x")
        (store.reports_dir / "report-abc.json").write_text("{}")

        assert store.list_reports() == [300, 200, 100]

    def test_list_without_directory(self, store: ReportStore) -> None:
        """Test a missing directory lists nothing."""
        assert store.list_reports() == []
