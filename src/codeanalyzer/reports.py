"""Report persistence.

Each report is stored as reports/report-<id>.json, indented for diffing.
"""

import json
import logging
import re
from pathlib import Path

from codeanalyzer.models.analysis import Report

logger = logging.getLogger(__name__)

_REPORT_FILE_RE = re.compile(r"^report-(\d+)\.json$")


class ReportNotFoundError(LookupError):
    """Raised when no stored report has the requested id."""

    def __init__(self, report_id: int) -> None:
        super().__init__(f"Report not found: {report_id}")
        self.report_id = report_id


class ReportStore:
    """Stores and loads analysis reports as JSON files."""

    def __init__(self, reports_dir: Path | str = "reports") -> None:
        """Initialize the report store.

        Args:
            reports_dir: Directory holding report files
        """
        self.reports_dir = Path(reports_dir)

    def path_for(self, report_id: int) -> Path:
        """Return the file path of a report id."""
        return self.reports_dir / f"report-{report_id}.json"

    def save(self, report: Report) -> Path:
        """Write a report to disk.

        Args:
            report: Report to store

        Returns:
            Path of the written file

        Raises:
            FileExistsError: If a report with the same id is already stored
        """
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(report.id)
        with open(path, "x", encoding="utf-8") as f:
            f.write(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
        logger.debug("Saved report %s to %s", report.id, path)
        return path

    def load(self, report_id: int) -> Report:
        """Load a stored report.

        Args:
            report_id: Report identifier

        Returns:
            The stored Report

        Raises:
            ReportNotFoundError: If no report has this id
            ValueError: If the stored file is not a valid report
        """
        path = self.path_for(report_id)
        if not path.exists():
            raise ReportNotFoundError(report_id)

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return Report.from_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise ValueError(f"Corrupt report file {path}: {e}") from e

    def list_reports(self) -> list[int]:
        """List stored report ids, newest first."""
        if not self.reports_dir.is_dir():
            return []

        ids = []
        for entry in self.reports_dir.iterdir():
            match = _REPORT_FILE_RE.match(entry.name)
            if match:
                ids.append(int(match.group(1)))
        return sorted(ids, reverse=True)
