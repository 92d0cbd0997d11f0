"""Unit tests for report rendering."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from codeanalyzer.analysis import build_placeholder_result
from codeanalyzer.models.analysis import (
    AnalysisRequest,
    AnalysisResult,
    Feedback,
    Report,
    Statistics,
    UiLanguage,
)
from codeanalyzer.templates import ReportRenderer, format_datetime


@pytest.fixture
def renderer() -> ReportRenderer:
    """Create a renderer."""
    return ReportRenderer()


@pytest.fixture
def ai_report() -> Report:
    """Return an English report produced by the model."""
    return Report(
        id=1772357400000,
        file_name="users.js",
        original_code="if (a == b) { run(); }",
        analysis=AnalysisResult(
            improved_code="if (a === b) { run(); }",
            feedback=Feedback(
                overall="Loose equality in a hot path.",
                strengths=["Short"],
                improvements=["Use === instead of =="],
                best_practices=[],
                security=["Escape <script> tags in output"],
                performance=[],
            ),
            statistics=Statistics(
                complexity="very_low",
                readability="8",
                maintainability="7",
                efficiency="9",
            ),
            analysis_time="1.42s",
            ai_enabled=True,
            ai_attempted=True,
        ),
        ui_language=UiLanguage.EN,
        ai_provider="groq",
        timestamp=datetime(2026, 3, 1, 9, 30, tzinfo=UTC),
    )


@pytest.fixture
def placeholder_report() -> Report:
    """Return a Dutch placeholder report."""
    request = AnalysisRequest(code="print('hoi')", file_name="main.py")
    return Report.create(request, build_placeholder_result(request))


class TestMarkdownRendering:
    """Tests for Markdown output."""

    def test_renders_sections(self, renderer: ReportRenderer, ai_report: Report) -> None:
        """Test headings, items and metadata are present."""
        output = renderer.render(ai_report)

        assert output.startswith("# Code Analysis Report: users.js")
        assert "## Strengths" in output
        assert "- Use === instead of ==" in output
        assert "| groq |" in output
        assert "| 1.42s |" in output
        assert "2026-03-01 09:30:00 UTC" in output
        assert "```javascript\nif (a === b) { run(); }\n```" in output

    def test_empty_section_shows_none(self, renderer: ReportRenderer, ai_report: Report) -> None:
        """Test empty lists render the none label."""
        output = renderer.render(ai_report)

        assert "## Best practices\n\n- None" in output

    def test_complexity_is_readable(self, renderer: ReportRenderer, ai_report: Report) -> None:
        """Test complexity levels are shown as words."""
        assert "| very low |" in renderer.render(ai_report)

    def test_ai_report_has_no_demo_notice(self, renderer: ReportRenderer, ai_report: Report) -> None:
        """Test model output is not marked as demo."""
        assert "Demo analysis" not in renderer.render(ai_report)

    def test_placeholder_report_is_dutch_with_notice(
        self,
        renderer: ReportRenderer,
        placeholder_report: Report,
    ) -> None:
        """Test Dutch labels and the demo notice for placeholder content."""
        output = renderer.render(placeholder_report)

        assert output.startswith("# Code Analyse Rapport: main.py")
        assert "> Demo analyse: er is geen AI-resultaat beschikbaar." in output
        assert "## Sterke punten" in output
        assert "| gemiddeld |" in output
        assert "```python" in output

    def test_code_with_backticks_keeps_fence(self, renderer: ReportRenderer) -> None:
        """Test code containing a triple-backtick run gets a longer fence."""
        code = "const doc = `\n```js\nrun();\n```\n`;"
        request = AnalysisRequest(code=code, file_name="doc.js", ui_language=UiLanguage.EN)
        report = Report.create(request, build_placeholder_result(request))

        output = renderer.render(report)

        assert f"````javascript\n{code}\n````" in output
        assert "\n```javascript\n" not in output

    def test_label_language_override(self, renderer: ReportRenderer, ai_report: Report) -> None:
        """Test labels can be rendered in another language."""
        output = renderer.render(ai_report, language="nl")

        assert "## Verbeterpunten" in output
        assert "| zeer laag |" in output


class TestHtmlRendering:
    """Tests for HTML output."""

    def test_renders_html_document(self, renderer: ReportRenderer, ai_report: Report) -> None:
        """Test the HTML template renders with the report language."""
        output = renderer.render(ai_report, "html")

        assert "<!DOCTYPE html>" in output
        assert '<html lang="en">' in output
        assert "Code Analysis Report" in output

    def test_escapes_content(self, renderer: ReportRenderer, ai_report: Report) -> None:
        """Test model text is HTML-escaped."""
        output = renderer.render(ai_report, "html")

        assert "&lt;script&gt;" in output
        assert "<script>" not in output
        assert "a === b" in output


class TestRendererErrors:
    """Tests for invalid input."""

    def test_unknown_format(self, renderer: ReportRenderer, ai_report: Report) -> None:
        """Test unknown formats raise ValueError."""
        with pytest.raises(ValueError, match="Unknown report format"):
            renderer.render(ai_report, "pdf")


class TestRenderToFile:
    """Tests for writing rendered reports."""

    def test_writes_file(self, renderer: ReportRenderer, ai_report: Report, tmp_path: Path) -> None:
        """Test parent directories are created and content written."""
        output_path = tmp_path / "out" / "report.md"

        result = renderer.render_to_file(ai_report, output_path)

        assert result == output_path
        assert output_path.read_text(encoding="utf-8").startswith("# Code Analysis Report")


class TestFormatDatetime:
    """Tests for format_datetime."""

    def test_datetime(self) -> None:
        """Test aware datetimes are formatted in UTC."""
        assert format_datetime(datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)) == "2026-01-02 03:04:05 UTC"

    def test_iso_string(self) -> None:
        """Test ISO strings are parsed."""
        assert format_datetime("2026-01-02T03:04:05") == "2026-01-02 03:04:05 UTC"

    def test_invalid_string_and_none(self) -> None:
        """Test unparseable values pass through and None shows N/A."""
        assert format_datetime("yesterday") == "yesterday"
        assert format_datetime(None) == "N/A"
