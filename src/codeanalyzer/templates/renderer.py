"""Template renderer for analysis reports.

Renders a Report to Markdown or HTML using the Jinja2 templates shipped in
this package. Labels follow the report's UI language.
"""

import logging
import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape

from codeanalyzer.models.analysis import Report, UiLanguage

logger = logging.getLogger(__name__)

_BACKTICK_RUN_RE = re.compile(r"`+")

TEMPLATES = {
    "markdown": "report.md.j2",
    "html": "report.html.j2",
}

LABELS: dict[UiLanguage, dict[str, str]] = {
    UiLanguage.NL: {
        "title": "Code Analyse Rapport",
        "file": "Bestand",
        "date": "Datum",
        "provider": "AI provider",
        "analysis_time": "Analyseduur",
        "demo_notice": "Demo analyse: er is geen AI-resultaat beschikbaar.",
        "overall": "Samenvatting",
        "strengths": "Sterke punten",
        "improvements": "Verbeterpunten",
        "best_practices": "Best practices",
        "security": "Beveiliging",
        "performance": "Performance",
        "statistics": "Statistieken",
        "complexity": "Complexiteit",
        "readability": "Leesbaarheid",
        "maintainability": "Onderhoudbaarheid",
        "efficiency": "Efficiëntie",
        "original_code": "Originele code",
        "improved_code": "Verbeterde code",
        "none": "Geen",
    },
    UiLanguage.EN: {
        "title": "Code Analysis Report",
        "file": "File",
        "date": "Date",
        "provider": "AI provider",
        "analysis_time": "Analysis time",
        "demo_notice": "Demo analysis: no AI result is available.",
        "overall": "Summary",
        "strengths": "Strengths",
        "improvements": "Improvements",
        "best_practices": "Best practices",
        "security": "Security",
        "performance": "Performance",
        "statistics": "Statistics",
        "complexity": "Complexity",
        "readability": "Readability",
        "maintainability": "Maintainability",
        "efficiency": "Efficiency",
        "original_code": "Original code",
        "improved_code": "Improved code",
        "none": "None",
    },
}

# Complexity values as shown to readers; unknown values are shown as given
COMPLEXITY_NAMES: dict[UiLanguage, dict[str, str]] = {
    UiLanguage.NL: {
        "very_low": "zeer laag",
        "low": "laag",
        "medium": "gemiddeld",
        "high": "hoog",
        "very_high": "zeer hoog",
    },
    UiLanguage.EN: {
        "very_low": "very low",
        "low": "low",
        "medium": "medium",
        "high": "high",
        "very_high": "very high",
    },
}


def format_datetime(dt: datetime | str | None) -> str:
    """Format datetime for display in reports.

    Args:
        dt: Datetime object or ISO string

    Returns:
        Formatted date string
    """
    if dt is None:
        return "N/A"

    if isinstance(dt, str):
        try:
            dt = datetime.fromisoformat(dt)
        except ValueError:
            return dt

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)

    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")


class ReportRenderer:
    """Renders analysis reports.

    Usage:
        renderer = ReportRenderer()
        markdown = renderer.render(report)
        renderer.render_to_file(report, Path("report.html"), fmt="html")
    """

    def __init__(self) -> None:
        """Initialize the report renderer."""
        self._env = Environment(
            loader=PackageLoader("codeanalyzer", "templates"),
            autoescape=select_autoescape(["html", "html.j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters["format_datetime"] = format_datetime

    def render(
        self,
        report: Report,
        fmt: str = "markdown",
        language: str | UiLanguage | None = None,
    ) -> str:
        """Render a report.

        Args:
            report: Report to render
            fmt: Output format (markdown, html)
            language: Label language (defaults to the report's language)

        Returns:
            Rendered document

        Raises:
            ValueError: If the format is unknown or rendering fails
        """
        template_name = TEMPLATES.get(fmt)
        if template_name is None:
            raise ValueError(f"Unknown report format: {fmt}. Valid: {sorted(TEMPLATES)}")

        lang = UiLanguage.parse(language) if language else report.ui_language

        try:
            template = self._env.get_template(template_name)
            rendered = template.render(**self._build_context(report, lang))
        except TemplateError as e:
            logger.error("Template rendering failed: %s", e)
            raise ValueError(f"Template rendering failed: {e}") from e

        logger.debug("Rendered %s report (%d characters)", fmt, len(rendered))
        return rendered

    def _build_context(self, report: Report, language: UiLanguage) -> dict[str, Any]:
        """Build the template rendering context."""
        analysis = report.analysis
        complexity = analysis.statistics.complexity
        return {
            "lang": language.value,
            "labels": LABELS[language],
            "report": report,
            "file_name": report.file_name,
            "timestamp": report.timestamp,
            "ai_provider": report.ai_provider,
            "ai_enabled": analysis.ai_enabled,
            "analysis_time": analysis.analysis_time,
            "feedback": analysis.feedback,
            "statistics": analysis.statistics,
            "complexity": COMPLEXITY_NAMES[language].get(complexity, complexity),
            "original_code": report.original_code,
            "improved_code": analysis.improved_code,
            "code_language": _code_fence_language(report.file_name),
            "code_fence": _code_fence(report.original_code, analysis.improved_code),
            "sections": [
                ("strengths", analysis.feedback.strengths),
                ("improvements", analysis.feedback.improvements),
                ("best_practices", analysis.feedback.best_practices),
                ("security", analysis.feedback.security),
                ("performance", analysis.feedback.performance),
            ],
        }

    def render_to_file(
        self,
        report: Report,
        output_path: Path,
        fmt: str = "markdown",
        language: str | UiLanguage | None = None,
    ) -> Path:
        """Render a report and write it to a file.

        Args:
            report: Report to render
            output_path: Path to write output file
            fmt: Output format (markdown, html)
            language: Label language (defaults to the report's language)

        Returns:
            Path to written file
        """
        content = self.render(report, fmt, language)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        logger.info("Wrote report to %s", output_path)

        return output_path


def _code_fence(*texts: str) -> str:
    """Return a backtick fence longer than any backtick run in the texts."""
    longest = max((len(run) for text in texts for run in _BACKTICK_RUN_RE.findall(text)), default=0)
    return "`" * max(3, longest + 1)


def _code_fence_language(file_name: str) -> str:
    suffix = Path(file_name).suffix.lstrip(".").lower()
    return {"js": "javascript", "ts": "typescript", "py": "python"}.get(suffix, suffix)
