"""Unit tests for analysis entities."""

from datetime import UTC, datetime

import pytest

from codeanalyzer.models.analysis import (
    AnalysisRequest,
    AnalysisResult,
    Feedback,
    Report,
    Statistics,
    UiLanguage,
)


class TestUiLanguage:
    """Tests for UiLanguage parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("en", UiLanguage.EN),
            ("EN", UiLanguage.EN),
            (" nl ", UiLanguage.NL),
            ("fr", UiLanguage.NL),
            ("", UiLanguage.NL),
            (None, UiLanguage.NL),
            (UiLanguage.EN, UiLanguage.EN),
        ],
    )
    def test_parse(self, value: str | UiLanguage | None, expected: UiLanguage) -> None:
        """Test known codes parse and anything else falls back to Dutch."""
        assert UiLanguage.parse(value) is expected


class TestAnalysisRequest:
    """Tests for AnalysisRequest."""

    def test_defaults(self) -> None:
        """Test Dutch and javascript are the defaults."""
        request = AnalysisRequest(code="x", file_name="a.js")

        assert request.ui_language is UiLanguage.NL
        assert request.target_language == "javascript"
        assert request.is_english is False

    def test_is_immutable(self) -> None:
        """Test requests cannot be modified."""
        request = AnalysisRequest(code="x", file_name="a.js")

        with pytest.raises(AttributeError):
            request.code = "y"  # type: ignore[misc]


class TestFeedback:
    """Tests for Feedback serialisation."""

    def test_to_dict_uses_reply_keys(self) -> None:
        """Test best practices serialise as bestPractices."""
        feedback = Feedback(overall="ok", best_practices=["Use linting"])

        data = feedback.to_dict()

        assert data["bestPractices"] == ["Use linting"]
        assert "best_practices" not in data

    def test_from_dict_coerces_values(self) -> None:
        """Test scalars become one-item lists and nulls are dropped."""
        feedback = Feedback.from_dict(
            {"overall": None, "strengths": "Clear", "security": ["a", None, 3]}
        )

        assert feedback.overall == ""
        assert feedback.strengths == ["Clear"]
        assert feedback.security == ["a", "3"]
        assert feedback.performance == []


class TestStatistics:
    """Tests for Statistics serialisation."""

    def test_numbers_become_text(self) -> None:
        """Test numeric scores are kept as text."""
        statistics = Statistics.from_dict({"complexity": "high", "readability": 7})

        assert statistics.readability == "7"
        assert statistics.complexity == "high"

    def test_missing_complexity_defaults_to_medium(self) -> None:
        """Test a missing complexity reads as medium."""
        assert Statistics.from_dict({}).complexity == "medium"


class TestAnalysisResult:
    """Tests for AnalysisResult."""

    def test_from_dict_requires_sections(self) -> None:
        """Test feedback and statistics objects are required."""
        with pytest.raises(ValueError, match="feedback"):
            AnalysisResult.from_dict({"statistics": {}})
        with pytest.raises(ValueError, match="statistics"):
            AnalysisResult.from_dict({"feedback": {}})
        with pytest.raises(ValueError, match="feedback"):
            AnalysisResult.from_dict({"feedback": "text", "statistics": {}})

    def test_from_dict_rejects_non_object(self) -> None:
        """Test a JSON array is rejected."""
        with pytest.raises(ValueError, match="not a JSON object"):
            AnalysisResult.from_dict([1, 2])  # type: ignore[arg-type]

    def test_missing_improved_code_uses_default(self) -> None:
        """Test the original code stands in for a missing improvedCode."""
        result = AnalysisResult.from_dict(
            {"feedback": {}, "statistics": {}, "improvedCode": ""},
            default_code="original",
        )

        assert result.improved_code == "original"

    def test_reply_defaults_are_not_ai(self) -> None:
        """Test flags default to False until the orchestrator sets them."""
        result = AnalysisResult.from_dict({"feedback": {}, "statistics": {}})

        assert result.ai_enabled is False
        assert result.ai_attempted is False
        assert result.analysis_time == "0s"

    def test_to_dict_keys(self) -> None:
        """Test serialised keys."""
        result = AnalysisResult(improved_code="x", analysis_time="1.00s", ai_enabled=True)

        assert set(result.to_dict()) == {
            "improvedCode",
            "feedback",
            "statistics",
            "analysisTime",
            "aiEnabled",
            "aiAttempted",
        }


class TestReport:
    """Tests for Report."""

    def test_create_uses_epoch_millis(self) -> None:
        """Test the id is the creation time in milliseconds."""
        request = AnalysisRequest(code="x = 1", file_name="a.py", ui_language=UiLanguage.EN)
        result = AnalysisResult(improved_code="x = 1")

        report = Report.create(request, result, ai_provider="groq")

        assert report.id == int(report.timestamp.timestamp() * 1000)
        assert report.file_name == "a.py"
        assert report.original_code == "x = 1"
        assert report.ui_language is UiLanguage.EN
        assert report.ai_provider == "groq"

    def test_naive_timestamp_becomes_utc(self) -> None:
        """Test naive timestamps are treated as UTC."""
        report = Report(
            id=1,
            file_name="a.py",
            original_code="",
            analysis=AnalysisResult(improved_code=""),
            timestamp=datetime(2026, 1, 1, 12, 0),
        )

        assert report.timestamp.tzinfo is UTC

    def test_dict_round_trip(self) -> None:
        """Test a stored report loads back identically."""
        report = Report(
            id=1767225600000,
            file_name="users.js",
            original_code="var a = 1;",
            analysis=AnalysisResult(
                improved_code="const a = 1;",
                feedback=Feedback(overall="Fine", improvements=["Use const"]),
                statistics=Statistics(complexity="low", readability="9"),
                analysis_time="0.84s",
                ai_enabled=True,
                ai_attempted=True,
            ),
            ui_language=UiLanguage.EN,
            ai_provider="groq",
            timestamp=datetime(2026, 1, 1, tzinfo=UTC),
        )

        data = report.to_dict()

        assert data["language"] == "en"
        assert data["aiProvider"] == "groq"
        assert data["improvedCode"] == "const a = 1;"
        assert Report.from_dict(data) == report
