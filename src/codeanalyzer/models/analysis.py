"""Analysis entities.

This module contains the entities exchanged by the analysis core:
- UiLanguage: Natural language of user-facing text
- AnalysisRequest: Immutable input of one analysis
- Feedback / Statistics: Sections of a review
- AnalysisResult: Fully populated review (model output or placeholder)
- Report: Persisted record of one analysed file

Serialised forms use the camelCase keys of the model reply format
(improvedCode, bestPractices, analysisTime, aiEnabled).
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

# Complexity levels requested from the model, lowest to highest
COMPLEXITY_LEVELS = ("very_low", "low", "medium", "high", "very_high")

DEFAULT_TARGET_LANGUAGE = "javascript"


class UiLanguage(Enum):
    """Natural language used for prompts, placeholders and report labels."""

    NL = "nl"
    EN = "en"

    @classmethod
    def parse(cls, value: "str | UiLanguage | None") -> "UiLanguage":
        """Parse a language code, falling back to Dutch for unknown values."""
        if isinstance(value, UiLanguage):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.NL


@dataclass(frozen=True)
class AnalysisRequest:
    """Input of a single analysis.

    Attributes:
        code: Source code text to review
        file_name: Original file name (used in the prompt only)
        ui_language: Language for the review text
        target_language: Programming language of the code
    """

    code: str
    file_name: str
    ui_language: UiLanguage = UiLanguage.NL
    target_language: str = DEFAULT_TARGET_LANGUAGE

    @property
    def is_english(self) -> bool:
        """Return True if the review should be written in English."""
        return self.ui_language is UiLanguage.EN


def _string_list(value: Any) -> list[str]:
    """Coerce a reply value to a list of strings."""
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item) for item in value if item is not None]
    return [str(value)]


def _require_object(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict):
        raise ValueError(f"Reply is missing the '{key}' object")
    return value


@dataclass
class Feedback:
    """Review feedback sections."""

    overall: str = ""
    strengths: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    best_practices: list[str] = field(default_factory=list)
    security: list[str] = field(default_factory=list)
    performance: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "overall": self.overall,
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "bestPractices": list(self.best_practices),
            "security": list(self.security),
            "performance": list(self.performance),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Feedback":
        """Create Feedback from a reply or stored dictionary."""
        overall = data.get("overall")
        return cls(
            overall=str(overall) if overall is not None else "",
            strengths=_string_list(data.get("strengths")),
            improvements=_string_list(data.get("improvements")),
            best_practices=_string_list(data.get("bestPractices")),
            security=_string_list(data.get("security")),
            performance=_string_list(data.get("performance")),
        )


@dataclass
class Statistics:
    """Quality scores reported by the model.

    Scores are kept as text: models answer with "7", "7/10" or "7 - readable".
    """

    complexity: str = "medium"
    readability: str = ""
    maintainability: str = ""
    efficiency: str = ""

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {
            "complexity": self.complexity,
            "readability": self.readability,
            "maintainability": self.maintainability,
            "efficiency": self.efficiency,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Statistics":
        """Create Statistics from a reply or stored dictionary."""

        def text(key: str, default: str = "") -> str:
            value = data.get(key)
            return str(value) if value is not None else default

        return cls(
            complexity=text("complexity", "medium"),
            readability=text("readability"),
            maintainability=text("maintainability"),
            efficiency=text("efficiency"),
        )


@dataclass
class AnalysisResult:
    """Complete review of one file.

    Attributes:
        improved_code: Rewritten version of the code
        feedback: Review feedback sections
        statistics: Quality scores
        analysis_time: Wall-clock duration of the model call (e.g. "1.42s")
        ai_enabled: True only when the content was produced by the model
        ai_attempted: True when a remote call was made, even if it failed
    """

    improved_code: str
    feedback: Feedback = field(default_factory=Feedback)
    statistics: Statistics = field(default_factory=Statistics)
    analysis_time: str = "0s"
    ai_enabled: bool = False
    ai_attempted: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "improvedCode": self.improved_code,
            "feedback": self.feedback.to_dict(),
            "statistics": self.statistics.to_dict(),
            "analysisTime": self.analysis_time,
            "aiEnabled": self.ai_enabled,
            "aiAttempted": self.ai_attempted,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        default_code: str = "",
    ) -> "AnalysisResult":
        """Create an AnalysisResult from a decoded model reply or stored report.

        The reply must contain "feedback" and "statistics" objects. Missing list
        fields become empty lists and a missing improvedCode falls back to
        default_code, so the result is always fully populated.

        Args:
            data: Decoded JSON object
            default_code: Code used when the reply has no improvedCode

        Returns:
            AnalysisResult instance

        Raises:
            ValueError: If required sections are missing
        """
        if not isinstance(data, dict):
            raise ValueError("Reply is not a JSON object")

        feedback = Feedback.from_dict(_require_object(data, "feedback"))
        statistics = Statistics.from_dict(_require_object(data, "statistics"))

        improved_code = data.get("improvedCode")
        if not isinstance(improved_code, str) or not improved_code:
            improved_code = default_code

        return cls(
            improved_code=improved_code,
            feedback=feedback,
            statistics=statistics,
            analysis_time=str(data.get("analysisTime", "0s")),
            ai_enabled=bool(data.get("aiEnabled", False)),
            ai_attempted=bool(data.get("aiAttempted", data.get("aiEnabled", False))),
        )


@dataclass
class Report:
    """Persisted record of one analysed file.

    Attributes:
        id: Report identifier (epoch milliseconds at creation)
        file_name: Original file name
        original_code: Code as uploaded
        analysis: Review result
        ui_language: Language of the review text
        ai_provider: Provider used, or "none" in placeholder-only mode
        timestamp: Creation time (UTC)
    """

    id: int
    file_name: str
    original_code: str
    analysis: AnalysisResult
    ui_language: UiLanguage = UiLanguage.NL
    ai_provider: str = "none"
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Ensure timestamp is timezone-aware UTC."""
        if self.timestamp.tzinfo is None:
            self.timestamp = self.timestamp.replace(tzinfo=UTC)

    @classmethod
    def create(
        cls,
        request: AnalysisRequest,
        analysis: AnalysisResult,
        ai_provider: str = "none",
    ) -> "Report":
        """Create a report for a finished analysis with a fresh id."""
        now = datetime.now(UTC)
        return cls(
            id=int(now.timestamp() * 1000),
            file_name=request.file_name,
            original_code=request.code,
            analysis=analysis,
            ui_language=request.ui_language,
            ai_provider=ai_provider,
            timestamp=now,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "fileName": self.file_name,
            "originalCode": self.original_code,
            "improvedCode": self.analysis.improved_code,
            "feedback": self.analysis.feedback.to_dict(),
            "statistics": self.analysis.statistics.to_dict(),
            "analysisTime": self.analysis.analysis_time,
            "timestamp": self.timestamp.isoformat(),
            "language": self.ui_language.value,
            "aiEnabled": self.analysis.ai_enabled,
            "aiAttempted": self.analysis.ai_attempted,
            "aiProvider": self.ai_provider,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Report":
        """Create Report from its stored dictionary."""
        original_code = str(data.get("originalCode", ""))
        return cls(
            id=int(data["id"]),
            file_name=str(data.get("fileName", "")),
            original_code=original_code,
            analysis=AnalysisResult.from_dict(data, default_code=original_code),
            ui_language=UiLanguage.parse(data.get("language")),
            ai_provider=str(data.get("aiProvider", "none")),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )
