"""codeanalyzer data models.

This module exports the core entities used throughout the application:
- AnalysisRequest: Immutable input of one analysis
- AnalysisResult: Fully populated review result
- Feedback / Statistics: Review sections
- Report: Persisted record of an analysed file
- LLMConfig: Chat-completion provider configuration
"""

from codeanalyzer.models.analysis import (
    COMPLEXITY_LEVELS,
    AnalysisRequest,
    AnalysisResult,
    Feedback,
    Report,
    Statistics,
    UiLanguage,
)
from codeanalyzer.models.llm_config import VALID_PROVIDERS, LLMConfig

__all__ = [
    "COMPLEXITY_LEVELS",
    "VALID_PROVIDERS",
    "AnalysisRequest",
    "AnalysisResult",
    "Feedback",
    "LLMConfig",
    "Report",
    "Statistics",
    "UiLanguage",
]
