"""Code review orchestration."""

from codeanalyzer.analysis.orchestrator import (
    AnalysisOrchestrator,
    build_placeholder_result,
    format_elapsed,
)

__all__ = ["AnalysisOrchestrator", "build_placeholder_result", "format_elapsed"]
