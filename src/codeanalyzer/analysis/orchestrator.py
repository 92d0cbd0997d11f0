"""Analysis orchestrator: prompt, remote call, decode, fallback.

The orchestrator never raises to its caller. Every failure degrades to the
placeholder result, differentiated only by AnalysisResult.ai_attempted.
"""

import logging
import time

from codeanalyzer.llm.client import LLMClient, LLMError, LLMErrorKind
from codeanalyzer.llm.decode import ResponseDecodeError, decode_with_recovery
from codeanalyzer.llm.prompts import (
    PLACEHOLDER_STATISTICS,
    SYSTEM_PROMPT,
    build_analysis_prompt,
    get_placeholder_feedback,
)
from codeanalyzer.models.analysis import (
    DEFAULT_TARGET_LANGUAGE,
    AnalysisRequest,
    AnalysisResult,
    Feedback,
    Statistics,
    UiLanguage,
)

logger = logging.getLogger(__name__)

# Log hint per remote failure class
_FAILURE_HINTS = {
    LLMErrorKind.RATE_LIMIT: "Rate limit reached; wait before analysing again",
    LLMErrorKind.BAD_REQUEST: "Model unavailable or request rejected; check the configured model",
    LLMErrorKind.AUTHENTICATION: "API key rejected; check the configured key",
    LLMErrorKind.CONNECTION: "Provider unreachable; check network and api_base",
}


def build_placeholder_result(
    request: AnalysisRequest,
    ai_attempted: bool = False,
) -> AnalysisResult:
    """Build the deterministic placeholder result for a request.

    Args:
        request: Analysis request
        ai_attempted: Whether a remote call was made before falling back

    Returns:
        Fully populated AnalysisResult with ai_enabled=False
    """
    return AnalysisResult(
        improved_code=request.code,
        feedback=Feedback.from_dict(get_placeholder_feedback(request.ui_language)),
        statistics=Statistics.from_dict(PLACEHOLDER_STATISTICS),
        analysis_time="0s",
        ai_enabled=False,
        ai_attempted=ai_attempted,
    )


def format_elapsed(seconds: float) -> str:
    """Format a duration as e.g. "1.42s"."""
    return f"{max(seconds, 0.0):.2f}s"


class AnalysisOrchestrator:
    """Runs one code review against the configured model client.

    Usage:
        orchestrator = AnalysisOrchestrator(create_client(config.llm))
        result = orchestrator.analyze(code, "app.js", "en", "javascript")

    A None client selects placeholder-only mode.
    """

    def __init__(self, client: LLMClient | None = None) -> None:
        """Initialize the orchestrator.

        Args:
            client: Model client, or None for placeholder-only mode
        """
        self.client = client

    @property
    def ai_enabled(self) -> bool:
        """Return True if a remote model is configured."""
        return self.client is not None

    @property
    def provider(self) -> str:
        """Name of the configured provider, or "none"."""
        return self.client.provider if self.client is not None else "none"

    def analyze(
        self,
        code: str,
        file_name: str,
        ui_language: str | UiLanguage = UiLanguage.NL,
        target_language: str = DEFAULT_TARGET_LANGUAGE,
    ) -> AnalysisResult:
        """Analyze code and return a fully populated result.

        Args:
            code: Source code text
            file_name: Original file name
            ui_language: Language of the review text (nl, en)
            target_language: Programming language of the code

        Returns:
            AnalysisResult from the model, or the placeholder on any failure
        """
        request = AnalysisRequest(
            code=code,
            file_name=file_name,
            ui_language=UiLanguage.parse(ui_language),
            target_language=target_language or DEFAULT_TARGET_LANGUAGE,
        )
        return self.run(request)

    def run(self, request: AnalysisRequest) -> AnalysisResult:
        """Analyze a prepared request.

        Args:
            request: Analysis request

        Returns:
            AnalysisResult from the model, or the placeholder on any failure
        """
        if self.client is None:
            logger.info("No model configured, using placeholder analysis")
            return build_placeholder_result(request)

        start = time.monotonic()
        logger.info(
            "Requesting review of %s from %s (%s)",
            request.file_name,
            self.client.provider,
            self.client.config.model,
        )

        try:
            response = self.client.complete(
                build_analysis_prompt(request),
                system_prompt=SYSTEM_PROMPT,
            )
        except LLMError as e:
            self._log_remote_failure(e)
            return build_placeholder_result(request, ai_attempted=True)
        except Exception as e:
            self._log_remote_failure(LLMError(f"Unexpected client error: {e!r}"))
            return build_placeholder_result(request, ai_attempted=True)

        analysis_time = format_elapsed(time.monotonic() - start)
        logger.info(
            "%s answered in %s (%d characters)",
            self.client.provider,
            analysis_time,
            len(response.content),
        )

        try:
            data = decode_with_recovery(response.content)
            result = AnalysisResult.from_dict(data, default_code=request.code)
        except (ResponseDecodeError, ValueError) as e:
            logger.error(
                "Could not decode model reply: %s",
                e,
                extra={"extra_data": {"failure": "decode"}},
            )
            logger.info("Falling back to placeholder analysis")
            return build_placeholder_result(request, ai_attempted=True)
        except Exception as e:
            logger.error(
                "Unexpected error while decoding model reply: %r",
                e,
                extra={"extra_data": {"failure": "decode"}},
            )
            logger.info("Falling back to placeholder analysis")
            return build_placeholder_result(request, ai_attempted=True)

        result.analysis_time = analysis_time
        result.ai_enabled = True
        result.ai_attempted = True

        logger.info(
            "Review complete: complexity=%s, readability=%s, %d improvements",
            result.statistics.complexity,
            result.statistics.readability,
            len(result.feedback.improvements),
        )
        return result

    def _log_remote_failure(self, error: LLMError) -> None:
        """Log a failed remote call with its failure class."""
        logger.error(
            "%s analysis failed [%s]: %s",
            self.provider,
            error.kind.value,
            error,
            extra={
                "extra_data": {
                    "failure": error.kind.value,
                    "status_code": error.status_code,
                }
            },
        )
        hint = _FAILURE_HINTS.get(error.kind)
        if hint:
            logger.warning(hint)
        logger.info("Falling back to placeholder analysis")
