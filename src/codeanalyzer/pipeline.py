"""Analysis pipeline: from a submitted file to a stored report.

Stages:
1. Upload validation (extension, size, empty file)
2. Review through the AnalysisOrchestrator (model or placeholder)
3. Report assembly
4. Persistence to the report store
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from codeanalyzer.analysis import AnalysisOrchestrator
from codeanalyzer.config import AnalyzerConfig
from codeanalyzer.llm import LLMClient, create_client
from codeanalyzer.models.analysis import AnalysisRequest, Report, UiLanguage
from codeanalyzer.reports import ReportStore
from codeanalyzer.upload import detect_target_language, sanitize_file_name, validate_upload

logger = logging.getLogger(__name__)


@dataclass
class PipelineOptions:
    """Options for controlling pipeline execution.

    Attributes:
        ui_language: Language of the review text (defaults to config)
        target_language: Programming language (detected from extension if None)
        skip_llm: Use placeholder content without calling the model
        persist: Write the report to the report store
    """

    ui_language: str | None = None
    target_language: str | None = None
    skip_llm: bool = False
    persist: bool = True


class AnalysisPipeline:
    """Runs the review of one file and stores the resulting report."""

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        client: LLMClient | None = None,
    ) -> None:
        """Initialize the analysis pipeline.

        Args:
            config: codeanalyzer configuration (uses defaults if None)
            client: Model client; created from config.llm if None
        """
        self.config = config or AnalyzerConfig()
        self._client = client if client is not None else create_client(self.config.llm)
        self.store = ReportStore(self.config.output.reports_dir)

    def run(self, path: Path, options: PipelineOptions | None = None) -> Report:
        """Analyze a file and return its report.

        Args:
            path: File to analyze
            options: Pipeline execution options

        Returns:
            Report for the file (stored unless options.persist is False)

        Raises:
            UploadError: If the file is rejected
        """
        options = options or PipelineOptions()

        code = validate_upload(path, self.config.upload)

        request = AnalysisRequest(
            code=code,
            file_name=sanitize_file_name(path.name),
            ui_language=UiLanguage.parse(options.ui_language or self.config.output.language),
            target_language=options.target_language or detect_target_language(path.name),
        )

        orchestrator = AnalysisOrchestrator(None if options.skip_llm else self._client)

        logger.info("Analysis started: %s", request.file_name)
        logger.info("AI provider: %s", orchestrator.provider)
        logger.debug("Code length: %d characters", len(request.code))

        analysis = orchestrator.run(request)
        report = Report.create(request, analysis, ai_provider=orchestrator.provider)

        if options.persist:
            saved = self.store.save(report)
            logger.info("Report %s saved to %s", report.id, saved)

        logger.info("Analysis complete: %s (AI used: %s)", request.file_name, analysis.ai_enabled)
        return report
