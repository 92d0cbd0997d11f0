"""codeanalyzer CLI interface.

Commands:
- analyze: Review a source file and write a report
- show: Render a stored report
- list: List stored reports
- check: Verify that the configured model is reachable
- init: Write a default configuration file

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log lines
- --version: Show version and exit
"""

from pathlib import Path
from typing import Annotated

import typer

from codeanalyzer import __version__
from codeanalyzer.config import AnalyzerConfig, create_default_config, load_config
from codeanalyzer.models.analysis import UiLanguage
from codeanalyzer.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="codeanalyzer",
    help="AI code review reports for single source files",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: AnalyzerConfig | None = None
_logger = get_logger()

REPORT_NOT_FOUND = {
    UiLanguage.NL: "Rapport niet gevonden",
    UiLanguage.EN: "Report not found",
}

REPORT_LOAD_ERROR = {
    UiLanguage.NL: "Fout bij laden rapport",
    UiLanguage.EN: "Error loading report",
}

FORMAT_SUFFIXES = {"markdown": ".md", "html": ".html"}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"codeanalyzer {__version__}")
        raise typer.Exit()


def _get_config() -> AnalyzerConfig:
    return _config if _config is not None else AnalyzerConfig()


def _resolve_format(format: str | None, config: AnalyzerConfig) -> str:
    fmt = (format or config.output.format).lower()
    if fmt not in FORMAT_SUFFIXES:
        _logger.error(f"Invalid format: {fmt}. Use 'markdown' or 'html'")
        raise typer.Exit(1)
    return fmt


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON log output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """codeanalyzer - AI code review reports.

    Sends a source file to a chat-completion model and renders the review.
    Without an API key, placeholder reports are produced.
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except (ValueError, OSError) as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    for warning in _config.llm.validate():
        _logger.debug(warning)


# =============================================================================
# analyze command
# =============================================================================


@app.command()
def analyze(
    file: Annotated[
        Path,
        typer.Argument(help="Source file to review"),
    ],
    lang: Annotated[
        str | None,
        typer.Option(
            "--lang",
            "-l",
            help="Review language: nl or en (overrides config)",
        ),
    ] = None,
    target_language: Annotated[
        str | None,
        typer.Option(
            "--target-language",
            "-t",
            help="Programming language of the file (detected from extension by default)",
        ),
    ] = None,
    format: Annotated[
        str | None,
        typer.Option(
            "--format",
            "-f",
            help="Report format: markdown, html (overrides config)",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Rendered report path (default: next to the stored report)",
        ),
    ] = None,
    skip_llm: Annotated[
        bool,
        typer.Option(
            "--skip-llm",
            help="Skip the model call (use placeholder content instead)",
        ),
    ] = False,
    no_save: Annotated[
        bool,
        typer.Option(
            "--no-save",
            help="Do not store the report JSON",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Print the rendered report without writing files",
        ),
    ] = False,
) -> None:
    """Review a source file and write a report.

    Exit codes:
        0: Report generated (with model or placeholder content)
        1: File rejected or report could not be written
    """
    from codeanalyzer.pipeline import AnalysisPipeline, PipelineOptions
    from codeanalyzer.templates import ReportRenderer
    from codeanalyzer.upload import UploadError, get_error_message

    config = _get_config()
    fmt = _resolve_format(format, config)
    ui_language = UiLanguage.parse(lang or config.output.language)

    options = PipelineOptions(
        ui_language=ui_language.value,
        target_language=target_language,
        skip_llm=skip_llm,
        persist=not (no_save or dry_run),
    )

    pipeline = AnalysisPipeline(config=config)

    try:
        report = pipeline.run(file, options)
    except UploadError as e:
        _logger.error(f"Rejected {file}: {e}")
        typer.echo(f"❌ {get_error_message(e, ui_language)}", err=True)
        raise typer.Exit(1)
    except OSError as e:
        _logger.error(f"Analysis of {file} failed: {e}")
        typer.echo(f"❌ {get_error_message(e, ui_language)}", err=True)
        raise typer.Exit(1)

    renderer = ReportRenderer()

    try:
        if dry_run:
            typer.echo(renderer.render(report, fmt))
            _logger.info("Dry run complete - no files written")
        else:
            output_path = output or pipeline.store.path_for(report.id).with_suffix(
                FORMAT_SUFFIXES[fmt]
            )
            rendered_path = renderer.render_to_file(report, output_path, fmt)
            typer.echo(f"\n📄 Report written to: {rendered_path}")
            if not no_save:
                typer.echo(f"   Report id: {report.id}")
    except (ValueError, OSError) as e:
        _logger.error(f"Rendering failed: {e}")
        raise typer.Exit(1)

    if not report.analysis.ai_enabled:
        typer.echo("ℹ️  Placeholder content (no AI result)")


# =============================================================================
# show command
# =============================================================================


@app.command()
def show(
    report_id: Annotated[
        int,
        typer.Argument(help="Id of a stored report"),
    ],
    lang: Annotated[
        str | None,
        typer.Option(
            "--lang",
            "-l",
            help="Label language: nl or en (defaults to the report's language)",
        ),
    ] = None,
    format: Annotated[
        str | None,
        typer.Option(
            "--format",
            "-f",
            help="Report format: markdown, html (overrides config)",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write to this file instead of stdout",
        ),
    ] = None,
) -> None:
    """Render a stored report."""
    from codeanalyzer.reports import ReportNotFoundError, ReportStore
    from codeanalyzer.templates import ReportRenderer

    config = _get_config()
    fmt = _resolve_format(format, config)
    message_language = UiLanguage.parse(lang or config.output.language)

    store = ReportStore(config.output.reports_dir)

    try:
        report = store.load(report_id)
    except ReportNotFoundError as e:
        _logger.error(str(e))
        typer.echo(f"❌ {REPORT_NOT_FOUND[message_language]}", err=True)
        raise typer.Exit(1)
    except ValueError as e:
        _logger.error(str(e))
        typer.echo(f"❌ {REPORT_LOAD_ERROR[message_language]}", err=True)
        raise typer.Exit(1)

    renderer = ReportRenderer()
    try:
        if output is not None:
            renderer.render_to_file(report, output, fmt, language=lang)
            typer.echo(f"📄 Report written to: {output}")
        else:
            typer.echo(renderer.render(report, fmt, language=lang))
    except (ValueError, OSError) as e:
        _logger.error(f"Rendering failed: {e}")
        raise typer.Exit(1)


# =============================================================================
# list command
# =============================================================================


@app.command(name="list")
def list_reports() -> None:
    """List stored reports, newest first."""
    from codeanalyzer.reports import ReportStore

    store = ReportStore(_get_config().output.reports_dir)
    report_ids = store.list_reports()

    if not report_ids:
        typer.echo("No reports stored")
        return

    for report_id in report_ids:
        try:
            report = store.load(report_id)
        except ValueError as e:
            _logger.warning(str(e))
            continue
        marker = "🤖" if report.analysis.ai_enabled else "🎭"
        typer.echo(
            f"{report.id}  {marker}  {report.timestamp.strftime('%Y-%m-%d %H:%M')}  {report.file_name}"
        )


# =============================================================================
# check command
# =============================================================================


@app.command()
def check() -> None:
    """Verify that the configured model is reachable.

    Exit codes:
        0: Model answered
        1: No model configured, or the model could not be reached
    """
    from codeanalyzer.llm import create_client

    llm_config = _get_config().llm
    client = create_client(llm_config)

    if client is None:
        typer.echo("❌ No model configured - placeholder reports will be generated")
        typer.echo(f"   Set {llm_config.api_key_env} or llm.api_key in the config file")
        raise typer.Exit(1)

    typer.echo(f"🔍 Checking {llm_config.provider} ({llm_config.model})...")
    for warning in llm_config.validate():
        typer.echo(f"   ⚠️  {warning}")

    if client.check_available():
        typer.echo("✅ Model is reachable")
        raise typer.Exit(0)

    typer.echo("❌ Model could not be reached")
    raise typer.Exit(1)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
) -> None:
    """Write a default configuration file to .codeanalyzer/config.yaml."""
    config_dir = Path(".codeanalyzer")
    config_file = config_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_dir.mkdir(exist_ok=True)
    config_file.write_text(create_default_config(), encoding="utf-8")
    _logger.info(f"Created config: {config_file}")

    typer.echo("\n✅ codeanalyzer configuration initialized")
    typer.echo(f"   Config: {config_file}")


if __name__ == "__main__":
    app()
