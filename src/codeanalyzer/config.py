"""codeanalyzer configuration system.

Configuration is YAML-based with minimal CLI overrides (--lang, --format, --output).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.codeanalyzer/config.yaml
3. ./codeanalyzer.yaml

When no API key is configured, the key is read from the environment variable
named by llm.api_key_env (GROQ_API_KEY by default). Without a key the analyzer
runs in placeholder-only mode.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from codeanalyzer.models.llm_config import LLMConfig

# =============================================================================
# Configuration Dataclasses
# =============================================================================

DEFAULT_ALLOWED_EXTENSIONS = (
    ".js",
    ".py",
    ".java",
    ".html",
    ".css",
    ".php",
    ".cpp",
    ".c",
    ".ts",
)

DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024

VALID_FORMATS = frozenset({"markdown", "html"})


@dataclass
class OutputConfig:
    """Output configuration.

    Attributes:
        reports_dir: Directory where report JSON files are stored
        format: Rendered report format (markdown, html)
        language: Default UI language for reports (nl, en)
    """

    reports_dir: str = "reports"
    format: str = "markdown"
    language: str = "nl"

    def __post_init__(self) -> None:
        """Validate output configuration."""
        if self.format not in VALID_FORMATS:
            raise ValueError(f"Invalid output format: {self.format}. Valid: {sorted(VALID_FORMATS)}")


@dataclass
class UploadConfig:
    """Accepted source files.

    Attributes:
        allowed_extensions: Lower-case file extensions accepted for analysis
        max_file_size: Maximum file size in bytes
    """

    allowed_extensions: tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    def __post_init__(self) -> None:
        """Normalise extensions and validate the size limit."""
        self.allowed_extensions = tuple(
            ext.lower() if ext.startswith(".") else f".{ext.lower()}"
            for ext in self.allowed_extensions
        )
        if self.max_file_size <= 0:
            raise ValueError(f"max_file_size must be positive. Got: {self.max_file_size}")


@dataclass
class AnalyzerConfig:
    """Top-level codeanalyzer configuration.

    Attributes:
        llm: Chat-completion provider settings
        output: Report storage and rendering settings
        upload: Accepted source files
    """

    llm: LLMConfig = field(default_factory=LLMConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)

    # Runtime overrides (set by CLI)
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${GROQ_API_KEY} -> value of GROQ_API_KEY

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


def resolve_api_key(llm: LLMConfig) -> LLMConfig:
    """Fill in the API key from the environment when none is configured.

    Args:
        llm: LLM configuration

    Returns:
        The same configuration, with api_key set if the variable exists
    """
    if not llm.api_key:
        env_value = os.environ.get(llm.api_key_env, "").strip()
        if env_value:
            llm.api_key = env_value
    return llm


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.codeanalyzer/config.yaml
    2. ./codeanalyzer.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".codeanalyzer" / "config.yaml",
        start_path / "codeanalyzer.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> AnalyzerConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        AnalyzerConfig instance
    """
    data = substitute_env_vars(data)

    config = AnalyzerConfig()

    if "llm" in data:
        config.llm = LLMConfig.from_dict(data["llm"] or {})

    if "output" in data:
        output_data = data["output"] or {}
        config.output = OutputConfig(
            reports_dir=output_data.get("reports_dir", config.output.reports_dir),
            format=output_data.get("format", config.output.format),
            language=output_data.get("language", config.output.language),
        )

    if "upload" in data:
        upload_data = data["upload"] or {}
        config.upload = UploadConfig(
            allowed_extensions=tuple(
                upload_data.get("allowed_extensions", config.upload.allowed_extensions)
            ),
            max_file_size=int(upload_data.get("max_file_size", config.upload.max_file_size)),
        )

    resolve_api_key(config.llm)

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> AnalyzerConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        AnalyzerConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path) as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = AnalyzerConfig()
        resolve_api_key(config.llm)

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# codeanalyzer configuration

# Chat-completion provider
# Without an API key, placeholder reports are generated instead.
llm:
  provider: "groq"                # groq, openai, ollama, claude, gemini
  model: "llama-3.1-8b-instant"
  api_key_env: "GROQ_API_KEY"     # read when api_key is not set
  # api_key: "${GROQ_API_KEY}"
  # api_base: "https://api.groq.com/openai/v1"
  temperature: 0.1
  top_p: 0.9
  max_tokens: 6000

# Report storage and rendering
output:
  reports_dir: "reports"
  format: "markdown"              # markdown, html
  language: "nl"                  # nl, en

# Accepted source files
upload:
  allowed_extensions: [".js", ".py", ".java", ".html", ".css", ".php", ".cpp", ".c", ".ts"]
  max_file_size: 5242880          # 5MB
'''
