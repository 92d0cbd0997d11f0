"""Validation of source files submitted for analysis.

Rejections carry a closed UploadErrorKind; user-facing messages are looked up
per kind and UI language.
"""

import logging
import re
from enum import Enum
from pathlib import Path

from codeanalyzer.config import UploadConfig
from codeanalyzer.models.analysis import UiLanguage

logger = logging.getLogger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9.\-_]")

# File extension to target language used in the prompt
EXTENSION_LANGUAGES = {
    ".js": "javascript",
    ".ts": "typescript",
    ".py": "python",
    ".java": "java",
    ".html": "html",
    ".css": "css",
    ".php": "php",
    ".cpp": "cpp",
    ".c": "c",
}


class UploadErrorKind(Enum):
    """Reasons a submitted file is rejected."""

    NO_FILE = "no_file"
    FILE_EMPTY = "file_empty"
    FILE_TOO_LARGE = "file_too_large"
    UNSUPPORTED_TYPE = "unsupported_type"
    UNREADABLE = "unreadable"


ERROR_MESSAGES = {
    UploadErrorKind.NO_FILE: {
        UiLanguage.NL: "Geen bestand geüpload",
        UiLanguage.EN: "No file uploaded",
    },
    UploadErrorKind.FILE_EMPTY: {
        UiLanguage.NL: "Het bestand is leeg",
        UiLanguage.EN: "The file is empty",
    },
    UploadErrorKind.FILE_TOO_LARGE: {
        UiLanguage.NL: "Bestand is te groot (max {max_mb}MB)",
        UiLanguage.EN: "File is too large (max {max_mb}MB)",
    },
    UploadErrorKind.UNSUPPORTED_TYPE: {
        UiLanguage.NL: "Bestandstype {extension} is niet toegestaan",
        UiLanguage.EN: "File type {extension} is not allowed",
    },
}

DEFAULT_MESSAGE = {
    UiLanguage.NL: "Er ging iets mis. Probeer het opnieuw.",
    UiLanguage.EN: "Something went wrong. Please try again.",
}


class UploadError(Exception):
    """Raised when a submitted file cannot be analysed.

    Attributes:
        kind: Rejection reason
        details: Values interpolated into the user message
    """

    def __init__(self, kind: UploadErrorKind, message: str, **details: object) -> None:
        super().__init__(message)
        self.kind = kind
        self.details = details


def get_error_message(
    error: BaseException | UploadErrorKind,
    language: str | UiLanguage = UiLanguage.NL,
) -> str:
    """Get the user-facing message for a rejected upload.

    Errors other than UploadError map to the default message.

    Args:
        error: Upload error, error kind, or any other exception
        language: UI language

    Returns:
        Localised message
    """
    lang = UiLanguage.parse(language)

    if isinstance(error, UploadErrorKind):
        kind, details = error, {}
    elif isinstance(error, UploadError):
        kind, details = error.kind, error.details
    else:
        return DEFAULT_MESSAGE[lang]

    templates = ERROR_MESSAGES.get(kind)
    if templates is None:
        return DEFAULT_MESSAGE[lang]

    values = {"max_mb": 5, "extension": ""}
    values.update(details)
    return templates[lang].format(**values)


def sanitize_file_name(name: str) -> str:
    """Replace characters outside [A-Za-z0-9.-_] with underscores."""
    return _UNSAFE_NAME_CHARS.sub("_", name)


def detect_target_language(file_name: str, default: str = "javascript") -> str:
    """Guess the programming language from a file extension."""
    return EXTENSION_LANGUAGES.get(Path(file_name).suffix.lower(), default)


def validate_upload(path: Path | None, config: UploadConfig | None = None) -> str:
    """Validate a submitted file and return its content.

    Args:
        path: Path to the submitted file (None if nothing was submitted)
        config: Accepted extensions and size limit

    Returns:
        File content decoded as UTF-8

    Raises:
        UploadError: If the file is missing, of an unsupported type,
            too large, empty, not valid UTF-8 or cannot be read
    """
    config = config or UploadConfig()

    if path is None or not path.is_file():
        raise UploadError(UploadErrorKind.NO_FILE, f"No file at {path}")

    extension = path.suffix.lower()
    if extension not in config.allowed_extensions:
        raise UploadError(
            UploadErrorKind.UNSUPPORTED_TYPE,
            f"File type {extension or '(none)'} is not allowed",
            extension=extension or "(none)",
        )

    try:
        size = path.stat().st_size
    except OSError as e:
        raise UploadError(UploadErrorKind.UNREADABLE, f"Cannot read {path.name}: {e}") from e

    max_mb = config.max_file_size // (1024 * 1024) or 1
    if size > config.max_file_size:
        raise UploadError(
            UploadErrorKind.FILE_TOO_LARGE,
            f"{path.name} is {size} bytes (limit {config.max_file_size})",
            max_mb=max_mb,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise UploadError(UploadErrorKind.UNREADABLE, f"{path.name} is not UTF-8 text") from e
    except OSError as e:
        raise UploadError(UploadErrorKind.UNREADABLE, f"Cannot read {path.name}: {e}") from e

    if len(content) == 0:
        raise UploadError(UploadErrorKind.FILE_EMPTY, f"{path.name} is empty")

    logger.debug("Accepted %s (%d characters)", path.name, len(content))
    return content
