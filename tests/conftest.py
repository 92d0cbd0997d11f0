"""Shared pytest fixtures for codeanalyzer tests.

Fixtures are organized by category:
- Source fixtures: Sample code and files on disk
- Configuration fixtures: LLM configs for remote and placeholder mode
- Model reply fixtures: Mock LiteLLM responses
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from codeanalyzer.models.llm_config import LLMConfig

# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure a developer's own key never turns tests into remote calls."""
    monkeypatch.delenv("GROQ_API_KEY", raising=False)


# =============================================================================
# Source Fixtures
# =============================================================================


@pytest.fixture
def javascript_source() -> str:
    """Return sample JavaScript source code."""
    return '''function getUser(id) {
    var users = loadUsers();
    for (var i = 0; i < users.length; i++) {
        if (users[i].id == id) return users[i];
    }
}

module.exports = { getUser };
'''


@pytest.fixture
def source_file(tmp_path: Path, javascript_source: str) -> Path:
    """Write the sample JavaScript source to a file."""
    path = tmp_path / "users.js"
    path.write_text(javascript_source, encoding="utf-8")
    return path


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def groq_config() -> LLMConfig:
    """Return a Groq configuration with a test key."""
    return LLMConfig(
        provider="groq",
        model="llama-3.1-8b-instant",
        api_key="test-api-key",
    )


# =============================================================================
# Model Reply Fixtures
# =============================================================================


@pytest.fixture
def review_reply() -> dict[str, Any]:
    """Return a well-formed review as the model would send it."""
    return {
        "improvedCode": "const getUser = (id) => loadUsers().find((u) => u.id === id);",
        "feedback": {
            "overall": "Small lookup helper with loose equality and var declarations.",
            "strengths": ["Single responsibility", "Exported explicitly"],
            "improvements": ["Use === instead of ==", "Use const/let instead of var"],
            "bestPractices": ["Prefer Array.prototype.find"],
            "security": ["Validate the id parameter"],
            "performance": ["Index users by id for repeated lookups"],
        },
        "statistics": {
            "complexity": "low",
            "readability": "7",
            "maintainability": "6",
            "efficiency": "5",
        },
    }


def make_litellm_response(content: str, model: str = "llama-3.1-8b-instant") -> MagicMock:
    """Build a mock LiteLLM completion response."""
    response = MagicMock()
    response.choices = [
        MagicMock(
            message=MagicMock(content=content),
            finish_reason="stop",
        )
    ]
    response.model = model
    response.usage = MagicMock(
        prompt_tokens=120,
        completion_tokens=80,
        total_tokens=200,
    )
    return response


@pytest.fixture
def litellm_response() -> Callable[[str], MagicMock]:
    """Return a factory for mock LiteLLM responses."""
    return make_litellm_response


@pytest.fixture
def review_response(review_reply: dict[str, Any]) -> MagicMock:
    """Return a mock LiteLLM response carrying the well-formed review."""
    return make_litellm_response(json.dumps(review_reply))
