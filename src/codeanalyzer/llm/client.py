"""Unified LLM client wrapper using LiteLLM.

Provides a consistent chat-completion interface for the supported providers.
Every failure surfaces as LLMError carrying a closed LLMErrorKind, so callers
can react to rate limiting or bad requests without matching message text.
"""

import logging
from dataclasses import dataclass
from enum import Enum

import litellm

from codeanalyzer.models.llm_config import LLMConfig

logger = logging.getLogger(__name__)


class LLMErrorKind(Enum):
    """Failure classes of a completion call."""

    RATE_LIMIT = "rate_limit"
    BAD_REQUEST = "bad_request"
    AUTHENTICATION = "authentication"
    CONNECTION = "connection"
    OTHER = "other"


class LLMError(Exception):
    """Exception raised for LLM-related errors.

    Attributes:
        kind: Failure class
        status_code: HTTP status returned by the provider, if any
    """

    def __init__(
        self,
        message: str,
        kind: LLMErrorKind = LLMErrorKind.OTHER,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


@dataclass
class LLMResponse:
    """Response from LLM completion.

    Attributes:
        content: Generated text content
        model: Model that generated the response
        usage: Token usage statistics
        finish_reason: Reason for completion (stop, length, etc.)
    """

    content: str
    model: str
    usage: dict[str, int]
    finish_reason: str | None = None


class LLMClient:
    """Unified LLM client using LiteLLM.

    Supports multiple providers through a single interface:
    - Groq (default, OpenAI-compatible)
    - OpenAI or any OpenAI-compatible endpoint via api_base
    - Ollama (local)
    - Claude (Anthropic)
    - Gemini (Google)
    """

    def __init__(self, config: LLMConfig) -> None:
        """Initialize LLM client with configuration.

        Args:
            config: LLM configuration with provider, model, and credentials
        """
        self.config = config

    @property
    def provider(self) -> str:
        """Name of the configured provider."""
        return self.config.provider

    def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Generate a completion from the LLM.

        Args:
            prompt: User prompt for the LLM
            system_prompt: Optional system prompt
            max_tokens: Override max_tokens from config

        Returns:
            LLMResponse with generated content

        Raises:
            LLMError: If the completion fails
        """
        messages: list[dict[str, str]] = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": prompt})

        completion_kwargs: dict = {
            "model": self.config.get_litellm_model_name(),
            "messages": messages,
            "temperature": self.config.temperature,
            "top_p": self.config.top_p,
            "max_tokens": max_tokens or self.config.max_tokens,
        }
        if self.config.api_key:
            completion_kwargs["api_key"] = self.config.api_key
        if self.config.api_base:
            completion_kwargs["api_base"] = self.config.api_base
        if self.config.timeout is not None:
            completion_kwargs["timeout"] = self.config.timeout

        try:
            response = litellm.completion(**completion_kwargs)
        except litellm.exceptions.RateLimitError as e:
            raise LLMError(
                f"Rate limit exceeded for {self.provider}: {e}",
                kind=LLMErrorKind.RATE_LIMIT,
                status_code=getattr(e, "status_code", 429),
            ) from e
        except litellm.exceptions.BadRequestError as e:
            raise LLMError(
                f"Bad request to {self.provider}: {e}",
                kind=LLMErrorKind.BAD_REQUEST,
                status_code=getattr(e, "status_code", 400),
            ) from e
        except litellm.exceptions.AuthenticationError as e:
            raise LLMError(
                f"Authentication failed for {self.provider}: {e}",
                kind=LLMErrorKind.AUTHENTICATION,
                status_code=getattr(e, "status_code", 401),
            ) from e
        except (litellm.exceptions.Timeout, litellm.exceptions.APIConnectionError) as e:
            raise LLMError(
                f"Connection failed to {self.provider}: {e}",
                kind=LLMErrorKind.CONNECTION,
            ) from e
        except Exception as e:
            raise LLMError(
                f"LLM completion failed: {e}",
                status_code=getattr(e, "status_code", None),
            ) from e

        try:
            choice = response.choices[0]
            content = choice.message.content or ""
        except (AttributeError, IndexError, TypeError) as e:
            raise LLMError(f"{self.provider} returned no completion choices") from e

        try:
            usage = {}
            if getattr(response, "usage", None):
                usage = {
                    "prompt_tokens": response.usage.prompt_tokens or 0,
                    "completion_tokens": response.usage.completion_tokens or 0,
                    "total_tokens": response.usage.total_tokens or 0,
                }

            return LLMResponse(
                content=content,
                model=getattr(response, "model", None) or self.config.model,
                usage=usage,
                finish_reason=getattr(choice, "finish_reason", None),
            )
        except (AttributeError, TypeError) as e:
            raise LLMError(f"{self.provider} returned a malformed response: {e}") from e

    def check_available(self) -> bool:
        """Check if the LLM provider is available.

        Performs a minimal API call to verify connectivity.

        Returns:
            True if provider is reachable and credentials are valid
        """
        try:
            self.complete("Say 'ok'", max_tokens=10)
            return True
        except LLMError as e:
            logger.debug("Availability check failed: %s", e)
            return False


def create_client(config: LLMConfig) -> LLMClient | None:
    """Create an LLM client from configuration.

    Returns None when remote analysis cannot run (disabled, or a keyed provider
    without an API key); callers treat that as placeholder-only mode.

    Args:
        config: LLM configuration

    Returns:
        Configured LLMClient instance, or None
    """
    if not config.enabled:
        logger.debug("LLM disabled in configuration")
        return None

    if not config.is_configured:
        logger.debug("No API key for %s (checked %s)", config.provider, config.api_key_env)
        return None

    return LLMClient(config)
