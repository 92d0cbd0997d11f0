"""LLM Configuration entity for codeanalyzer.

Defines the configuration for the chat-completion provider used for reviews.
Supports Groq (default), OpenAI-compatible endpoints, Ollama, Claude and Gemini.
"""

from dataclasses import dataclass, field

# Valid LLM providers
VALID_PROVIDERS = frozenset({"groq", "openai", "ollama", "claude", "gemini"})

# Providers that cannot be called without an API key
KEYED_PROVIDERS = frozenset({"groq", "openai", "claude", "gemini"})

DEFAULT_PROVIDER = "groq"
DEFAULT_MODEL = "llama-3.1-8b-instant"
DEFAULT_API_KEY_ENV = "GROQ_API_KEY"


@dataclass
class LLMConfig:
    """Configuration for LLM provider.

    Attributes:
        provider: LLM provider (groq, openai, ollama, claude, gemini)
        model: Model identifier (e.g., "llama-3.1-8b-instant")
        api_key: API key (not required for Ollama)
        api_base: API base URL (required for Ollama, optional otherwise)
        api_key_env: Environment variable consulted when api_key is not set
        temperature: Sampling temperature (kept low for consistent reviews)
        top_p: Nucleus sampling parameter
        max_tokens: Maximum response tokens
        timeout: Request timeout in seconds (None waits indefinitely)
        enabled: Whether remote analysis is enabled
    """

    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    api_key: str | None = None
    api_base: str | None = None
    api_key_env: str = DEFAULT_API_KEY_ENV
    temperature: float = field(default=0.1)
    top_p: float = field(default=0.9)
    max_tokens: int = field(default=6000)
    timeout: float | None = None
    enabled: bool = field(default=True)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.provider = self.provider.lower().strip()

        if self.provider not in VALID_PROVIDERS:
            raise ValueError(
                f"Invalid provider '{self.provider}'. "
                f"Must be one of: {sorted(VALID_PROVIDERS)}"
            )

        if not self.model or not self.model.strip():
            raise ValueError("Model identifier cannot be empty")
        self.model = self.model.strip()

        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError(
                f"temperature must be between 0 and 2. Got: {self.temperature}"
            )

        if not 0.0 < self.top_p <= 1.0:
            raise ValueError(f"top_p must be in (0, 1]. Got: {self.top_p}")

        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive. Got: {self.max_tokens}")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive. Got: {self.timeout}")

        if self.provider == "ollama" and not self.api_base:
            self.api_base = "http://localhost:11434"

    @property
    def requires_api_key(self) -> bool:
        """Return True if the provider cannot be reached without an API key."""
        return self.provider in KEYED_PROVIDERS

    @property
    def is_configured(self) -> bool:
        """Return True if a remote call can be attempted with this config."""
        if not self.enabled:
            return False
        return bool(self.api_key) or not self.requires_api_key

    def validate(self) -> list[str]:
        """Validate configuration and return warnings.

        Returns:
            List of warning messages (empty if no warnings)
        """
        warnings: list[str] = []

        if self.max_tokens < 1000:
            warnings.append(
                f"max_tokens is set to {self.max_tokens}, which may truncate the improved code"
            )

        if self.api_base and not self.api_base.startswith(("http://", "https://")):
            warnings.append(
                f"api_base '{self.api_base}' does not start with http:// or https://"
            )

        if self.enabled and self.requires_api_key and not self.api_key:
            warnings.append(
                f"No API key for {self.provider} (set {self.api_key_env}); "
                "placeholder reports will be generated"
            )

        return warnings

    def to_dict(self) -> dict[str, str | int | float | bool | None]:
        """Convert to dictionary for serialization.

        The API key is never included.
        """
        return {
            "provider": self.provider,
            "model": self.model,
            "api_base": self.api_base,
            "api_key_env": self.api_key_env,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_tokens": self.max_tokens,
            "timeout": self.timeout,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data: dict[str, str | int | float | bool | None]) -> "LLMConfig":
        """Create LLMConfig from dictionary.

        Args:
            data: Dictionary with configuration values

        Returns:
            LLMConfig instance
        """
        timeout = data.get("timeout")
        return cls(
            provider=str(data.get("provider") or DEFAULT_PROVIDER),
            model=str(data.get("model") or DEFAULT_MODEL),
            api_key=data.get("api_key") if data.get("api_key") else None,  # type: ignore[arg-type]
            api_base=data.get("api_base") if data.get("api_base") else None,  # type: ignore[arg-type]
            api_key_env=str(data.get("api_key_env") or DEFAULT_API_KEY_ENV),
            temperature=float(data.get("temperature", 0.1)),  # type: ignore[arg-type]
            top_p=float(data.get("top_p", 0.9)),  # type: ignore[arg-type]
            max_tokens=int(data.get("max_tokens", 6000)),  # type: ignore[arg-type]
            timeout=float(timeout) if timeout is not None else None,  # type: ignore[arg-type]
            enabled=bool(data.get("enabled", True)),
        )

    def get_litellm_model_name(self) -> str:
        """Get the model name in LiteLLM format.

        Returns:
            Model name formatted for LiteLLM
        """
        if self.provider == "claude":
            return f"anthropic/{self.model}"
        return f"{self.provider}/{self.model}"
