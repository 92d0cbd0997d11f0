"""LLM integration module for codeanalyzer.

Provides the LiteLLM client wrapper, the review prompt templates, placeholder
texts and decoding of model replies into JSON objects.
"""

from codeanalyzer.llm.client import (
    LLMClient,
    LLMError,
    LLMErrorKind,
    LLMResponse,
    create_client,
)
from codeanalyzer.llm.decode import (
    ResponseDecodeError,
    decode_with_recovery,
    extract_json_span,
    strip_code_fences,
)
from codeanalyzer.llm.prompts import (
    PLACEHOLDER_FEEDBACK,
    PLACEHOLDER_STATISTICS,
    SYSTEM_PROMPT,
    build_analysis_prompt,
    get_placeholder_feedback,
)
from codeanalyzer.models.llm_config import VALID_PROVIDERS, LLMConfig

__all__ = [
    "LLMClient",
    "LLMConfig",
    "LLMError",
    "LLMErrorKind",
    "LLMResponse",
    "PLACEHOLDER_FEEDBACK",
    "PLACEHOLDER_STATISTICS",
    "ResponseDecodeError",
    "SYSTEM_PROMPT",
    "VALID_PROVIDERS",
    "build_analysis_prompt",
    "create_client",
    "decode_with_recovery",
    "extract_json_span",
    "get_placeholder_feedback",
    "strip_code_fences",
]
