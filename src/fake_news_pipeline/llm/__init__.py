"""
LLM client and prompt handling.

Components:
- OllamaClient: chat client for the Ollama inference server
- PromptBuilder: renders the classification and summary prompts
- label_extractor: maps free-form model output to a label / Verdict
- exceptions: LLM-specific exceptions carrying a failure variant
"""

from fake_news_pipeline.llm.exceptions import (
    LLMClientError,
    LLMConnectionError,
    LLMGenerationError,
    LLMMalformedResponseError,
    LLMModelNotAvailableError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from fake_news_pipeline.llm.label_extractor import extract_label, resolve_verdict
from fake_news_pipeline.llm.ollama_client import INVALID_REPLY_PLACEHOLDER, OllamaClient
from fake_news_pipeline.llm.prompt_builder import PromptBuilder

__all__ = [
    "OllamaClient",
    "INVALID_REPLY_PLACEHOLDER",
    "PromptBuilder",
    "extract_label",
    "resolve_verdict",
    "LLMClientError",
    "LLMConnectionError",
    "LLMGenerationError",
    "LLMMalformedResponseError",
    "LLMModelNotAvailableError",
    "LLMRateLimitError",
    "LLMTimeoutError",
]
