"""
LLM-specific data models for the request/response cycle.

These models are internal to the LLM layer and carry the raw result of a
chat call to the inference server, separate from the wire models exchanged
between stages.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LLMGenerationResponse(BaseModel):
    """
    Internal response model from an LLM chat call.

    Contains the raw generated text plus metadata for logging.
    """
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Generated text (or the invalid-reply placeholder)")
    model_version: str = Field(..., description="Model reported by the server")
    latency_ms: int = Field(..., ge=0, description="Call latency in milliseconds")
    created_at: Optional[str] = Field(default=None, description="ISO timestamp from server")
    placeholder_used: bool = Field(
        default=False,
        description="True when the reply had no content and the placeholder was substituted",
    )
