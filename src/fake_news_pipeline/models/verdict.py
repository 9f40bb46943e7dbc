"""
Verdict model: the classification outcome of a news text.

A verdict is a tagged variant. Resolved verdicts carry a boolean meaning,
an unresolved verdict carries the raw model text that could not be matched
to any candidate label, and deliberately has no boolean meaning.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fake_news_pipeline.models.enums import VerdictKind


class Verdict(BaseModel):
    """Classification verdict (true news, fake news, or unresolved)."""

    model_config = ConfigDict(frozen=True)

    kind: VerdictKind = Field(..., description="Verdict tag")
    raw_text: Optional[str] = Field(
        default=None,
        description="Unmatched model output (only for UNRESOLVED verdicts)",
    )

    @classmethod
    def true_news(cls) -> "Verdict":
        return cls(kind=VerdictKind.TRUE_NEWS)

    @classmethod
    def fake_news(cls) -> "Verdict":
        return cls(kind=VerdictKind.FAKE_NEWS)

    @classmethod
    def unresolved(cls, raw_text: str) -> "Verdict":
        return cls(kind=VerdictKind.UNRESOLVED, raw_text=raw_text)

    @classmethod
    def from_flag(cls, is_fake_news: Optional[bool]) -> "Verdict":
        """
        Rebuild a verdict from the wire flag.

        None stands for an unresolved verdict whose raw text stayed upstream.
        """
        if is_fake_news is None:
            return cls.unresolved("")
        return cls.fake_news() if is_fake_news else cls.true_news()

    @property
    def is_resolved(self) -> bool:
        return self.kind is not VerdictKind.UNRESOLVED

    @property
    def is_fake_news(self) -> Optional[bool]:
        """True/False for resolved verdicts, None when unresolved."""
        if self.kind is VerdictKind.UNRESOLVED:
            return None
        return self.kind is VerdictKind.FAKE_NEWS
