"""Shared types and lightweight data containers.

We avoid heavy frameworks here. The goal is:
- keep the core portable
- keep typing clear but not over-abstract
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Literal, Optional

from .errors import ValidationError

AttachmentKind = Literal["text", "image", "unsupported"]

class Provider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    MISTRAL = "mistral"
    DEEPSEEK = "deepseek"
    META = "meta"

    @classmethod
    def parse(cls, value) -> "Provider":
        if isinstance(value, cls):
            return value
        s = (value or "").strip().lower()
        try:
            return cls(s)
        except ValueError:
            raise ValidationError(f"Unsupported provider: {value}") from None

    @property
    def api_key_env(self) -> str:
        return f"{self.name}_API_KEY"

@dataclass
class AttachmentPayload:
    path: str
    data: bytes
    kind: AttachmentKind

@dataclass
class ProviderRequestSpec:
    provider: Provider
    model: str
    prompt: str
    temperature: float = 0.7
    max_tokens: int = 4096
    # save/verbose/debug markers; carried along, never interpreted by the core.
    flags: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        self.provider = Provider.parse(self.provider)
        if not isinstance(self.model, str) or not self.model.strip():
            raise ValidationError("model is required")
        if not 0.0 <= float(self.temperature) <= 2.0:
            raise ValidationError(f"temperature must be between 0.0 and 2.0: {self.temperature}")
        if isinstance(self.max_tokens, bool) or int(self.max_tokens) <= 0:
            raise ValidationError(f"max_tokens must be a positive integer: {self.max_tokens}")
        self.temperature = float(self.temperature)
        self.max_tokens = int(self.max_tokens)

@dataclass
class Usage:
    input_tokens: int
    output_tokens: int
    # Anthropic reports input/output, everyone else prompt/completion.
    labels: tuple = ("prompt", "completion")

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def summary(self) -> str:
        a, b = self.labels
        return (
            f"Tokens used: {self.input_tokens} {a} + {self.output_tokens} {b}"
            f" = {self.total_tokens} total"
        )

@dataclass
class ExtractedAnswer:
    content: str
    usage: Optional[Usage] = None

@dataclass
class ParsedResponse:
    answer: Optional[ExtractedAnswer] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
