"""Anthropic Messages API adapter."""
from __future__ import annotations

from string import Template
from typing import Dict

from ..types import Provider
from .base import BaseChatAdapter

ANTHROPIC_VERSION = "2023-06-01"

_TEMPLATE = Template("""{
  "model": "$model",
  "max_tokens": $max_tokens,
  "temperature": $temperature,
  "messages": [
    {
      "role": "user",
      "content": "$content"
    }
  ]
}""")

class AnthropicAdapter(BaseChatAdapter):
    provider = Provider.ANTHROPIC
    template = _TEMPLATE
    content_path = "content.0.text"
    usage_paths = ("usage.input_tokens", "usage.output_tokens")
    usage_labels = ("input", "output")

    def headers(self, api_key: str) -> Dict[str, str]:
        return {
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }
