"""OpenAI-style chat.completions adapter (OpenAI, Mistral, DeepSeek, Meta)."""
from __future__ import annotations

from string import Template
from typing import Dict

from ..types import Provider
from .base import BaseChatAdapter

_TEMPLATE = Template("""{
  "model": "$model",
  "messages": [
    {
      "role": "user",
      "content": "$content"
    }
  ],
  "max_tokens": $max_tokens,
  "temperature": $temperature
}""")

class OpenAIStyleAdapter(BaseChatAdapter):
    template = _TEMPLATE
    content_path = "choices.0.message.content"
    usage_paths = ("usage.prompt_tokens", "usage.completion_tokens")

    def __init__(self, provider: Provider, endpoint: str):
        super().__init__(endpoint)
        self.provider = provider

    def headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
