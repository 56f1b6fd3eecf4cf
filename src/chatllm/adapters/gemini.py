"""Gemini REST adapter (generateContent)."""
from __future__ import annotations

from string import Template
from typing import Dict
from urllib.parse import quote

from ..types import Provider
from .base import BaseChatAdapter

_TEMPLATE = Template("""{
  "contents": [{
    "parts": [{
      "text": "$content"
    }]
  }],
  "generationConfig": {
    "temperature": $temperature,
    "maxOutputTokens": $max_tokens
  }
}""")

class GeminiAdapter(BaseChatAdapter):
    provider = Provider.GOOGLE
    template = _TEMPLATE
    content_path = "candidates.0.content.parts.0.text"
    usage_paths = ("usageMetadata.promptTokenCount", "usageMetadata.candidatesTokenCount")

    def url(self, model: str, api_key: str) -> str:
        return f"{self.endpoint}/{quote(model, safe='.-_')}:generateContent"

    def headers(self, api_key: str) -> Dict[str, str]:
        return {"Content-Type": "application/json", "x-goog-api-key": api_key}
