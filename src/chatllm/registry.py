"""Provider registry and strict allowlist.

Design:
- Every Provider maps to exactly one adapter; build_request/parse_response
  dispatch through that map, never through string comparisons.
- Endpoints can be overridden per provider with <PROVIDER>_ENDPOINT.
- Strict mode means: "Only allowed provider+model combinations are callable."
- If allowlist file is missing or empty and strict mode is on -> block.

allowlist.yaml supports:
- providers: ["openai", "anthropic"]
- models:
    openai:
      - gpt-4o-mini
    anthropic:
      - claude-3-haiku-20240307
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Tuple, Union

import yaml

from .adapters.anthropic import AnthropicAdapter
from .adapters.base import BaseChatAdapter
from .adapters.gemini import GeminiAdapter
from .adapters.openai_style import OpenAIStyleAdapter
from .logging_util import get_logger
from .types import ParsedResponse, Provider, ProviderRequestSpec

logger = get_logger(__name__)

DEFAULT_ENDPOINTS: Dict[Provider, str] = {
    Provider.OPENAI: "https://api.openai.com/v1/chat/completions",
    Provider.ANTHROPIC: "https://api.anthropic.com/v1/messages",
    Provider.GOOGLE: "https://generativelanguage.googleapis.com/v1beta/models",
    Provider.MISTRAL: "https://api.mistral.ai/v1/chat/completions",
    Provider.DEEPSEEK: "https://api.deepseek.com/v1/chat/completions",
    Provider.META: "https://api.meta.com/v1/chat/completions",
}

def _endpoint(provider: Provider) -> str:
    override = (os.environ.get(f"{provider.name}_ENDPOINT") or "").strip()
    return override or DEFAULT_ENDPOINTS[provider]

def get_adapter(provider: Union[Provider, str]) -> BaseChatAdapter:
    p = Provider.parse(provider)
    if p is Provider.ANTHROPIC:
        return AnthropicAdapter(_endpoint(p))
    if p is Provider.GOOGLE:
        return GeminiAdapter(_endpoint(p))
    return OpenAIStyleAdapter(p, _endpoint(p))

def build_request(
    provider: Union[Provider, str],
    model: str,
    prompt: str,
    max_tokens: int,
    temperature: float,
) -> str:
    spec = ProviderRequestSpec(
        provider=Provider.parse(provider),
        model=model,
        prompt=prompt,
        temperature=temperature,
        max_tokens=max_tokens,
    )
    return get_adapter(spec.provider).build_request(spec)

def parse_response(provider: Union[Provider, str], raw: str) -> ParsedResponse:
    return get_adapter(provider).parse_response(raw)

# ----------------------------------------------------------------------
# Allowlist
# ----------------------------------------------------------------------
def _load_yaml(path: Path) -> Dict:
    if not path.exists():
        return {}
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load YAML: %s (%s)", path, e)
        return {}

def is_allowed(allowlist_path: Path, provider: Provider, model: str, strict: bool) -> Tuple[bool, str]:
    if not strict:
        return True, "strict=false"

    allow = _load_yaml(Path(allowlist_path))
    if not allow:
        return False, "strict=true but allowlist missing or empty"

    providers = set((allow.get("providers") or []))
    if providers and provider.value not in providers:
        return False, f"provider not allowed: {provider.value}"

    models = allow.get("models") or {}
    allowed_models = set(models.get(provider.value) or [])
    if allowed_models and model not in allowed_models:
        return False, f"model not allowed for provider={provider.value}: {model}"

    return True, "allowed"
