"""ChatClient: single-call orchestrator."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, Optional

from .config import get_api_key, resolve_model
from .errors import ApiError, TransportError, ValidationError
from .input_spec import process_input_files
from .logging_util import get_logger, log_step
from .registry import get_adapter, is_allowed
from .transport import HttpResponse, default_timeout, http_post
from .types import ExtractedAnswer, Provider, ProviderRequestSpec

logger = get_logger(__name__)

@dataclass
class ChatResult:
    provider: Provider
    model: str
    answer: ExtractedAnswer
    raw: str
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def usage_summary(self) -> str:
        return self.answer.usage.summary() if self.answer.usage else ""

class ChatClient:
    def __init__(
        self,
        config: Optional[Dict[str, str]] = None,
        post: Callable[..., HttpResponse] = http_post,
        timeout: Optional[float] = None,
    ):
        self.config = config or {}
        self._post = post
        self.timeout = timeout if timeout is not None else default_timeout()

    def run(
        self,
        prompt: str,
        model: Optional[str] = None,
        files: str = "",
        max_tokens: int = 4096,
        temperature: float = 0.7,
        strict: bool = False,
        flags: FrozenSet[str] = frozenset(),
    ) -> ChatResult:
        meta: Dict[str, Any] = {"steps": {}}
        t0 = time.time()

        log_step(logger, "1", "resolve model")
        provider, model_name = resolve_model(model, self.config)

        log_step(logger, "2", "strict allowlist check")
        allowlist = Path(self.config.get("ALLOWLIST_FILE") or "allowlist.yaml")
        ok, reason = is_allowed(allowlist, provider, model_name, strict)
        meta["steps"]["allowlist_reason"] = reason
        if not ok:
            raise ValidationError(reason)

        api_key = get_api_key(provider, self.config)

        log_step(logger, "3", "process input files")
        full_prompt = prompt + process_input_files(files) if files else prompt

        log_step(logger, "4", "build request")
        spec = ProviderRequestSpec(
            provider=provider,
            model=model_name,
            prompt=full_prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            flags=frozenset(flags),
        )
        adapter = get_adapter(provider)
        body = adapter.build_request(spec)

        log_step(logger, "5", f"call provider {provider.value}:{model_name}")
        t_call = time.time()
        resp = self._post(
            adapter.url(model_name, api_key),
            adapter.headers(api_key),
            body,
            timeout=self.timeout,
        )
        meta["steps"]["call_ms"] = int((time.time() - t_call) * 1000)
        meta["status"] = resp.status

        if not resp.ok:
            raise TransportError(f"API call failed: HTTP {resp.status}: {resp.text}")

        log_step(logger, "6", "parse response")
        parsed = adapter.parse_response(resp.text)
        if not parsed.ok:
            raise ApiError(parsed.error)

        meta["steps"]["total_ms"] = int((time.time() - t0) * 1000)
        return ChatResult(provider=provider, model=model_name, answer=parsed.answer, raw=resp.text, meta=meta)
