"""Adapter interface for LLM providers.

An adapter knows three things about its provider:
- where to POST and which auth headers to send
- the request body template
- the field paths of its response shape
"""
from __future__ import annotations

import json
from string import Template
from typing import Any, Dict, Optional, Tuple

from ..errors import ParseError
from ..escaping import escape_json
from ..extractor import extract
from ..types import ExtractedAnswer, ParsedResponse, Provider, ProviderRequestSpec, Usage

_MISSING = object()

def _lookup(data: Any, field_path: str) -> Any:
    cur = data
    for part in field_path.split("."):
        if isinstance(cur, list) and part.isdigit():
            idx = int(part)
            cur = cur[idx] if idx < len(cur) else _MISSING
        elif isinstance(cur, dict):
            cur = cur.get(part, _MISSING)
        else:
            return _MISSING
        if cur is _MISSING:
            return _MISSING
    return cur

def read_field(raw: str, data: Any, field_path: str) -> Any:
    """Value at `field_path`, from the parsed document when there is one.

    `data` is whatever `json.loads` produced, or None when the body could not
    be parsed; then the regex extractor is used on the raw text.
    """
    if data is None:
        return extract(raw, field_path)

    if field_path == "error.message":
        for path in ("error.message", "message"):
            v = _lookup(data, path)
            if isinstance(v, str):
                return v
        return None

    v = _lookup(data, field_path)
    if field_path.startswith(("usage.", "usageMetadata.")):
        if isinstance(v, bool) or not isinstance(v, int) or v < 0:
            return None
        return v
    return v if isinstance(v, str) else None

class BaseChatAdapter:
    provider: Provider
    template: Template
    content_path: str
    usage_paths: Tuple[str, str]
    usage_labels: Tuple[str, str] = ("prompt", "completion")

    def __init__(self, endpoint: str):
        self.endpoint = endpoint

    # -- request -----------------------------------------------------------

    def url(self, model: str, api_key: str) -> str:
        return self.endpoint

    def headers(self, api_key: str) -> Dict[str, str]:
        raise NotImplementedError

    def build_request(self, spec: ProviderRequestSpec) -> str:
        return self.template.substitute(
            model=escape_json(spec.model),
            content=escape_json(spec.prompt),
            max_tokens=int(spec.max_tokens),
            temperature=repr(float(spec.temperature)),
        )

    # -- response ----------------------------------------------------------

    def parse_response(self, raw: str) -> ParsedResponse:
        try:
            data: Optional[Any] = json.loads(raw)
        except ValueError:
            data = None

        error = read_field(raw, data, "error.message")
        if error:
            return ParsedResponse(error=error)

        content = read_field(raw, data, self.content_path)
        if content is None:
            raise ParseError(
                f"unexpected response shape from {self.provider.value}: no {self.content_path}"
            )

        usage = None
        n_in = read_field(raw, data, self.usage_paths[0])
        n_out = read_field(raw, data, self.usage_paths[1])
        if n_in is not None and n_out is not None:
            usage = Usage(n_in, n_out, labels=self.usage_labels)

        return ParsedResponse(answer=ExtractedAnswer(content=content, usage=usage))
