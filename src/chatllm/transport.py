"""HTTP transport: one POST, bounded by a timeout, no retries."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict

import requests

from .errors import TransportError, TransportTimeout
from .logging_util import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30

def default_timeout() -> float:
    try:
        return float(os.environ.get("CHATLLM_TIMEOUT") or DEFAULT_TIMEOUT)
    except ValueError:
        return DEFAULT_TIMEOUT

@dataclass
class HttpResponse:
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

def http_post(url: str, headers: Dict[str, str], body: str, timeout: float = DEFAULT_TIMEOUT) -> HttpResponse:
    logger.debug("POST %s (%d bytes)", url.split("?", 1)[0], len(body))
    try:
        r = requests.post(url, headers=headers, data=body.encode("utf-8"), timeout=timeout)
    except requests.Timeout as e:
        raise TransportTimeout(f"request timed out after {timeout}s: {e}") from e
    except requests.RequestException as e:
        raise TransportError(f"request failed: {e}") from e

    return HttpResponse(status=r.status_code, text=r.text)
