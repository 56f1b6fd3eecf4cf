"""Model availability smoke test.

Asks each model "What is 1+1?" and checks that the answer contains "2".
Failures are classified so a missing key is not mistaken for a broken model.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .client import ChatClient
from .errors import ChatLLMError
from .logging_util import get_logger

logger = get_logger(__name__)

TEST_PROMPT = "What is 1+1? Please answer with just the number."
EXPECTED_ANSWER = "2"
SMOKE_TIMEOUT = 30

MODELS_TO_TEST = [
    "openai:gpt-4",
    "openai:gpt-3.5-turbo",
    "anthropic:claude-3-opus-20240229",
    "anthropic:claude-3-sonnet-20240229",
    "anthropic:claude-3-haiku-20240307",
    "google:gemini-pro",
    "google:gemini-1.5-pro",
    "mistral:mistral-large-latest",
    "mistral:mistral-medium-latest",
    "deepseek:deepseek-chat",
    "deepseek:deepseek-coder",
]

QUICK_MODELS = [
    "openai:gpt-3.5-turbo",
    "anthropic:claude-3-haiku-20240307",
    "google:gemini-pro",
]

@dataclass
class SmokeResult:
    model: str
    passed: bool
    reason: str
    preview: str = ""

def classify_failure(message: str) -> str:
    if "No API key found" in message:
        return "missing API key"
    if "HTTP 401" in message or "Unauthorized" in message:
        return "invalid API key"
    if "HTTP 404" in message or "not found" in message:
        return "model not found or unavailable"
    return "error"

def _preview(text: str, limit: int = 100) -> str:
    t = " ".join(text.split())
    return t[:limit] + ("..." if len(t) > limit else "")

def check_model(client: ChatClient, model: str) -> SmokeResult:
    logger.info("Testing model: %s", model)
    try:
        result = client.run(TEST_PROMPT, model=model)
    except ChatLLMError as e:
        return SmokeResult(model, False, classify_failure(str(e)), _preview(str(e), 200))

    content = result.answer.content
    if EXPECTED_ANSWER in content:
        return SmokeResult(model, True, "ok", _preview(content))
    return SmokeResult(model, False, f"response does not contain '{EXPECTED_ANSWER}'", _preview(content, 200))

def run_smoke(
    config: Dict[str, str],
    models: Optional[Sequence[str]] = None,
    delay: float = 1.0,
    client: Optional[ChatClient] = None,
) -> List[SmokeResult]:
    client = client or ChatClient(config, timeout=SMOKE_TIMEOUT)
    models = list(models or MODELS_TO_TEST)

    logger.info("Test prompt: '%s'", TEST_PROMPT)
    logger.info("Number of models to test: %d", len(models))

    results: List[SmokeResult] = []
    for i, m in enumerate(models):
        r = check_model(client, m)
        results.append(r)
        if r.passed:
            logger.info("[PASS] %s - %s", m, r.preview)
        else:
            logger.warning("[FAIL] %s - %s: %s", m, r.reason, r.preview)
        if delay and i < len(models) - 1:
            time.sleep(delay)
    return results

def summarize(results: Sequence[SmokeResult]) -> str:
    total = len(results)
    passed = sum(1 for r in results if r.passed)
    lines = [
        "======================================",
        "           TEST SUMMARY",
        "======================================",
        f"Total tests run:    {total}",
        f"Tests passed:       {passed}",
        f"Tests failed:       {total - passed}",
    ]
    if total:
        lines.append(f"Success rate:       {passed * 100 // total}%")
    lines.append("======================================")
    for r in results:
        status = "PASS" if r.passed else "FAIL"
        lines.append(f"[{status}] {r.model}: {r.reason}")
    return "\n".join(lines)
