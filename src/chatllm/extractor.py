"""Minimal field extraction from provider JSON bodies.

This is not a JSON parser. Every supported field path has its own regex
that looks for the first textual occurrence of the expected keys and
captures the string (or digit run) that follows. Nesting depth, array
length and \\uXXXX escapes are not tracked.

Kept as a dependency-free fallback for deployments that must not load a
JSON parser; the client itself parses responses with `json` when it can
and only falls back to this module for bodies `json` rejects.

Supported paths:
- error.message
- choices.0.message.content
- content.0.text
- candidates.0.content.parts.0.text
- usage.prompt_tokens / usage.input_tokens
- usage.completion_tokens / usage.output_tokens
- usageMetadata.promptTokenCount / usageMetadata.candidatesTokenCount
- any other literal key -> first "key": "value" string pair
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Union

# a JSON string body up to the first unescaped quote
_STR = r'"((?:[^"\\]|\\.)*)"'
_SEP = r"\s*:\s*"
# a raw scalar token (validated as digits afterwards)
_TOKEN = r"([^,}\]\s]*)"

_DIGITS = re.compile(r"^[0-9]+$")
_ESCAPE = re.compile(r'\\(["\\/nrt])')
_ESCAPES = {'"': '"', "\\": "\\", "/": "/", "n": "\n", "r": "\r", "t": "\t"}

def _compile(*patterns: str) -> List[re.Pattern]:
    return [re.compile(p, flags=re.DOTALL) for p in patterns]

_STRING_PATHS: Dict[str, List[re.Pattern]] = {
    "error.message": _compile(
        r'"error"' + _SEP + r'\{[^}]*?"message"' + _SEP + _STR,
        r'"message"' + _SEP + _STR,
    ),
    "choices.0.message.content": _compile(
        r'"choices"' + _SEP + r'\[.*?"content"' + _SEP + _STR,
        r'"content"' + _SEP + _STR,
    ),
    "content.0.text": _compile(
        r'"content"' + _SEP + r'\[.*?"text"' + _SEP + _STR,
    ),
    "candidates.0.content.parts.0.text": _compile(
        r'"candidates"' + _SEP + r'\[.*?"text"' + _SEP + _STR,
        r'"text"' + _SEP + _STR,
    ),
}

_INT_PATHS: Dict[str, List[re.Pattern]] = {
    "usage.prompt_tokens": _compile(r'"usage"' + _SEP + r'\{.*?"(?:prompt_tokens|input_tokens)"' + _SEP + _TOKEN),
    "usage.completion_tokens": _compile(
        r'"usage"' + _SEP + r'\{.*?"(?:completion_tokens|output_tokens)"' + _SEP + _TOKEN
    ),
    "usageMetadata.promptTokenCount": _compile(
        r'"usageMetadata"' + _SEP + r'\{.*?"promptTokenCount"' + _SEP + _TOKEN
    ),
    "usageMetadata.candidatesTokenCount": _compile(
        r'"usageMetadata"' + _SEP + r'\{.*?"candidatesTokenCount"' + _SEP + _TOKEN
    ),
}
_INT_PATHS["usage.input_tokens"] = _INT_PATHS["usage.prompt_tokens"]
_INT_PATHS["usage.output_tokens"] = _INT_PATHS["usage.completion_tokens"]

def unescape(s: str) -> str:
    # single pass, so an escaped backslash followed by "n" stays a backslash and an "n"
    return _ESCAPE.sub(lambda m: _ESCAPES[m.group(1)], s)

def _first(patterns: List[re.Pattern], text: str) -> Optional[str]:
    for p in patterns:
        m = p.search(text)
        if m:
            return m.group(1)
    return None

def extract_string(raw_text: str, field_path: str) -> Optional[str]:
    patterns = _STRING_PATHS.get(field_path)
    if patterns is None:
        key = field_path.rsplit(".", 1)[-1]
        patterns = _compile(r'"' + re.escape(key) + r'"' + _SEP + _STR)
    value = _first(patterns, raw_text or "")
    if value is None:
        return None
    return unescape(value)

def extract_int(raw_text: str, field_path: str) -> Optional[int]:
    value = _first(_INT_PATHS[field_path], raw_text or "")
    if value is None or not _DIGITS.match(value):
        return None
    return int(value)

def extract(raw_text: str, field_path: str) -> Optional[Union[str, int]]:
    """Return the value at `field_path`, or None when it is absent."""
    if field_path in _INT_PATHS:
        return extract_int(raw_text, field_path)
    return extract_string(raw_text, field_path)
