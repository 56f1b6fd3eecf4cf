from __future__ import annotations

import re

# everything below 0x20 except tab, LF and CR, plus DEL
_CONTROL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

def strip_control(text: str) -> str:
    return _CONTROL.sub("", text or "")

def escape_json(text: str) -> str:
    """Escape `text` for use between the quotes of a JSON string.

    The result never contains a literal newline: request bodies are sent as a
    single logical line per value.
    """
    s = strip_control(text)
    s = s.replace("\\", "\\\\")
    s = s.replace('"', '\\"')
    s = s.replace("\t", "\\t")
    s = s.replace("\r", "\\r")
    s = s.replace("\n", "\\n")
    return s
