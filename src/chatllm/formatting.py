"""Output rendering and saving."""
from __future__ import annotations

import html
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

FORMATS = ("markdown", "plain", "json", "html")

_EXTENSIONS = {"markdown": "md", "json": "json", "html": "html"}

def _markdown(content: str, prompt: str, provider: str, model: str, usage: str, now: datetime) -> str:
    return (
        "# LLM Response\n"
        "\n"
        f"**Provider:** {provider}  \n"
        f"**Model:** {model}  \n"
        f"**Usage:** {usage}  \n"
        f"**Generated:** {now:%a %b %d %H:%M:%S %Y}\n"
        "\n"
        "## Prompt\n"
        "\n"
        f"{prompt}\n"
        "\n"
        "## Response\n"
        "\n"
        f"{content}"
    )

def _html(content: str, prompt: str, provider: str, model: str, usage: str, now: datetime) -> str:
    body = "<br>\n".join(html.escape(line, quote=False) for line in content.split("\n"))
    return f"""<!DOCTYPE html>
<html>
<head>
    <title>LLM Response</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 40px; }}
        .metadata {{ background: #f5f5f5; padding: 10px; border-radius: 5px; margin-bottom: 20px; }}
        .content {{ line-height: 1.6; }}
        pre {{ background: #f8f8f8; padding: 10px; border-radius: 5px; overflow-x: auto; }}
    </style>
</head>
<body>
    <div class="metadata">
        <strong>Provider:</strong> {html.escape(provider)}<br>
        <strong>Model:</strong> {html.escape(model)}<br>
        <strong>Usage:</strong> {html.escape(usage)}<br>
        <strong>Generated:</strong> {now:%a %b %d %H:%M:%S %Y}
    </div>
    <div class="content">
        <h3>Prompt:</h3>
        <p>{html.escape(prompt, quote=False)}</p>
        <h3>Response:</h3>
        <div>{body}</div>
    </div>
</body>
</html>"""

def format_output(
    fmt: str,
    content: str,
    prompt: str,
    provider: str,
    model: str,
    usage: str = "",
    now: Optional[datetime] = None,
) -> str:
    now = now or datetime.now(timezone.utc)

    if fmt == "markdown":
        return _markdown(content, prompt, provider, model, usage, now.astimezone())
    if fmt == "json":
        return json.dumps(
            {
                "provider": provider,
                "model": model,
                "prompt": prompt,
                "response": content,
                "usage": usage,
                "timestamp": now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            },
            ensure_ascii=False,
            indent=2,
        )
    if fmt == "html":
        return _html(content, prompt, provider, model, usage, now.astimezone())
    return content

def default_filename(fmt: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"llm_response_{now:%Y%m%d_%H%M%S}.{_EXTENSIONS.get(fmt, 'txt')}"

def save_output(text: str, filename: Optional[str], fmt: str) -> Path:
    path = Path(filename or default_filename(fmt))
    with path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(text + "\n")
    return path
