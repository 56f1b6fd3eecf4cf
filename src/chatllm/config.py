"""Configuration file handling.

The config file is a flat KEY=VALUE dotfile (default: ./.chatWithLLM):

    # Default model (provider:model format)
    DEFAULT_MODEL=anthropic:claude-3-opus-20240229
    OPENAI_API_KEY=sk-...

Rules:
- The file is read with python-dotenv, so comments, blank lines, quoting and
  trailing whitespace follow dotenv conventions.
- Only upper-case keys ([A-Z_]+) are kept; anything else is ignored.
- Environment variables win over the file for API keys.
"""
from __future__ import annotations

import io
import os
import re
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from dotenv import dotenv_values

from .errors import ConfigError
from .logging_util import get_logger
from .types import Provider

logger = get_logger(__name__)

CONFIG_FILE = ".chatWithLLM"

_KEY = re.compile(r"^[A-Z_]+$")

CONFIG_TEMPLATE = """# chatWithLLM Configuration File
# Default model (provider:model format)
DEFAULT_MODEL=anthropic:claude-3-opus-20240229

# API Keys - Add your keys below
# OpenAI
OPENAI_API_KEY=

# Anthropic (Claude)
ANTHROPIC_API_KEY=

# Google (Gemini)
GOOGLE_API_KEY=

# Mistral
MISTRAL_API_KEY=

# DeepSeek
DEEPSEEK_API_KEY=

# Meta (Llama) - if using cloud API
META_API_KEY=

# Optional: allowlist used with --strict
# ALLOWLIST_FILE=allowlist.yaml
"""

def config_path(path: Optional[Union[str, Path]] = None) -> Path:
    return Path(path or os.environ.get("CHATLLM_CONFIG") or CONFIG_FILE)

def init_config(path: Optional[Union[str, Path]] = None) -> Tuple[Path, bool]:
    """Write the config template. Returns (path, created)."""
    p = config_path(path)
    if p.exists():
        return p, False
    p.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    return p, True

def _filter_keys(raw: Dict[str, Optional[str]]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for key, value in raw.items():
        if not _KEY.match(key):
            logger.debug("Ignoring config key: %r", key)
            continue
        values[key] = value or ""
    return values

def parse_config_text(text: str) -> Dict[str, str]:
    return _filter_keys(dotenv_values(stream=io.StringIO(text), interpolate=False))

def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, str]:
    p = config_path(path)
    if not p.is_file():
        raise ConfigError(f"{p}: Configuration file not found. Run with --init to create a configuration file.")
    try:
        raw = dotenv_values(p, interpolate=False, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"{p}: Configuration file not readable ({e})") from e

    values = _filter_keys(raw)
    default_model = values.get("DEFAULT_MODEL")
    if default_model and ":" not in default_model:
        logger.warning("DEFAULT_MODEL in config should be in provider:model format")
    return values

def sanitize_api_key(raw: str) -> str:
    """
    Strip whitespace, quotes and backticks that sneak in when keys are pasted,
    including smart quotes.
    """
    k = (raw or "").strip()
    k = k.strip(' "\'`')
    k = k.strip("“”‘’")
    return k

def get_api_key(provider: Provider, config: Optional[Dict[str, str]] = None) -> str:
    env = provider.api_key_env
    key = sanitize_api_key(os.getenv(env) or (config or {}).get(env) or "")
    if not key:
        raise ConfigError(
            f"No API key found for provider: {provider.value}. "
            f"Please add {env} to the configuration file."
        )
    return key

def parse_model_string(model_string: str) -> Tuple[Provider, str]:
    s = (model_string or "").strip()
    if ":" not in s:
        raise ConfigError("Model must be specified in provider:model format (e.g., openai:gpt-4)")
    provider, model = s.split(":", 1)
    if not model.strip():
        raise ConfigError(f"Model name missing in: {model_string}")
    return Provider.parse(provider), model.strip()

def resolve_model(cli_model: Optional[str], config: Dict[str, str]) -> Tuple[Provider, str]:
    model_string = (cli_model or "").strip()
    if not model_string:
        model_string = (config.get("DEFAULT_MODEL") or "").strip()
        if not model_string:
            raise ConfigError(
                "No model specified and no DEFAULT_MODEL set in config. "
                f"Either specify -m provider:model or set DEFAULT_MODEL in {CONFIG_FILE}"
            )
        logger.info("Using default model: %s", model_string)
    else:
        logger.info("Using specified model: %s", model_string)
    return parse_model_string(model_string)
