"""Logging utilities.

Key goal:
- Each step logs clearly so the caller can locate failures quickly.
- stdout belongs to the answer; every log line goes to stderr.
"""
from __future__ import annotations

import logging
import os
import sys

_DEFAULT_LEVEL = os.environ.get("CHATLLM_LOG_LEVEL", "WARNING").upper()

def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)

    # If already configured elsewhere, do not attach handlers again.
    if logger.handlers:
        return logger

    logger.setLevel(_DEFAULT_LEVEL)

    h = logging.StreamHandler(sys.stderr)
    fmt = logging.Formatter("[%(levelname)s] %(name)s:%(lineno)d - %(message)s")
    h.setFormatter(fmt)
    logger.addHandler(h)

    return logger

def set_level(level: str) -> None:
    """Change the level of every chatllm logger created so far."""
    for name, obj in logging.Logger.manager.loggerDict.items():
        if isinstance(obj, logging.Logger) and name.startswith("src.chatllm"):
            obj.setLevel(level.upper())

def log_step(logger: logging.Logger, step: str, msg: str):
    logger.info("[STEP %s] %s", step, msg)
