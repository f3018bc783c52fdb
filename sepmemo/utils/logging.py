from __future__ import annotations

import logging
import os
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_DATEFMT = "%H:%M:%S"
LEVEL_ENV_VAR = "SEPMEMO_LOG_LEVEL"
DEBUG_ENV_VAR = "SEPMEMO_DEBUG"


def coerce_level(value: Optional[str], fallback: int) -> int:
    """Parse ``"DEBUG"``/``"10"`` style level text, else ``fallback``."""
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    candidate = getattr(logging, text.upper(), None)
    if isinstance(candidate, int):
        return candidate
    return fallback


def env_truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def resolve_env_level() -> Optional[int]:
    value = os.getenv(LEVEL_ENV_VAR)
    if value:
        return coerce_level(value, logging.INFO)
    if env_truthy(os.getenv(DEBUG_ENV_VAR)):
        return logging.DEBUG
    return None


def configure_root(default_level: int | str = logging.INFO) -> int:
    """
    Configure the root logger with a compact format.

    Environment overrides:
      - SEPMEMO_LOG_LEVEL: explicit log level
      - SEPMEMO_DEBUG: truthy -> DEBUG
    Returns the effective level.
    """
    fallback = (
        coerce_level(default_level, logging.INFO)
        if isinstance(default_level, str)
        else int(default_level)
    )
    env_level = resolve_env_level()
    effective = env_level if env_level is not None else fallback

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT)
    root.setLevel(effective)
    return effective


def level_name(level: int) -> str:
    """Return logging level name for diagnostics."""
    return logging.getLevelName(level)
