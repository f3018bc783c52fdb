"""Runtime settings for memo translation read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from sepmemo.adapters.localization_json import PACKAGED_LOCALES_DIR
from sepmemo.utils.logging import env_truthy

DEFAULT_LOCALE_ENV = "SEPMEMO_DEFAULT_LOCALE"
LOCALES_DIR_ENV = "SEPMEMO_LOCALES_DIR"
ALLOW_RAW_HASH_ENV = "SEPMEMO_ALLOW_RAW_HASH"


@dataclass(frozen=True)
class MemoSettings:
    """Knobs shared by the translator, the localizer and the HTTP boundary."""

    default_locale: str = "en"
    locales_dir: Path = PACKAGED_LOCALES_DIR
    allow_raw_hash: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MemoSettings":
        env = os.environ if environ is None else environ
        locale = (env.get(DEFAULT_LOCALE_ENV) or "").strip() or "en"
        locales_dir = (env.get(LOCALES_DIR_ENV) or "").strip()
        raw_hash = env.get(ALLOW_RAW_HASH_ENV)
        return cls(
            default_locale=locale,
            locales_dir=Path(locales_dir) if locales_dir else PACKAGED_LOCALES_DIR,
            allow_raw_hash=True if raw_hash is None or not raw_hash.strip() else env_truthy(raw_hash),
        )


__all__ = ["MemoSettings"]
