from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from sepmemo.domain.ports import Localizer

PACKAGED_LOCALES_DIR = Path(__file__).resolve().parents[1] / "locales"


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class JsonCatalogLocalizer(Localizer):
    """Message catalogs stored as one flat ``<locale>.json`` file per locale.

    Catalogs are read on first use and cached; a missing or unreadable file
    behaves like an empty catalog.
    """

    def __init__(self, locales_dir: Union[str, os.PathLike, None] = None) -> None:
        self.root = Path(locales_dir) if locales_dir else PACKAGED_LOCALES_DIR
        self._catalogs: Dict[str, Dict[str, str]] = {}
        self._lock = threading.Lock()
        self._log = logging.getLogger(__name__)

    def get_localized_text(
        self,
        key: str,
        locale: Optional[str] = "en",
        default: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> str:
        text = self._catalog(locale).get(key) if locale else None
        if not text:
            return default if default is not None else ""
        if not params:
            return text
        try:
            return text.format_map(_KeepMissing({k: str(v) for k, v in params.items()}))
        except (ValueError, IndexError):
            self._log.warning("Malformed template for %s (%s).", key, locale)
            return text

    def locales(self) -> list[str]:
        """Return the locale codes that have a catalog file."""
        if not self.root.is_dir():
            return []
        return sorted(p.stem for p in self.root.glob("*.json"))

    def _catalog(self, locale: str) -> Dict[str, str]:
        code = self._normalize_locale(locale)
        with self._lock:
            cached = self._catalogs.get(code)
            if cached is not None:
                return cached
            path = self.root / f"{code}.json"
            # Only codes backed by a catalog file are cached.
            if not code or not path.is_file():
                return {}
            cached = self._load(path)
            self._catalogs[code] = cached
            return cached

    def _load(self, path: Path) -> Dict[str, str]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            self._log.warning("Catalog %s skipped: %s", path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    @staticmethod
    def _normalize_locale(locale: str) -> str:
        """Map ``de-DE``/``de_DE`` style tags to the catalog code ``de``."""
        text = str(locale or "").strip().lower().replace("_", "-")
        code = text.split("-", 1)[0]
        return code if code.isalpha() else ""


__all__ = ["JsonCatalogLocalizer", "PACKAGED_LOCALES_DIR"]
