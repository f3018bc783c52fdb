from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from sepmemo.domain.ports import LoggingSink


class NullLoggingSink(LoggingSink):
    """Discard every record."""

    def log(self, level: int, message: str, context: Mapping[str, Any]) -> None:
        return None


class StdlibLoggingSink(LoggingSink):
    """Forward sink records to a ``logging.Logger``.

    String context fields are appended as ``key=value`` pairs; an
    ``exception`` entry is passed on as ``exc_info``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or logging.getLogger("sepmemo")

    def log(self, level: int, message: str, context: Mapping[str, Any]) -> None:
        if not self._log.isEnabledFor(level):
            return
        fields: Dict[str, str] = {}
        exc: Optional[BaseException] = None
        for key, value in (context or {}).items():
            if isinstance(value, BaseException):
                if exc is None:
                    exc = value
                continue
            fields[key] = str(value)
        if fields:
            rendered = " ".join(f"{key}={value!r}" for key, value in fields.items())
            self._log.log(
                level,
                "%s %s",
                message,
                rendered,
                exc_info=exc,
                extra={"memo_context": fields},
            )
        else:
            self._log.log(level, "%s", message, exc_info=exc, extra={"memo_context": {}})


__all__ = ["NullLoggingSink", "StdlibLoggingSink"]
