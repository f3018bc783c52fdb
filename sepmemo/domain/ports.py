from __future__ import annotations
from typing import Any, Mapping, Optional, Protocol


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class LoggingSink(Protocol):
    """Diagnostic sink for parse attempts.
    Context values are strings or exceptions; implementations own thread-safety.
    """

    def log(self, level: int, message: str, context: Mapping[str, Any]) -> None: ...


class Localizer(Protocol):
    """Resolve message keys to localized text.
    Unresolved key or locale -> ``default`` or ``""``.
    """

    def get_localized_text(
        self,
        key: str,
        locale: Optional[str] = "en",
        default: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> str: ...
