"""Render a ``ValidationFailure`` as a user-facing message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from sepmemo.domain.errors import ValidationFailure
from sepmemo.domain.ports import Localizer


@dataclass
class LocalizeFailure:
    """Resolve a failure's message key through the localizer.

    A failure without a message key renders its default ``message``. A
    ``cause`` with its own key is localized first and offered to the outer
    template as ``previous_exception``.
    """

    localizer: Localizer

    def __call__(self, failure: ValidationFailure, lang: Optional[str] = "en") -> str:
        if failure.message_key is None:
            return failure.message

        params: Dict[str, str] = dict(failure.message_params)
        cause = failure.cause
        if cause is not None and cause.message_key is not None:
            params["previous_exception"] = self.localizer.get_localized_text(
                key=cause.message_key,
                locale=lang,
                default=cause.message,
                params=cause.message_params,
            )

        return self.localizer.get_localized_text(
            key=failure.message_key,
            locale=lang,
            default=failure.message,
            params=params,
        )


__all__ = ["LocalizeFailure"]
