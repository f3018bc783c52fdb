"""Failure taxonomy for memo translation.

Failures cross layer boundaries as plain values: an ``ErrorKind`` for
branching, a dotted message key for localization and string params for
placeholder substitution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from .memo import CanonicalMemo, MemoTypeTag
from .ports import UseCaseError

KEY_TYPE_MISSING = "shared_lang.error.request.memo.type_missing"
KEY_INVALID_BY_ID = "shared_lang.error.request.memo.invalid_by_id"
KEY_INVALID_BY_TEXT = "shared_lang.error.request.memo.invalid_by_text"
KEY_INVALID_BY_HASH = "shared_lang.error.request.memo.invalid_by_hash"
KEY_UNSUPPORTED_TYPE = "shared_lang.error.request.memo.unsupported_memo_type_value"
KEY_INVALID_TYPE = "shared_lang.error.request.memo.invalid_memo_type"

_INVALID_VALUE_KEYS = {
    MemoTypeTag.ID: KEY_INVALID_BY_ID,
    MemoTypeTag.TEXT: KEY_INVALID_BY_TEXT,
    MemoTypeTag.HASH: KEY_INVALID_BY_HASH,
}


class ErrorKind(str, Enum):
    """Classification of translation and request-field failures."""

    MISSING_MEMO_TYPE = "missing_memo_type"
    INVALID_MEMO_TYPE = "invalid_memo_type"
    UNSUPPORTED_MEMO_TYPE = "unsupported_memo_type"
    INVALID_MEMO_VALUE = "invalid_memo_value"
    INVALID_REQUEST = "invalid_request"


@dataclass(frozen=True)
class ValidationFailure:
    """Client-correctable rejection of a memo input."""

    kind: ErrorKind
    message_key: Optional[str]
    message: str
    """English default text; also the localization fallback."""
    message_params: Mapping[str, str] = field(default_factory=dict)
    subkind: Optional[MemoTypeTag] = None
    """Memo type being validated, set for ``INVALID_MEMO_VALUE``."""
    cause: Optional["ValidationFailure"] = None

    @classmethod
    def missing_memo_type(cls) -> "ValidationFailure":
        return cls(
            ErrorKind.MISSING_MEMO_TYPE,
            KEY_TYPE_MISSING,
            "memo_type is required if memo is specified",
        )

    @classmethod
    def invalid_memo_value(cls, tag: MemoTypeTag, memo: str) -> "ValidationFailure":
        return cls(
            ErrorKind.INVALID_MEMO_VALUE,
            _INVALID_VALUE_KEYS[tag],
            f"Invalid memo {memo} of type: {tag.token}",
            {"memo": memo},
            subkind=tag,
        )

    @classmethod
    def unsupported_memo_type(cls, memo_type: str) -> "ValidationFailure":
        return cls(
            ErrorKind.UNSUPPORTED_MEMO_TYPE,
            KEY_UNSUPPORTED_TYPE,
            f"Unsupported memo type value: {memo_type}",
            {"memoType": memo_type},
        )

    @classmethod
    def invalid_memo_type(cls, memo_type: str) -> "ValidationFailure":
        return cls(
            ErrorKind.INVALID_MEMO_TYPE,
            KEY_INVALID_TYPE,
            f"Invalid memo type: {memo_type}",
            {"memoType": memo_type},
        )


class InvalidMemoRequest(UseCaseError):
    """Raised by ``MemoResult.unwrap`` for callers that prefer exceptions."""

    def __init__(self, failure: ValidationFailure):
        super().__init__(failure.kind.value, failure.message)
        self.failure = failure


@dataclass(frozen=True)
class MemoResult:
    """Outcome of a translation: a memo (possibly absent) or a failure."""

    memo: Optional[CanonicalMemo] = None
    failure: Optional[ValidationFailure] = None

    def __post_init__(self) -> None:
        if self.memo is not None and self.failure is not None:
            raise ValueError("MemoResult cannot carry both a memo and a failure.")

    @classmethod
    def success(cls, memo: Optional[CanonicalMemo]) -> "MemoResult":
        return cls(memo=memo)

    @classmethod
    def fail(cls, failure: ValidationFailure) -> "MemoResult":
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> Optional[CanonicalMemo]:
        """Return the memo, or raise ``InvalidMemoRequest`` for a failure."""
        if self.failure is not None:
            raise InvalidMemoRequest(self.failure)
        return self.memo


__all__ = [
    "ErrorKind",
    "InvalidMemoRequest",
    "KEY_INVALID_BY_HASH",
    "KEY_INVALID_BY_ID",
    "KEY_INVALID_BY_TEXT",
    "KEY_INVALID_TYPE",
    "KEY_TYPE_MISSING",
    "KEY_UNSUPPORTED_TYPE",
    "MemoResult",
    "ValidationFailure",
]
