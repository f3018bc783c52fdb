"""Domain package exports for memo value objects and failures."""

from .errors import ErrorKind, InvalidMemoRequest, MemoResult, ValidationFailure
from .memo import (
    MEMO_HASH_BYTES,
    MEMO_ID_MAX,
    MEMO_TEXT_MAX_BYTES,
    CanonicalMemo,
    MemoTypeTag,
    memo_type_tag_to_string,
)
from .ports import Localizer, LoggingSink, UseCaseError

__all__ = [
    "CanonicalMemo",
    "ErrorKind",
    "InvalidMemoRequest",
    "Localizer",
    "LoggingSink",
    "MEMO_HASH_BYTES",
    "MEMO_ID_MAX",
    "MEMO_TEXT_MAX_BYTES",
    "MemoResult",
    "MemoTypeTag",
    "UseCaseError",
    "ValidationFailure",
    "memo_type_tag_to_string",
]
