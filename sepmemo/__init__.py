"""Memo translation and validation for ledger deposit/withdrawal requests."""

from .domain.errors import ErrorKind, InvalidMemoRequest, MemoResult, ValidationFailure
from .domain.memo import CanonicalMemo, MemoTypeTag, memo_type_tag_to_string
from .usecases.translate_memo import TranslateMemo, translate

__all__ = [
    "CanonicalMemo",
    "ErrorKind",
    "InvalidMemoRequest",
    "MemoResult",
    "MemoTypeTag",
    "TranslateMemo",
    "ValidationFailure",
    "memo_type_tag_to_string",
    "translate",
]
