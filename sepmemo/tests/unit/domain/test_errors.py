from __future__ import annotations

import pytest

from sepmemo.domain.errors import (
    KEY_INVALID_BY_TEXT,
    ErrorKind,
    InvalidMemoRequest,
    MemoResult,
    ValidationFailure,
)
from sepmemo.domain.memo import CanonicalMemo, MemoTypeTag
from sepmemo.domain.ports import UseCaseError


def test_invalid_memo_value_carries_subkind_and_echoes_memo() -> None:
    failure = ValidationFailure.invalid_memo_value(MemoTypeTag.TEXT, "too long")

    assert failure.kind is ErrorKind.INVALID_MEMO_VALUE
    assert failure.subkind is MemoTypeTag.TEXT
    assert failure.message_key == KEY_INVALID_BY_TEXT
    assert failure.message_params == {"memo": "too long"}
    assert failure.message == "Invalid memo too long of type: text"


def test_unwrap_returns_memo_or_raises_use_case_error() -> None:
    memo = CanonicalMemo.id(5)
    assert MemoResult.success(memo).unwrap() == memo
    assert MemoResult.success(None).unwrap() is None

    failure = ValidationFailure.invalid_memo_type("bogus")
    with pytest.raises(InvalidMemoRequest) as info:
        MemoResult.fail(failure).unwrap()
    assert isinstance(info.value, UseCaseError)
    assert info.value.code == "invalid_memo_type"
    assert info.value.message == "Invalid memo type: bogus"
    assert info.value.failure is failure


def test_result_cannot_hold_memo_and_failure() -> None:
    with pytest.raises(ValueError):
        MemoResult(memo=CanonicalMemo.none(), failure=ValidationFailure.missing_memo_type())
