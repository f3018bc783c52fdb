"""Extract memo fields from parsed request payloads and translate them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Mapping, Optional, Tuple

from sepmemo.domain.errors import ErrorKind, MemoResult, ValidationFailure
from sepmemo.domain.memo import MemoTypeTag
from sepmemo.usecases.translate_memo import TranslateMemo


@dataclass(frozen=True)
class MemoFieldPolicy:
    """Which memo types an endpoint accepts and the type assumed when omitted."""

    allowed_types: FrozenSet[MemoTypeTag]
    default_type: Optional[MemoTypeTag] = None


TRANSFER_POLICY = MemoFieldPolicy(
    allowed_types=frozenset({MemoTypeTag.ID, MemoTypeTag.TEXT, MemoTypeTag.HASH}),
)
INTERACTIVE_POLICY = MemoFieldPolicy(
    allowed_types=frozenset({MemoTypeTag.ID}),
    default_type=MemoTypeTag.ID,
)


def _request_failure(
    key: str, message: str, params: Optional[Mapping[str, str]] = None, cause=None
) -> MemoResult:
    return MemoResult.fail(
        ValidationFailure(
            ErrorKind.INVALID_REQUEST,
            key,
            message,
            dict(params or {}),
            cause=cause,
        )
    )


@dataclass
class ParseMemoRequest:
    """Read ``memo``/``memo_type`` and ``refund_memo``/``refund_memo_type``."""

    translate: TranslateMemo = field(default_factory=TranslateMemo)
    policy: MemoFieldPolicy = TRANSFER_POLICY

    def memo(self, request_data: Mapping[str, Any]) -> MemoResult:
        memo_value = request_data.get("memo")
        if memo_value is not None and not isinstance(memo_value, str):
            return _request_failure(
                "shared_lang.error.request.memo.must_be_string",
                "memo must be a string",
            )

        memo_type = request_data.get("memo_type")
        if memo_type is not None:
            if not isinstance(memo_type, str):
                return _request_failure(
                    "shared_lang.error.request.memo_type.must_be_string",
                    "memo type must be a string",
                )
            memo_type = memo_type.strip()
            if not self._allowed(memo_type):
                return _request_failure(
                    "shared_lang.error.request.memo_type.not_supported",
                    f"memo type {memo_type} not supported.",
                    {"memoType": memo_type},
                )

        if memo_value is None:
            return MemoResult.success(None)
        if not memo_type and self.policy.default_type is not None:
            memo_type = self.policy.default_type.token
        return self.translate(memo_value, memo_type or "")

    def refund_memo(self, request_data: Mapping[str, Any]) -> MemoResult:
        memo_value = request_data.get("refund_memo")
        if memo_value is not None and not isinstance(memo_value, str):
            return _request_failure(
                "shared_lang.error.request.refund_memo.must_be_string",
                "refund memo must be a string",
            )

        memo_type = request_data.get("refund_memo_type")
        if memo_type is not None:
            if not isinstance(memo_type, str):
                return _request_failure(
                    "shared_lang.error.request.refund_memo_type.must_be_string",
                    "refund memo type must be a string",
                )
            if memo_value is None:
                return _request_failure(
                    "shared_lang.error.request.refund_memo.missing",
                    "refund memo type is specified but refund memo missing",
                )

        if memo_value is None:
            return MemoResult.success(None)
        result = self.translate(memo_value, (memo_type or "").strip())
        if result.ok:
            return result
        if result.failure.kind is ErrorKind.MISSING_MEMO_TYPE:  # type: ignore[union-attr]
            return result
        return _request_failure(
            "shared_lang.error.request.refund_memo.invalid",
            f"invalid refund memo: {result.failure.message}",  # type: ignore[union-attr]
            cause=result.failure,
        )

    def parse(self, request_data: Mapping[str, Any]) -> Tuple[MemoResult, MemoResult]:
        """Return ``(memo, refund_memo)`` results for one request payload."""
        return self.memo(request_data), self.refund_memo(request_data)

    def _allowed(self, memo_type: str) -> bool:
        tag = MemoTypeTag.from_token(memo_type)
        return tag is not None and tag in self.policy.allowed_types


__all__ = [
    "INTERACTIVE_POLICY",
    "MemoFieldPolicy",
    "ParseMemoRequest",
    "TRANSFER_POLICY",
]
