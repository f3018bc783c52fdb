"""Use case translating request memo strings into canonical ledger memos."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from sepmemo.adapters.logging_sink import NullLoggingSink
from sepmemo.domain.errors import MemoResult, ValidationFailure
from sepmemo.domain.memo import (
    MEMO_HASH_BYTES,
    MEMO_ID_MAX,
    MEMO_TEXT_MAX_BYTES,
    CanonicalMemo,
    MemoTypeTag,
)
from sepmemo.domain.ports import LoggingSink

_DIGITS = re.compile(r"[0-9]{1,%d}" % len(str(MEMO_ID_MAX)))
_CTX = "util"


@dataclass
class TranslateMemo:
    """Translate ``(memo, memo_type)`` request strings into a ``MemoResult``.

    Stateless apart from the injected sink, so one instance can serve any
    number of concurrent requests.
    """

    log: LoggingSink = field(default_factory=NullLoggingSink)
    allow_raw_hash: bool = True
    """Accept a raw 32-byte string as hash memo when it is not base64."""

    def __call__(self, memo_value: str, memo_type: str) -> MemoResult:
        """Translate one memo input.

        Args:
            memo_value: Memo as sent by the client; may be empty.
            memo_type: One of ``id``, ``text``, ``none``, ``hash``, ``return``.

        Returns:
            MemoResult: ``memo is None`` when no memo was given, the canonical
            memo on success, or a ``ValidationFailure``.
        """
        self.log.log(
            logging.DEBUG,
            "Parsing memo string.",
            {"context": _CTX, "memo": memo_value, "memo_type": memo_type},
        )
        if not memo_value:
            self.log.log(logging.DEBUG, "Memo is empty.", {"context": _CTX})
            return MemoResult.success(None)
        if not memo_type:
            self.log.log(logging.DEBUG, "Memo type is empty.", {"context": _CTX})
            return MemoResult.fail(ValidationFailure.missing_memo_type())

        tag = MemoTypeTag.from_token(memo_type)
        if tag is None:
            self.log.log(
                logging.DEBUG,
                "Memo type is not recognized.",
                {"context": _CTX, "memo_type": memo_type},
            )
            return MemoResult.fail(ValidationFailure.invalid_memo_type(memo_type))
        if tag is MemoTypeTag.ID:
            return self._id_memo(memo_value)
        if tag is MemoTypeTag.TEXT:
            return self._text_memo(memo_value)
        if tag is MemoTypeTag.NONE:
            return MemoResult.success(CanonicalMemo.none())
        if tag is MemoTypeTag.HASH:
            return self._hash_memo(memo_value)
        return MemoResult.fail(ValidationFailure.unsupported_memo_type(memo_type))

    def _id_memo(self, memo_value: str) -> MemoResult:
        if _DIGITS.fullmatch(memo_value):
            number = int(memo_value)
            if number <= MEMO_ID_MAX:
                return MemoResult.success(CanonicalMemo.id(number))
        self.log.log(
            logging.DEBUG, "Memo type is id, but memo is not an int.", {"context": _CTX}
        )
        return MemoResult.fail(
            ValidationFailure.invalid_memo_value(MemoTypeTag.ID, memo_value)
        )

    def _text_memo(self, memo_value: str) -> MemoResult:
        raw = _utf8(memo_value)
        if raw is None or len(raw) > MEMO_TEXT_MAX_BYTES:
            self.log.log(
                logging.DEBUG,
                f"Memo type is text, the memo is greater than {MEMO_TEXT_MAX_BYTES} bytes.",
                {"context": _CTX},
            )
            return MemoResult.fail(
                ValidationFailure.invalid_memo_value(MemoTypeTag.TEXT, memo_value)
            )
        return MemoResult.success(CanonicalMemo.text(memo_value))

    def _hash_memo(self, memo_value: str) -> MemoResult:
        for digest in self._hash_candidates(memo_value):
            if len(digest) == MEMO_HASH_BYTES:
                return MemoResult.success(CanonicalMemo.hash(digest))
        self.log.log(
            logging.DEBUG,
            "Failed to parse the memo.",
            {
                "context": _CTX,
                "error": f"hash memo must decode to {MEMO_HASH_BYTES} bytes",
            },
        )
        return MemoResult.fail(
            ValidationFailure.invalid_memo_value(MemoTypeTag.HASH, memo_value)
        )

    def _hash_candidates(self, memo_value: str) -> Iterator[bytes]:
        """Yield digests to try: strict base64 first, then the raw string."""
        decoded = _strict_b64decode(memo_value)
        if decoded is not None:
            yield decoded
        # TODO: default allow_raw_hash to False once clients send base64 only.
        if self.allow_raw_hash:
            raw = _utf8(memo_value)
            if raw is not None:
                yield raw


def _utf8(value: str) -> Optional[bytes]:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError:
        return None


def _strict_b64decode(value: str) -> Optional[bytes]:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return None


def translate(
    memo_value: str, memo_type: str, log: Optional[LoggingSink] = None
) -> MemoResult:
    """Translate with a throwaway ``TranslateMemo``; see its ``__call__``."""
    if log is None:
        return TranslateMemo()(memo_value, memo_type)
    return TranslateMemo(log=log)(memo_value, memo_type)


__all__ = ["TranslateMemo", "translate"]
