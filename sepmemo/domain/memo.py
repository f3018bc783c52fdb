"""Canonical ledger memo value objects.

The request layer speaks in ``(memo, memo_type)`` strings; everything past the
translator works with ``CanonicalMemo`` instances whose invariants are
enforced on construction.
"""

from __future__ import annotations

import base64
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional, Union

MEMO_TEXT_MAX_BYTES = 28
MEMO_HASH_BYTES = 32
MEMO_ID_MAX = 2**64 - 1

MemoValue = Union[None, int, str, bytes]


class MemoTypeTag(IntEnum):
    """Ledger memo kinds; values are the memo union discriminants."""

    NONE = 0
    TEXT = 1
    ID = 2
    HASH = 3
    RETURN = 4

    @property
    def token(self) -> str:
        """Lowercase name used in request payloads."""
        return self.name.lower()

    @classmethod
    def from_token(cls, token: str) -> Optional["MemoTypeTag"]:
        """Parse a request token; tokens are exact lowercase names."""
        return _TAGS_BY_TOKEN.get(token) if isinstance(token, str) else None


_TAGS_BY_TOKEN: Dict[str, MemoTypeTag] = {tag.token: tag for tag in MemoTypeTag}


def memo_type_tag_to_string(tag: Any) -> str:
    """Return the lowercase name for ``tag`` or ``"unknown"``.

    Accepts ``MemoTypeTag`` members and their integer discriminants.
    """
    if isinstance(tag, bool) or not isinstance(tag, int):
        return "unknown"
    try:
        return MemoTypeTag(tag).token
    except ValueError:
        return "unknown"


@dataclass(frozen=True)
class CanonicalMemo:
    """Typed memo ready to be attached to a ledger transaction."""

    tag: MemoTypeTag
    value: MemoValue = None

    def __post_init__(self) -> None:
        if not isinstance(self.tag, MemoTypeTag):
            raise TypeError("CanonicalMemo requires a MemoTypeTag.")
        tag = self.tag
        value = self.value
        if tag is MemoTypeTag.NONE:
            if value is not None:
                raise ValueError("A none memo carries no value.")
        elif tag is MemoTypeTag.ID:
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError("An id memo requires an int value.")
            if value < 0 or value > MEMO_ID_MAX:
                raise ValueError("An id memo must fit an unsigned 64-bit integer.")
        elif tag is MemoTypeTag.TEXT:
            if not isinstance(value, str):
                raise TypeError("A text memo requires a str value.")
            if len(value.encode("utf-8")) > MEMO_TEXT_MAX_BYTES:
                raise ValueError(
                    f"A text memo must not exceed {MEMO_TEXT_MAX_BYTES} bytes."
                )
        else:
            if not isinstance(value, (bytes, bytearray)):
                raise TypeError(f"A {tag.token} memo requires a bytes value.")
            if len(value) != MEMO_HASH_BYTES:
                raise ValueError(
                    f"A {tag.token} memo must be exactly {MEMO_HASH_BYTES} bytes."
                )
            object.__setattr__(self, "value", bytes(value))

    @classmethod
    def none(cls) -> "CanonicalMemo":
        return cls(MemoTypeTag.NONE)

    @classmethod
    def id(cls, value: int) -> "CanonicalMemo":
        return cls(MemoTypeTag.ID, value)

    @classmethod
    def text(cls, value: str) -> "CanonicalMemo":
        return cls(MemoTypeTag.TEXT, value)

    @classmethod
    def hash(cls, value: bytes) -> "CanonicalMemo":
        return cls(MemoTypeTag.HASH, value)

    @classmethod
    def return_hash(cls, value: bytes) -> "CanonicalMemo":
        """Refund reference memo; only the system itself creates these."""
        return cls(MemoTypeTag.RETURN, value)

    @property
    def type_name(self) -> str:
        return self.tag.token

    def to_payload(self) -> Dict[str, Optional[str]]:
        """Render the string form used in request and response payloads."""
        if self.tag is MemoTypeTag.NONE:
            memo: Optional[str] = None
        elif self.tag is MemoTypeTag.ID:
            memo = str(self.value)
        elif self.tag is MemoTypeTag.TEXT:
            memo = str(self.value)
        else:
            memo = base64.b64encode(self.value).decode("ascii")  # type: ignore[arg-type]
        return {"memo_type": self.tag.token, "memo": memo}

    def to_xdr(self) -> bytes:
        """Encode the memo union in the ledger's XDR wire form."""
        head = struct.pack(">i", int(self.tag))
        if self.tag is MemoTypeTag.NONE:
            return head
        if self.tag is MemoTypeTag.ID:
            return head + struct.pack(">Q", self.value)
        if self.tag is MemoTypeTag.TEXT:
            raw = str(self.value).encode("utf-8")
            padding = (4 - len(raw) % 4) % 4
            return head + struct.pack(">I", len(raw)) + raw + b"\x00" * padding
        return head + bytes(self.value)  # type: ignore[arg-type]

    def __str__(self) -> str:
        payload = self.to_payload()
        if payload["memo"] is None:
            return payload["memo_type"] or ""
        return f"{payload['memo_type']}:{payload['memo']}"


__all__ = [
    "CanonicalMemo",
    "MEMO_HASH_BYTES",
    "MEMO_ID_MAX",
    "MEMO_TEXT_MAX_BYTES",
    "MemoTypeTag",
    "memo_type_tag_to_string",
]
