# rest_api/app.py
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel, Field

from sepmemo.adapters.localization_json import JsonCatalogLocalizer
from sepmemo.adapters.logging_sink import StdlibLoggingSink
from sepmemo.domain.errors import MemoResult
from sepmemo.domain.memo import MemoTypeTag
from sepmemo.usecases.localize_failure import LocalizeFailure
from sepmemo.usecases.parse_memo_request import (
    INTERACTIVE_POLICY,
    TRANSFER_POLICY,
    ParseMemoRequest,
)
from sepmemo.usecases.translate_memo import TranslateMemo
from sepmemo.utils import logging as logging_utils
from sepmemo.utils.settings import MemoSettings

_LOG_LEVEL = logging_utils.configure_root()
log = logging.getLogger("sepmemo.rest_api")
log.info("Memo API logging at %s.", logging_utils.level_name(_LOG_LEVEL))

SETTINGS = MemoSettings.from_env()
LOCALIZER = JsonCatalogLocalizer(SETTINGS.locales_dir)
TRANSLATE = TranslateMemo(log=StdlibLoggingSink(), allow_raw_hash=SETTINGS.allow_raw_hash)
PARSERS = {
    False: ParseMemoRequest(translate=TRANSLATE, policy=TRANSFER_POLICY),
    True: ParseMemoRequest(translate=TRANSLATE, policy=INTERACTIVE_POLICY),
}
LOCALIZE = LocalizeFailure(LOCALIZER)


# ---------- Request/Response models ----------
class MemoRequest(BaseModel):
    memo: Optional[Any] = Field(None, description="memo value as sent by the client")
    memo_type: Optional[Any] = Field(None, description="id | text | hash")
    refund_memo: Optional[Any] = None
    refund_memo_type: Optional[Any] = None
    lang: Optional[str] = Field(None, description="locale for error messages, e.g. 'de'")
    interactive: bool = Field(False, description="apply interactive-flow memo rules")


class MemoPayload(BaseModel):
    memo_type: str
    memo: Optional[str] = None


class MemoResponse(BaseModel):
    memo: Optional[MemoPayload] = None
    refund_memo: Optional[MemoPayload] = None


app = FastAPI(title="Memo Translation API", version="0.1.0")


def _resolve_lang(body_lang: Optional[str], accept_language: Optional[str]) -> str:
    if body_lang and body_lang.strip():
        return body_lang.strip()
    if accept_language:
        first = accept_language.split(",", 1)[0].split(";", 1)[0].strip()
        if first:
            return first
    return SETTINGS.default_locale


def _payload_or_400(result: MemoResult, lang: str) -> Optional[MemoPayload]:
    if result.failure is not None:
        message = LOCALIZE(result.failure, lang=lang)
        log.info("Memo rejected (%s): %s", result.failure.kind.value, result.failure.message)
        raise HTTPException(400, message)
    if result.memo is None:
        return None
    return MemoPayload(**result.memo.to_payload())


# ---------- Endpoints ----------
@app.get("/health")
def health() -> Dict[str, Any]:
    return {"ok": True, "default_locale": SETTINGS.default_locale}


@app.get("/memo/types")
def memo_types(interactive: bool = False) -> Dict[str, List[str]]:
    policy = INTERACTIVE_POLICY if interactive else TRANSFER_POLICY
    allowed = sorted(policy.allowed_types)
    return {"memo_types": [tag.token for tag in allowed]}


@app.post("/memo", response_model=MemoResponse)
def parse_memo(req: MemoRequest, accept_language: Optional[str] = Header(None)) -> MemoResponse:
    lang = _resolve_lang(req.lang, accept_language)
    parser = PARSERS[req.interactive]
    data = req.model_dump()
    memo = _payload_or_400(parser.memo(data), lang)
    refund = _payload_or_400(parser.refund_memo(data), lang)
    return MemoResponse(memo=memo, refund_memo=refund)


@app.get("/memo/{memo_type}/{memo_value:path}", response_model=MemoPayload)
def translate_memo(memo_type: str, memo_value: str, lang: Optional[str] = None) -> MemoPayload:
    payload = _payload_or_400(TRANSLATE(memo_value, memo_type), _resolve_lang(lang, None))
    if payload is None:
        raise HTTPException(400, "memo must not be empty")
    return payload
