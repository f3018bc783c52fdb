from __future__ import annotations

import logging

from sepmemo.adapters.logging_sink import NullLoggingSink, StdlibLoggingSink
from sepmemo.usecases.translate_memo import TranslateMemo


def test_null_sink_discards_records() -> None:
    assert NullLoggingSink().log(logging.DEBUG, "ignored", {"context": "util"}) is None


def test_stdlib_sink_renders_context_fields(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="test.sink")
    sink = StdlibLoggingSink(logging.getLogger("test.sink"))

    sink.log(logging.DEBUG, "Parsing memo string.", {"context": "util", "memo": "x"})

    record = caplog.records[-1]
    assert record.getMessage() == "Parsing memo string. context='util' memo='x'"
    assert record.levelno == logging.DEBUG
    assert record.memo_context == {"context": "util", "memo": "x"}
    assert record.exc_info is None


def test_stdlib_sink_passes_exception_as_exc_info(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="test.sink")
    sink = StdlibLoggingSink(logging.getLogger("test.sink"))
    error = ValueError("bad digest")

    sink.log(logging.DEBUG, "Failed to parse the memo.", {"exception": error})

    record = caplog.records[-1]
    assert record.getMessage() == "Failed to parse the memo."
    assert record.exc_info is not None
    assert record.exc_info[1] is error


def test_stdlib_sink_skips_disabled_levels(caplog) -> None:
    caplog.set_level(logging.INFO, logger="test.sink")
    sink = StdlibLoggingSink(logging.getLogger("test.sink"))

    sink.log(logging.DEBUG, "hidden", {"context": "util"})

    assert not [r for r in caplog.records if r.name == "test.sink"]


def test_translator_logs_through_stdlib_sink(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="test.translate")
    translator = TranslateMemo(log=StdlibLoggingSink(logging.getLogger("test.translate")))

    translator("", "id")

    messages = [r.getMessage() for r in caplog.records if r.name == "test.translate"]
    assert messages[-1] == "Memo is empty. context='util'"
