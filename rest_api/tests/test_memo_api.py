import base64
import importlib.util
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient


def _load_app(monkeypatch, **env):
    monkeypatch.delenv("SEPMEMO_LOCALES_DIR", raising=False)
    monkeypatch.delenv("SEPMEMO_DEFAULT_LOCALE", raising=False)
    monkeypatch.delenv("SEPMEMO_ALLOW_RAW_HASH", raising=False)
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    app_path = Path(__file__).resolve().parents[1] / "app.py"
    module_name = f"rest_api_app_test_{uuid.uuid4().hex}"
    spec = importlib.util.spec_from_file_location(module_name, app_path)
    assert spec is not None
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def client(monkeypatch):
    module = _load_app(monkeypatch)
    return TestClient(module.app)


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "default_locale": "en"}


def test_memo_types_per_policy(client):
    assert client.get("/memo/types").json() == {"memo_types": ["text", "id", "hash"]}
    assert client.get("/memo/types", params={"interactive": "true"}).json() == {"memo_types": ["id"]}


def test_post_memo_success(client):
    resp = client.post("/memo", json={"memo": "123", "memo_type": "id"})

    assert resp.status_code == 200
    assert resp.json() == {"memo": {"memo_type": "id", "memo": "123"}, "refund_memo": None}


def test_post_memo_with_refund(client):
    digest = base64.b64encode(bytes(range(32))).decode("ascii")
    resp = client.post(
        "/memo",
        json={"memo": digest, "memo_type": "hash", "refund_memo": "note", "refund_memo_type": "text"},
    )

    assert resp.status_code == 200
    assert resp.json() == {
        "memo": {"memo_type": "hash", "memo": digest},
        "refund_memo": {"memo_type": "text", "memo": "note"},
    }


def test_post_without_memo_returns_nothing(client):
    resp = client.post("/memo", json={})

    assert resp.status_code == 200
    assert resp.json() == {"memo": None, "refund_memo": None}


@pytest.mark.parametrize(
    "body, detail",
    [
        ({"memo": "122"}, "memo_type is required if memo is specified"),
        ({"memo": "122", "memo_type": "donuts"}, "memo type donuts not supported."),
        ({"memo": "12a", "memo_type": "id"}, "Invalid memo 12a of type: id"),
        ({"memo": "1" * 5000, "memo_type": "id"}, "Invalid memo " + "1" * 5000 + " of type: id"),
        ({"memo": 122, "memo_type": "id"}, "memo must be a string"),
        ({"refund_memo_type": "id"}, "refund memo type is specified but refund memo missing"),
    ],
)
def test_post_memo_rejections(client, body, detail):
    resp = client.post("/memo", json=body)

    assert resp.status_code == 400
    assert resp.json() == {"detail": detail}


def test_error_language_from_body_or_header(client):
    body = {"memo": "abc", "memo_type": "id"}

    by_body = client.post("/memo", json={**body, "lang": "de"})
    by_header = client.post("/memo", json=body, headers={"Accept-Language": "de-DE,de;q=0.9"})

    assert by_body.json() == {"detail": "Ungültiges Memo abc vom Typ: id"}
    assert by_header.json() == {"detail": "Ungültiges Memo abc vom Typ: id"}


def test_interactive_flow_defaults_to_id(client):
    ok = client.post("/memo", json={"memo": "19233", "interactive": True})
    rejected = client.post("/memo", json={"memo": "x", "memo_type": "text", "interactive": True})

    assert ok.json()["memo"] == {"memo_type": "id", "memo": "19233"}
    assert rejected.status_code == 400


def test_translate_path_endpoint(client):
    assert client.get("/memo/text/hello").json() == {"memo_type": "text", "memo": "hello"}
    assert client.get("/memo/none/x").json() == {"memo_type": "none", "memo": None}

    unsupported = client.get("/memo/return/abc")
    assert unsupported.status_code == 400
    assert unsupported.json() == {"detail": "Unsupported memo type value: return"}


def test_env_settings_drive_locale_and_hash_policy(monkeypatch):
    module = _load_app(monkeypatch, SEPMEMO_DEFAULT_LOCALE="de", SEPMEMO_ALLOW_RAW_HASH="0")
    client = TestClient(module.app)

    resp = client.post("/memo", json={"memo": "a" * 31 + "!", "memo_type": "hash"})

    assert resp.status_code == 400
    assert resp.json() == {"detail": f"Ungültiges Memo {'a' * 31}! vom Typ: hash"}


def test_startup_logs_effective_level(monkeypatch, caplog):
    caplog.set_level("INFO", logger="sepmemo.rest_api")

    _load_app(monkeypatch, SEPMEMO_LOG_LEVEL="INFO")

    assert "Memo API logging at INFO." in [
        r.getMessage() for r in caplog.records if r.name == "sepmemo.rest_api"
    ]
