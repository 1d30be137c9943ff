import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

from assistant import FALLBACK_MESSAGE  # noqa: E402
from realtime.server import create_app  # noqa: E402

DATA = ROOT / "data" / "programming_knowledge.jsonl"


@pytest.fixture
def client(tmp_path):
    config = tmp_path / "assistant.json"
    config.write_text(
        json.dumps({"conversation": {"typing_delay_ms": 0}, "logging": {"level": "WARNING"}}),
        encoding="utf-8",
    )
    with TestClient(create_app(str(config), str(DATA))) as c:
        yield c


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "languages": 2, "topics": 14}


def test_knowledge_outline(client):
    outline = client.get("/knowledge").json()
    assert [entry["language"] for entry in outline] == ["C++", "Python"]
    assert outline[0]["topics"][0] == {"key": "pointers", "topic": "Pointers"}
    assert len(outline[1]["topics"]) == 7


def test_respond(client):
    resp = client.post("/respond", json={"text": "python context-managers"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["content"] == "Objects that manage resource allocation and deallocation."
    assert body["code"].startswith("with open('file.txt', 'r') as f:")


def test_respond_fallback(client):
    assert client.post("/respond", json={"text": "rust"}).json() == {"content": FALLBACK_MESSAGE, "code": None}


def test_respond_rejects_blank(client):
    assert client.post("/respond", json={"text": "   "}).status_code == 400


def test_websocket_chat(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_text("  ")
        ws.send_text("C++ templates")
        assert ws.receive_json() == {"type": "typing"}
        message = ws.receive_json()
        assert message["type"] == "message"
        assert message["is_bot"] is True
        assert message["content"].startswith("Templates enable generic programming")
        assert message["code"].startswith("template<typename T>")
        assert message["id"]


def test_websocket_json_text_and_reset(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_text(json.dumps({"type": "text", "text": "python"}))
        assert ws.receive_json() == {"type": "typing"}
        assert ws.receive_json()["content"].startswith("I can help you with Python!")

        ws.send_text(json.dumps({"type": "reset"}))
        assert ws.receive_json() == {"type": "reset"}

        ws.send_text(json.dumps({"type": "flush"}))
        assert ws.receive_json() == {"type": "error", "detail": "unknown frame type: flush"}


def test_unhandled_error_returns_json_500(client, monkeypatch):
    import realtime.server as server

    def boom(text, table):
        raise RuntimeError("table exploded")

    monkeypatch.setattr(server, "respond", boom)
    resp = client.post("/respond", json={"text": "python"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["detail"] == "Internal server error"
    assert body["type"] == "RuntimeError"
    assert body["request_id"] == resp.headers["X-Request-ID"]


def test_request_id_is_echoed(client):
    assert client.get("/health", headers={"X-Request-ID": "abc123"}).headers["X-Request-ID"] == "abc123"
    assert client.get("/health").headers["X-Request-ID"]


def test_websocket_rejects_binary_frames(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_bytes(b"\x00\x01")
        assert ws.receive_json() == {"type": "error", "detail": "binary frames are not supported"}
        ws.send_text("python generators")
        assert ws.receive_json() == {"type": "typing"}
        assert ws.receive_json()["content"].startswith("Functions that can pause")
