from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel

from assistant import Conversation, load_knowledge_table, respond
from assistant.config import (
    DEFAULT_CONFIG_PATH,
    configure_logging,
    knowledge_source,
    load_config,
    typing_delay_seconds,
)
from assistant.text import is_blank
from assistant.types import KnowledgeTable, Message

from .middleware import error_middleware, logging_middleware


class RespondRequest(BaseModel):
    text: str


def table_outline(table: KnowledgeTable) -> List[Dict[str, Any]]:
    return [
        {
            "language": language,
            "topics": [{"key": key, "topic": record.topic} for key, record in topics.items()],
        }
        for language, topics in table
    ]


def message_frame(message: Message) -> str:
    return json.dumps({"type": "message", **asdict(message)}, ensure_ascii=False)


def _parse_frame(raw: str) -> Dict[str, Any]:
    """Text frames are either plain user text or a JSON control object."""
    try:
        payload = json.loads(raw) if raw else {}
    except json.JSONDecodeError:
        return {"type": "text", "text": raw}
    if not isinstance(payload, dict):
        return {"type": "text", "text": raw}
    return payload


def create_app(config_path: str = DEFAULT_CONFIG_PATH, data_path: Optional[str] = None) -> FastAPI:
    cfg = load_config(config_path)
    configure_logging(cfg)
    table = load_knowledge_table(knowledge_source(cfg, data_path))
    typing_delay = typing_delay_seconds(cfg)
    server_cfg = cfg.get("server", {})

    app = FastAPI(title="Technical Assistant")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=server_cfg.get("cors_origins", ["*"]),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(error_middleware)
    app.middleware("http")(logging_middleware)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"status": "ok", "languages": len(table), "topics": table.topic_count()}

    @app.get("/knowledge")
    async def knowledge() -> List[Dict[str, Any]]:
        return table_outline(table)

    @app.post("/respond")
    async def respond_once(body: RespondRequest) -> Dict[str, Any]:
        if is_blank(body.text):
            raise HTTPException(status_code=400, detail="text must not be blank")
        return asdict(respond(body.text, table))

    @app.websocket("/ws")
    async def ws_chat(websocket: WebSocket) -> None:
        await websocket.accept()
        conversation = Conversation(table, typing_delay=typing_delay)
        logger.info("Chat session opened")
        try:
            while True:
                msg = await websocket.receive()
                if msg["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(msg.get("code", 1000))
                if msg.get("bytes") is not None:
                    logger.warning("Rejected binary frame on chat session")
                    await websocket.send_text(json.dumps({"type": "error", "detail": "binary frames are not supported"}))
                    continue
                payload = _parse_frame(msg.get("text") or "")
                kind = payload.get("type", "text")
                if kind == "reset":
                    conversation.clear()
                    await websocket.send_text(json.dumps({"type": "reset"}))
                    continue
                if kind != "text":
                    await websocket.send_text(json.dumps({"type": "error", "detail": f"unknown frame type: {kind}"}))
                    continue
                query = str(payload.get("text") or "")
                if is_blank(query):
                    continue
                await websocket.send_text(json.dumps({"type": "typing"}))
                reply = await conversation.asubmit(query)
                if reply is not None:
                    await websocket.send_text(message_frame(reply))
        except WebSocketDisconnect:
            logger.info(f"Chat session closed after {len(conversation)} messages")
            return

    return app


if __name__ == "__main__":
    import uvicorn

    server_cfg = load_config(DEFAULT_CONFIG_PATH).get("server", {})
    uvicorn.run(create_app(), host=server_cfg.get("host", "0.0.0.0"), port=server_cfg.get("port", 9000))
