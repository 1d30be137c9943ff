#!/usr/bin/env python3
"""
Command-line client for the technical assistant server.

Modes:
- Websocket chat (/ws): interactive session, or one-shot with --query.
- HTTP (/respond): stateless one-shot question, requires --query.

Examples:
  python client.py --url ws://127.0.0.1:9000/ws --query "python generators"
  python client.py --url ws://127.0.0.1:9000/ws               # interactive
  python client.py --url http://127.0.0.1:9000/respond --query "c++ stl"
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
import textwrap
import urllib.error
import urllib.request
from typing import Any, Dict, List, Optional

import websockets


def _build_headers(args: argparse.Namespace) -> List[tuple[str, str]]:
    headers: List[tuple[str, str]] = []
    if args.auth:
        headers.append(("Authorization", args.auth))
    return headers


def format_reply(payload: Dict[str, Any]) -> str:
    lines = [f"bot> {payload.get('content', '')}"]
    code = payload.get("code")
    if code:
        lines.append(textwrap.indent(code, "    "))
    return "\n".join(lines)


async def _recv_reply(ws) -> Dict[str, Any]:
    while True:
        raw = await ws.recv()
        try:
            frame = json.loads(raw)
        except json.JSONDecodeError:
            return {"content": raw}
        if not isinstance(frame, dict):
            return {"content": raw}
        kind = frame.get("type")
        if kind == "typing":
            continue
        if kind == "error":
            return {"content": f"[error] {frame.get('detail', '')}"}
        return frame


async def ws_client(uri: str, query: Optional[str], headers: List[tuple[str, str]]) -> None:
    async with websockets.connect(uri, additional_headers=headers) as ws:
        if query is not None:
            await ws.send(query)
            print(format_reply(await _recv_reply(ws)))
            return
        print("Connected. Type '/reset' to start over, 'exit' to quit.")
        while True:
            try:
                text = input("you> ")
            except (EOFError, KeyboardInterrupt):
                break
            command = text.strip().lower()
            if command in {"exit", "quit"}:
                break
            if not command:
                continue
            if command == "/reset":
                await ws.send(json.dumps({"type": "reset"}))
                await _recv_reply(ws)
                print("bot> Conversation cleared.")
                continue
            await ws.send(text)
            print(format_reply(await _recv_reply(ws)))


def http_client(url: str, query: str, headers: List[tuple[str, str]]) -> int:
    body = json.dumps({"text": query}).encode("utf-8")
    req = urllib.request.Request(url, data=body, method="POST")
    req.add_header("Content-Type", "application/json")
    for key, value in headers:
        req.add_header(key, value)
    try:
        with urllib.request.urlopen(req) as resp:
            payload = json.loads(resp.read().decode("utf-8"))
    except urllib.error.HTTPError as e:
        print(f"HTTP {e.code}: {e.read()[:200]!r}", file=sys.stderr)
        return 1
    except urllib.error.URLError as e:
        print(f"HTTP request failed: {e.reason}", file=sys.stderr)
        return 1
    print(format_reply(payload))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Client for the technical assistant server")
    parser.add_argument("--url", required=True, help="URL, e.g. ws://host:9000/ws or http://host:9000/respond")
    parser.add_argument("--query", default=None, help="One-shot question. Omit for interactive websocket mode.")
    parser.add_argument("--auth", default=None, help="Authorization header if needed, e.g. 'Bearer xxx'")
    args = parser.parse_args()

    headers = _build_headers(args)
    if args.url.startswith(("http://", "https://")):
        if args.query is None:
            parser.error("--query is required for HTTP mode")
        raise SystemExit(http_client(args.url, args.query, headers))

    try:
        asyncio.run(ws_client(args.url, args.query, headers))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
