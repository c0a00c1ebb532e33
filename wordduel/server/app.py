"""FastAPI app exposing the duel over a WebSocket."""
from __future__ import annotations

import logging

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from wordduel.dictionary import WordValidator, create_validator

from .broadcaster import ConnectionManager, envelope
from .config import ServerConfig, load_config
from .models import (
    GuessLetterMessage,
    GuessWordMessage,
    JoinMessage,
    ResetMessage,
    SubmitWordsMessage,
    parse_client_message,
)
from .service import SessionService

logger = logging.getLogger(__name__)


def build_validator(config: ServerConfig) -> WordValidator:
    if config.validator == "static":
        return create_validator("static")
    return create_validator(
        "dictionary",
        base_url=config.dictionary_url,
        timeout=config.dictionary_timeout_sec,
    )


async def _error(ws: WebSocket, message: str, kind: str = "input_validation") -> None:
    await ws.send_json(envelope("error", {"kind": kind, "message": message}))


async def _receive_text(ws: WebSocket) -> str | None:
    """Receive one frame. Returns None for a binary frame."""
    message = await ws.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000))
    return message.get("text")


async def handle_message(service: SessionService, identity: str, raw: str) -> None:
    """Dispatch one message from an already-joined identity."""
    try:
        msg = parse_client_message(raw)
    except ValidationError as e:
        logger.warning("WS: invalid message from %s: %s", identity, e.errors()[:1])
        await service.broadcaster.send(
            identity, "error", {"kind": "input_validation", "message": "Malformed message."}
        )
        return

    logger.info("WS: msg from %s type=%s", identity, msg.type)
    if isinstance(msg, SubmitWordsMessage):
        await service.submit_words(identity, msg.words)
    elif isinstance(msg, GuessLetterMessage):
        await service.guess_letter(identity, msg.letter)
    elif isinstance(msg, GuessWordMessage):
        await service.guess_word(identity, msg.word)
    elif isinstance(msg, ResetMessage):
        await service.reset(identity)
    elif isinstance(msg, JoinMessage):
        if msg.identity != identity:
            await service.broadcaster.send(identity, "join-rejected", {
                "kind": "identity_violation",
                "message": f"This connection plays as {identity}.",
            })
        else:
            # Rejoin after a reset or the opponent leaving
            await service.join(identity)


async def _await_join(ws: WebSocket, service: SessionService, manager: ConnectionManager) -> str | None:
    """Receive messages until the client joins successfully. Returns the joined identity."""
    while True:
        raw = await _receive_text(ws)
        if raw is None:
            await _error(ws, "Send JSON text messages.")
            continue
        try:
            msg = parse_client_message(raw)
        except ValidationError:
            await _error(ws, "Malformed message.")
            continue
        if not isinstance(msg, JoinMessage):
            await _error(ws, "Join the game first.")
            continue
        if manager.is_connected(msg.identity):
            await ws.send_json(envelope("join-rejected", {
                "kind": "identity_violation",
                "message": f"{msg.identity} is already connected.",
            }))
            continue

        manager.connect(msg.identity, ws)
        try:
            joined = await service.join(msg.identity)
        except Exception:
            logger.exception("WS: join failed for %s", msg.identity)
            manager.disconnect(msg.identity)
            await _error(ws, "Could not join the game.", kind="server_error")
            continue
        if joined:
            return msg.identity
        manager.disconnect(msg.identity)


def create_app(
    config: ServerConfig | None = None,
    validator: WordValidator | None = None,
) -> FastAPI:
    """Build the FastAPI app with its own session service and connection manager."""
    config = config or load_config()
    manager = ConnectionManager()
    service = SessionService(config, validator or build_validator(config), manager)

    app = FastAPI(title="WordDuel API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.service = service
    app.state.manager = manager

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket):
        await ws.accept()
        logger.info("WS: connection from %s", ws.client)
        identity = None
        try:
            identity = await _await_join(ws, service, manager)
            while True:
                raw = await _receive_text(ws)
                if raw is None:
                    await _error(ws, "Send JSON text messages.")
                    continue
                await handle_message(service, identity, raw)
        except WebSocketDisconnect as e:
            logger.info("WS: client disconnected code=%s identity=%s", e.code, identity)
        except Exception as e:
            logger.exception("WS: error identity=%s: %s", identity, e)
        finally:
            if identity:
                manager.disconnect(identity)
                await service.disconnect(identity)

    return app
