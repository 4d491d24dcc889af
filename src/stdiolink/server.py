from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from stdiolink import __version__
from stdiolink.rpc.jsonrpc import (
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    encode,
    make_error,
    make_response,
)
from stdiolink.transport.base import Transport

logger = logging.getLogger(__name__)


class JsonRpcServer:
    """
    Minimal JSON-RPC 2.0 responder driven by a transport.

    Answers ``ping``, ``initialize`` and ``shutdown``; every other request gets
    "method not found". Notifications and responses from the peer are not
    answered. Useful for exercising a peer's side of the wire.
    """

    def __init__(self, transport: Transport, name: str = "stdiolink") -> None:
        self.name = name
        self._transport = transport
        self._shutdown_event = asyncio.Event()

    async def serve(self) -> None:
        """Answer messages until the receive stream ends or shutdown is requested."""
        logger.info("Starting JSON-RPC server: %s", self.name)
        async for raw in self._transport.receive():
            reply = self.handle(raw)
            if reply is not None:
                await self._transport.send(encode(reply))
            if self._shutdown_event.is_set():
                break
        logger.info("JSON-RPC server stopped: %s", self.name)

    def handle(self, raw: bytes) -> Any | None:
        try:
            msg = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Malformed message: %s", e)
            return make_error(None, PARSE_ERROR, "Parse error")

        if isinstance(msg, list):
            if not msg:
                return make_error(None, INVALID_REQUEST, "Invalid Request")
            replies = [r for r in (self._handle_one(m) for m in msg) if r is not None]
            return replies or None
        return self._handle_one(msg)

    def _handle_one(self, msg: Any) -> dict | None:
        if not isinstance(msg, dict):
            return make_error(None, INVALID_REQUEST, "Invalid Request")
        method = msg.get("method")
        if not isinstance(method, str):
            # Responses to requests we never sent; nothing to answer
            if "result" in msg or "error" in msg:
                return None
            return make_error(msg.get("id"), INVALID_REQUEST, "Invalid Request")

        is_notification = "id" not in msg
        msg_id = msg.get("id")

        if method == "ping":
            result: Any = {}
        elif method == "initialize":
            result = {"serverInfo": {"name": self.name, "version": __version__}}
        elif method == "shutdown":
            result = None
            self.request_shutdown()
        else:
            if is_notification:
                return None
            return make_error(msg_id, METHOD_NOT_FOUND, f"Method not found: {method}")

        if is_notification:
            return None
        return make_response(msg_id, result)

    def request_shutdown(self) -> None:
        self._shutdown_event.set()
