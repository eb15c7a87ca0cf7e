"""
WebSocket event stream for live subscribers.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from engine.hub import EventHub

log = logging.getLogger(__name__)

router = APIRouter(tags=["Stream"])


@router.websocket("/ws")
async def event_stream(websocket: WebSocket) -> None:
    hub: EventHub = websocket.app.state.hub
    await websocket.accept()
    conn = hub.subscribe(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
            raw = message.get("text")
            hub.handle_client_message(conn, raw if raw is not None else message.get("bytes"))
    except WebSocketDisconnect as exc:
        log.debug("Subscriber %s closed the stream (code %s)", conn.connection_id, exc.code)
    except RuntimeError as exc:
        # starlette refuses further receives once the hub closed an evicted socket
        log.debug("Stream for %s ended after server close: %s", conn.connection_id, exc)
    finally:
        await hub.unsubscribe(conn.connection_id)
