"""
Live event hub: wires the connection registry, the broadcast router and the liveness monitor.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Optional, Set

from config import settings
from engine.events import Event, info_message, is_pong
from engine.hub.connection import CLOSE_GOING_AWAY, Connection, ConnectionState, SubscriberHandle
from engine.hub.liveness import LivenessMonitor
from engine.hub.registry import ConnectionRegistry
from engine.hub.router import BroadcastRouter, DeliveryReport

log = logging.getLogger(__name__)


class EventHub:
    def __init__(
        self,
        *,
        welcome_message: Optional[str] = None,
        liveness_interval: Optional[float] = None,
        send_timeout: Optional[float] = None,
        queue_size: Optional[int] = None,
    ) -> None:
        self.welcome_message = welcome_message or settings.welcome_message
        self._send_timeout = send_timeout
        self._queue_size = queue_size
        self.registry = ConnectionRegistry()
        self.router = BroadcastRouter(self.registry, self.evict)
        self.monitor = LivenessMonitor(self.registry, self.evict, liveness_interval)
        self._closing: Set[asyncio.Task[None]] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self.registry)

    def subscribe(self, handle: SubscriberHandle) -> Connection:
        conn = Connection(
            handle,
            queue_size=self._queue_size,
            send_timeout=self._send_timeout,
            on_failure=self.evict,
        )
        # welcome is queued before registration so no broadcast can overtake it
        conn.try_send(info_message(self.welcome_message))
        self.registry.register(conn)
        conn.start()
        log.info("Subscriber %s connected (%d live)", conn.connection_id, self.subscriber_count)
        return conn

    async def unsubscribe(self, connection_id: str, *, close_handle: bool = False) -> None:
        conn = self.registry.unregister(connection_id)
        if conn is None:
            return
        await conn.aclose(close_handle=close_handle)
        log.info("Subscriber %s disconnected (%d live)", connection_id, self.subscriber_count)

    def evict(self, conn: Connection, reason: str) -> None:
        self.registry.unregister(conn.connection_id)
        if not conn.is_open:
            return
        conn.shutdown(ConnectionState.evicted)
        log.info("Evicted subscriber %s: %s", conn.connection_id, reason)
        self._spawn(conn.aclose(CLOSE_GOING_AWAY))

    def emit(self, event: Event) -> DeliveryReport:
        return self.router.emit(event)

    def handle_client_message(self, conn: Connection, raw: Any) -> None:
        if isinstance(raw, str) and is_pong(raw):
            conn.mark_alive()
            return
        log.debug("Ignoring message from subscriber %s", conn.connection_id)

    def start(self) -> None:
        self.monitor.start()

    async def stop(self) -> None:
        await self.monitor.stop()
        for conn in self.registry.snapshot():
            self.registry.unregister(conn.connection_id)
            await conn.aclose(CLOSE_GOING_AWAY)
        if self._closing:
            await asyncio.gather(*self._closing, return_exceptions=True)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._closing.add(task)
        task.add_done_callback(self._closing.discard)
