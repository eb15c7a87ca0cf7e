"""
A live subscriber connection: opaque transport handle, outbox queue and writer task.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import time
import uuid
from enum import Enum
from typing import Any, Callable, Dict, Optional, Protocol

from config import settings
from engine.errors import DeliveryFailure, LivenessTimeout
from engine.events import ping_message

log = logging.getLogger(__name__)

CLOSE_NORMAL = 1000
CLOSE_GOING_AWAY = 1001


class SubscriberHandle(Protocol):
    async def send_text(self, data: str) -> None: ...

    async def close(self, code: int = CLOSE_NORMAL) -> None: ...


class ConnectionState(str, Enum):
    alive = "alive"
    awaiting = "awaiting"
    evicted = "evicted"
    closed = "closed"


_TERMINAL = (ConnectionState.evicted, ConnectionState.closed)

FailureCallback = Callable[["Connection", str], None]


class Connection:
    """One subscriber of the event stream.

    ``try_send`` never awaits: it serialises the record onto a bounded outbox
    or raises :class:`DeliveryFailure`. A dedicated writer task drains the
    outbox in FIFO order, bounding every transport send by ``send_timeout``;
    a failed send stops the writer and reports through ``on_failure``.
    """

    def __init__(
        self,
        handle: SubscriberHandle,
        *,
        queue_size: Optional[int] = None,
        send_timeout: Optional[float] = None,
        on_failure: Optional[FailureCallback] = None,
        connection_id: Optional[str] = None,
    ) -> None:
        self.connection_id = connection_id or uuid.uuid4().hex
        self.handle = handle
        self.state = ConnectionState.alive
        self.connected_at = time.time()
        self.last_seen = self.connected_at
        self.sent = 0
        self._send_timeout = send_timeout if send_timeout is not None else settings.send_timeout_seconds
        size = queue_size if queue_size is not None else settings.subscriber_queue_size
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=max(1, size))
        self._on_failure = on_failure
        self._writer: Optional[asyncio.Task[None]] = None

    def __repr__(self) -> str:
        return f"Connection({self.connection_id!r}, state={self.state.value})"

    @property
    def is_open(self) -> bool:
        return self.state not in _TERMINAL

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def try_send(self, message: Dict[str, Any]) -> None:
        if not self.is_open:
            raise DeliveryFailure(self.connection_id, "connection closed")
        payload = json.dumps(message, separators=(",", ":"))
        try:
            self._queue.put_nowait(payload)
        except asyncio.QueueFull:
            raise DeliveryFailure(self.connection_id, "outbox full") from None

    def probe(self) -> None:
        if self.state is ConnectionState.awaiting:
            raise LivenessTimeout(f"{self.connection_id} did not answer the previous probe")
        if not self.is_open:
            raise DeliveryFailure(self.connection_id, "connection closed")
        # flag cleared before the ping goes out
        self.state = ConnectionState.awaiting
        self.try_send(ping_message())

    def mark_alive(self) -> None:
        self.last_seen = time.time()
        if self.state is ConnectionState.awaiting:
            self.state = ConnectionState.alive

    def start(self) -> None:
        if self._writer is None:
            self._writer = asyncio.create_task(
                self._drain_outbox(), name=f"subscriber-writer-{self.connection_id}"
            )

    async def flush(self) -> None:
        await self._queue.join()

    async def _drain_outbox(self) -> None:
        while True:
            payload = await self._queue.get()
            failure: Optional[str] = None
            try:
                await asyncio.wait_for(self.handle.send_text(payload), timeout=self._send_timeout)
                self.sent += 1
            except asyncio.TimeoutError:
                failure = f"send timed out after {self._send_timeout}s"
            except Exception as exc:
                failure = str(exc) or type(exc).__name__
            finally:
                self._queue.task_done()

            if failure is not None:
                log.warning("Send to subscriber %s failed: %s", self.connection_id, failure)
                self._discard_pending()
                if self._on_failure is not None:
                    self._on_failure(self, failure)
                return

    def _discard_pending(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            self._queue.task_done()

    def shutdown(self, state: ConnectionState = ConnectionState.closed) -> None:
        """Stop accepting records and cancel the writer; does not touch the transport."""
        if not self.is_open:
            return
        self.state = state
        writer = self._writer
        if writer is not None and not writer.done() and writer is not asyncio.current_task():
            writer.cancel()
        self._discard_pending()

    async def aclose(self, code: int = CLOSE_NORMAL, *, close_handle: bool = True) -> None:
        self.shutdown(ConnectionState.closed)
        writer = self._writer
        if writer is not None and writer is not asyncio.current_task():
            with contextlib.suppress(asyncio.CancelledError):
                await writer
        if not close_handle:
            return
        try:
            await asyncio.wait_for(self.handle.close(code), timeout=self._send_timeout)
        except Exception as exc:
            # the transport is usually already gone when we get here
            log.debug("Closing subscriber %s transport: %s", self.connection_id, exc)
