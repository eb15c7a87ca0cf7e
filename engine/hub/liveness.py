"""
Periodic liveness sweep that evicts subscribers which stopped answering probes.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Callable, List, Optional

from config import settings
from engine.errors import DeliveryFailure, LivenessTimeout
from engine.hub.connection import Connection
from engine.hub.registry import ConnectionRegistry

log = logging.getLogger(__name__)

EvictCallback = Callable[[Connection, str], None]


class LivenessMonitor:
    def __init__(
        self,
        registry: ConnectionRegistry,
        evict: EvictCallback,
        interval: Optional[float] = None,
    ) -> None:
        self._registry = registry
        self._evict = evict
        self.interval = interval if interval is not None else settings.liveness_interval_seconds
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep(self) -> List[str]:
        """Probe every live connection; evict those still waiting on the last probe."""
        evicted: List[str] = []
        members = self._registry.snapshot()
        for conn in members:
            try:
                conn.probe()
            except LivenessTimeout as exc:
                self._evict(conn, str(exc))
                evicted.append(conn.connection_id)
            except DeliveryFailure as exc:
                self._evict(conn, exc.reason)
                evicted.append(conn.connection_id)
        log.debug("Liveness sweep: probed=%d evicted=%d", len(members) - len(evicted), len(evicted))
        return evicted

    async def run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.sweep()

    def start(self) -> None:
        if not self.running:
            self._task = asyncio.create_task(self.run(), name="liveness-monitor")
            log.info("Liveness monitor started (interval=%ss)", self.interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
