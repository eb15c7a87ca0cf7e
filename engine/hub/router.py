"""
Fan-out of events to every registered subscriber.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from engine.errors import DeliveryFailure
from engine.events import Event
from engine.hub.connection import Connection
from engine.hub.registry import ConnectionRegistry

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryReport:
    """Outcome of one fan-out. ``delivered`` counts outboxes that accepted the record."""

    event: Event
    attempted: int
    delivered: int
    failed: Tuple[str, ...] = ()

    @property
    def all_failed(self) -> bool:
        return self.attempted > 0 and self.delivered == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.event.to_message(),
            "attempted": self.attempted,
            "delivered": self.delivered,
            "failed": list(self.failed),
        }


class BroadcastRouter:
    """Pushes one event onto the outbox of each connection in a registry snapshot.

    Enqueueing never waits on the subscriber, so a slow or dead peer cannot
    hold up the others. A connection that refuses the record is evicted at
    once and listed in the report; delivery to the rest carries on.
    """

    def __init__(self, registry: ConnectionRegistry, evict: Callable[[Connection, str], None]) -> None:
        self._registry = registry
        self._evict = evict

    def emit(self, event: Event) -> DeliveryReport:
        message = event.to_message()
        targets = self._registry.snapshot()
        delivered = 0
        failed: List[str] = []

        for conn in targets:
            try:
                conn.try_send(message)
            except DeliveryFailure as exc:
                log.warning("Delivery of %s to %s failed: %s", event.kind, conn.connection_id, exc.reason)
                failed.append(conn.connection_id)
                self._evict(conn, exc.reason)
            else:
                delivered += 1

        log.debug(
            "Emitted %s/%s to %d of %d subscribers", event.kind, event.subject, delivered, len(targets)
        )
        return DeliveryReport(event=event, attempted=len(targets), delivered=delivered, failed=tuple(failed))
