"""
Registry of live subscriber connections.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Optional, Tuple

from engine.hub.connection import Connection


class ConnectionRegistry:
    """Sole owner of the set of live connections.

    Membership changes go through one lock. Readers get a tuple snapshot
    taken under the lock and iterate it after the lock is released, so sends
    and evictions during fan-out never touch the live mapping being iterated.
    """

    def __init__(self) -> None:
        self._connections: Dict[str, Connection] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)

    def __contains__(self, connection_id: object) -> bool:
        with self._lock:
            return connection_id in self._connections

    def register(self, conn: Connection) -> str:
        with self._lock:
            self._connections[conn.connection_id] = conn
        return conn.connection_id

    def unregister(self, connection_id: str) -> Optional[Connection]:
        with self._lock:
            return self._connections.pop(connection_id, None)

    def get(self, connection_id: str) -> Optional[Connection]:
        with self._lock:
            return self._connections.get(connection_id)

    def snapshot(self) -> Tuple[Connection, ...]:
        with self._lock:
            return tuple(self._connections.values())

    def for_each(self, fn: Callable[[Connection], None]) -> int:
        members = self.snapshot()
        for conn in members:
            fn(conn)
        return len(members)
