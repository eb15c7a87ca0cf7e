"""
Lifecycle events fanned out to live subscribers, and the control records of the stream.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

from engine.errors import MalformedEventPayload

INFO_TYPE = "info"
PING_TYPE = "ping"
PONG_TYPE = "pong"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Event:
    kind: str
    subject: str
    detail: str
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, kind: Any, subject: Any, detail: Any) -> Event:
        values: Dict[str, str] = {}
        for name, value in (("kind", kind), ("subject", subject)):
            if not isinstance(value, str) or not value.strip():
                raise MalformedEventPayload(f"{name} must be a non-empty string")
            values[name] = value.strip()
        if not isinstance(detail, str):
            raise MalformedEventPayload("detail must be a string")
        values["detail"] = detail.strip()
        return cls(**values)

    def to_message(self) -> Dict[str, str]:
        return {
            "type": self.kind,
            "repo": self.subject,
            "event": self.detail,
            "timestamp": format_timestamp(self.timestamp),
        }


def info_message(text: str) -> Dict[str, str]:
    return {"type": INFO_TYPE, "message": text}


def ping_message() -> Dict[str, str]:
    return {"type": PING_TYPE}


def is_pong(raw: str) -> bool:
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError):
        return False
    return isinstance(payload, dict) and payload.get("type") == PONG_TYPE
