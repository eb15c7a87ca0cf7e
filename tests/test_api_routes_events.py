"""
API producer route tests.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest
from fastapi import HTTPException

from api.requests import DeployEventRequest, EmitEventRequest, IncidentRequest
from api.routes import events as events_route
from engine.hub import DeliveryReport


class DummyHub:
    def __init__(self, attempted=0, delivered=0):
        self.events = []
        self.attempted = attempted
        self.delivered = delivered

    def emit(self, event):
        self.events.append(event)
        failed = tuple(f"c{i}" for i in range(self.attempted - self.delivered))
        return DeliveryReport(event=event, attempted=self.attempted, delivered=self.delivered, failed=failed)


@pytest.mark.asyncio
async def test_emit_event():
    hub = DummyHub(attempted=3, delivered=2)
    res = await events_route.emit_event(
        EmitEventRequest(kind="repo-update", subject="payments", detail="deployed"), hub=hub
    )
    assert res.attempted == 3 and res.delivered == 2
    assert res.failed == ["c0"]
    assert res.event["repo"] == "payments"
    assert hub.events[0].detail == "deployed"


@pytest.mark.asyncio
async def test_emit_event_rejects_blank_subject():
    hub = DummyHub()
    with pytest.raises(HTTPException) as info:
        await events_route.emit_event(EmitEventRequest(subject="  ", detail="deployed"), hub=hub)
    assert info.value.status_code == 400
    assert hub.events == []


@pytest.mark.asyncio
async def test_strict_emit_fails_only_when_every_delivery_failed():
    with pytest.raises(HTTPException) as info:
        await events_route.emit_event(
            EmitEventRequest(subject="svc", detail="deployed"), strict=True, hub=DummyHub(2, 0)
        )
    assert info.value.status_code == 503

    res = await events_route.emit_event(
        EmitEventRequest(subject="svc", detail="deployed"), strict=False, hub=DummyHub(2, 0)
    )
    assert res.delivered == 0

    res = await events_route.emit_event(
        EmitEventRequest(subject="svc", detail="deployed"), strict=True, hub=DummyHub(0, 0)
    )
    assert res.attempted == 0


@pytest.mark.asyncio
async def test_emit_deploy():
    hub = DummyHub(1, 1)
    res = await events_route.emit_deploy(DeployEventRequest(repo="orders"), hub=hub)
    assert res.event["type"] == "repo-update"
    assert res.event["event"] == "deployed"
    assert res.event["repo"] == "orders"


@pytest.mark.asyncio
async def test_emit_incident():
    hub = DummyHub(1, 1)
    await events_route.emit_incident(
        IncidentRequest(service="db", type="outage", message="primary down", severity="critical"), hub=hub
    )
    event = hub.events[0]
    assert event.kind == "incident"
    assert event.subject == "db"
    assert event.detail == "outage [critical]: primary down"
