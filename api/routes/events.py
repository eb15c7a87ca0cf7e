"""
Producer routes: accept lifecycle events and fan them out to live subscribers.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from fastapi import APIRouter, Depends, HTTPException

from api.requests import DeployEventRequest, EmitEventRequest, IncidentRequest
from api.responses import DeliveryReportResponse
from api.routes.common import get_hub
from api.routes.exception import handle_exceptions
from config import EVENT_KIND_INCIDENT, EVENT_KIND_REPO_UPDATE
from engine.errors import MalformedEventPayload
from engine.events import Event
from engine.hub import EventHub

router = APIRouter(tags=["Events"])


def _dispatch(hub: EventHub, kind: str, subject: str, detail: str, strict: bool) -> DeliveryReportResponse:
    try:
        event = Event.create(kind, subject, detail)
    except MalformedEventPayload as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    report = hub.emit(event)
    if strict and report.all_failed:
        raise HTTPException(
            status_code=503,
            detail=f"delivery failed for all {report.attempted} subscribers",
        )
    return DeliveryReportResponse.from_report(report)


@router.post("/events", summary="Broadcast a lifecycle event to all live subscribers")
@handle_exceptions
async def emit_event(
    req: EmitEventRequest,
    strict: bool = False,
    hub: EventHub = Depends(get_hub),
) -> DeliveryReportResponse:
    return _dispatch(hub, req.kind, req.subject, req.detail, strict)


@router.post("/emit-deploy", summary="Broadcast a deployment of a repository")
@handle_exceptions
async def emit_deploy(
    req: DeployEventRequest,
    strict: bool = False,
    hub: EventHub = Depends(get_hub),
) -> DeliveryReportResponse:
    return _dispatch(hub, EVENT_KIND_REPO_UPDATE, req.repo, "deployed", strict)


@router.post("/incidents", summary="Broadcast an incident raised against a service")
@handle_exceptions
async def emit_incident(
    req: IncidentRequest,
    strict: bool = False,
    hub: EventHub = Depends(get_hub),
) -> DeliveryReportResponse:
    detail = req.type
    if req.severity:
        detail = f"{detail} [{req.severity}]"
    if req.message:
        detail = f"{detail}: {req.message}"
    return _dispatch(hub, EVENT_KIND_INCIDENT, req.service, detail, strict)
