"""
Shared dependencies for API route modules.

The graph state and the event hub are created by the application lifespan and
live on ``app.state``; routes receive them through these providers so tests
can hand in their own instances.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from engine.graph import GraphState
from engine.hub import EventHub


def get_graph_state(request: Request) -> GraphState:
    state = getattr(request.app.state, "graph_state", None)
    if state is None:
        raise HTTPException(status_code=503, detail="graph state not initialised")
    return state


def get_hub(request: Request) -> EventHub:
    hub = getattr(request.app.state, "hub", None)
    if hub is None:
        raise HTTPException(status_code=503, detail="event hub not initialised")
    return hub
