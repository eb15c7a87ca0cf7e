"""
Health check route reporting graph version and live subscriber count.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.routes.common import get_graph_state, get_hub
from api.routes.exception import handle_exceptions
from engine.graph import GraphState
from engine.hub import EventHub

router = APIRouter(tags=["Health"])


@router.get("/health")
@handle_exceptions
async def health(
    state: GraphState = Depends(get_graph_state),
    hub: EventHub = Depends(get_hub),
) -> Dict[str, Any]:
    return {
        "status": "ok",
        "graph_version": state.current.version,
        "subscribers": hub.subscriber_count,
        "liveness_monitor": "running" if hub.monitor.running else "stopped",
    }
