"""
Constants and configuration for the DevSync engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import List, Literal

from pydantic_settings import BaseSettings


BLAST_DIRECTION_DEPENDENCIES = "dependencies"
BLAST_DIRECTION_DEPENDENTS = "dependents"

EVENT_KIND_REPO_UPDATE = "repo-update"
EVENT_KIND_INCIDENT = "incident"

DEVSYNC_HOST = os.getenv("DEVSYNC_HOST", "0.0.0.0")
DEVSYNC_PORT = int(os.getenv("DEVSYNC_PORT", "8081"))
DEVSYNC_LOG_LEVEL = os.getenv("DEVSYNC_LOG_LEVEL", "info").lower()

DEVSYNC_LIVENESS_INTERVAL = float(os.getenv("DEVSYNC_LIVENESS_INTERVAL_SECONDS", "30"))
DEVSYNC_SEND_TIMEOUT = float(os.getenv("DEVSYNC_SEND_TIMEOUT_SECONDS", "5"))
DEVSYNC_QUEUE_SIZE = int(os.getenv("DEVSYNC_SUBSCRIBER_QUEUE_SIZE", "256"))

DEFAULT_WELCOME_MESSAGE = "Connected to DevSyncPro Live Event Stream"

# root node used by the go.mod scanner when the file has no module directive
DEFAULT_SCAN_ROOT = "main"


class Settings(BaseSettings):
    host: str = DEVSYNC_HOST
    port: int = DEVSYNC_PORT
    log_level: str = DEVSYNC_LOG_LEVEL
    cors_origins: List[str] = ["*"]

    # live event hub
    liveness_interval_seconds: float = DEVSYNC_LIVENESS_INTERVAL
    send_timeout_seconds: float = DEVSYNC_SEND_TIMEOUT
    subscriber_queue_size: int = DEVSYNC_QUEUE_SIZE
    welcome_message: str = DEFAULT_WELCOME_MESSAGE

    # blast radius
    blast_direction: Literal["dependencies", "dependents"] = BLAST_DIRECTION_DEPENDENCIES
    max_graph_nodes: int = 5000

    model_config = {
        "env_prefix": "DEVSYNC_",
        "extra": "ignore",
    }


settings = Settings()
