"""
Exception hierarchy for the graph engine and the live event hub.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


class EngineError(Exception):
    pass


class ConstructionError(EngineError):
    """An edge references a node that is not part of the node set."""

    def __init__(self, message: str, unknown: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.unknown = unknown


class ScanError(EngineError):
    pass


class MalformedEventPayload(EngineError):
    pass


class DeliveryFailure(EngineError):
    def __init__(self, connection_id: str, reason: str) -> None:
        super().__init__(f"delivery to {connection_id} failed: {reason}")
        self.connection_id = connection_id
        self.reason = reason


class LivenessTimeout(EngineError):
    pass
