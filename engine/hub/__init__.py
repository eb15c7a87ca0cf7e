"""
Live event broadcast hub exports.
"""

from engine.hub.connection import Connection, ConnectionState, SubscriberHandle
from engine.hub.hub import EventHub
from engine.hub.liveness import LivenessMonitor
from engine.hub.registry import ConnectionRegistry
from engine.hub.router import BroadcastRouter, DeliveryReport

__all__ = [
    "BroadcastRouter",
    "Connection",
    "ConnectionRegistry",
    "ConnectionState",
    "DeliveryReport",
    "EventHub",
    "LivenessMonitor",
    "SubscriberHandle",
]
