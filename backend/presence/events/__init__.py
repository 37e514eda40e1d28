"""
Event system for the presence engine.

Notifications and roster changes are published here as a side channel;
the roster itself is read from the tracker.
"""

from .base import (
    BaseEvent,
    PlayerJoinedEvent,
    PlayerLeftEvent,
    RosterUpdatedEvent,
    TrackingStartedEvent,
    TrackingStoppedEvent,
)
from .dispatcher import EventDispatcher, event_dispatcher
from .types import EventType

__all__ = [
    "BaseEvent",
    "EventDispatcher",
    "event_dispatcher",
    "EventType",
    "PlayerJoinedEvent",
    "PlayerLeftEvent",
    "RosterUpdatedEvent",
    "TrackingStartedEvent",
    "TrackingStoppedEvent",
]
