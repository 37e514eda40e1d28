"""Event type definitions."""

from enum import Enum


class EventType(str, Enum):
    """All event types published by the presence engine."""

    # Tracking lifecycle events
    TRACKING_STARTED = "tracking.started"
    TRACKING_STOPPED = "tracking.stopped"

    # Player notifications derived from logs
    PLAYER_JOINED = "player.joined"
    PLAYER_LEFT = "player.left"

    # Roster state changes
    ROSTER_UPDATED = "roster.updated"
