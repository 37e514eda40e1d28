"""Base event model for all events."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from .types import EventType


class BaseEvent(BaseModel):
    """Base class for all events."""

    event_type: EventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# Tracking lifecycle events
class TrackingStartedEvent(BaseEvent):
    """Fired when the engine begins observing a server."""

    event_type: EventType = EventType.TRACKING_STARTED
    server_id: str = Field(..., description="Server identifier")


class TrackingStoppedEvent(BaseEvent):
    """Fired when the engine stops observing a server and drops its roster."""

    event_type: EventType = EventType.TRACKING_STOPPED
    server_id: str = Field(..., description="Server identifier")


# Player notifications
class PlayerJoinedEvent(BaseEvent):
    """Fired when a join line adds a player to the roster."""

    event_type: EventType = EventType.PLAYER_JOINED
    server_id: str = Field(..., description="Server identifier")
    player_name: str = Field(..., description="Normalized player name")

    @property
    def message(self) -> str:
        return f"{self.player_name} joined"


class PlayerLeftEvent(BaseEvent):
    """Fired when a leave line removes a player from the roster."""

    event_type: EventType = EventType.PLAYER_LEFT
    server_id: str = Field(..., description="Server identifier")
    player_name: str = Field(..., description="Normalized player name")

    @property
    def message(self) -> str:
        return f"{self.player_name} left"


class RosterUpdatedEvent(BaseEvent):
    """Fired whenever the roster of a server changes, for any reason."""

    event_type: EventType = EventType.ROSTER_UPDATED
    server_id: str = Field(..., description="Server identifier")
    players: list[str] = Field(..., description="Current roster, in display order")
