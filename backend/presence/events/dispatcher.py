"""Event dispatcher - dispatches typed events to registered handlers.

This is a simple in-process event system without persistence.
Each event type has its own registration and dispatch method with proper typing.
"""

import asyncio
import inspect
from typing import Awaitable, Callable, Dict, List, TypeVar, Union

from ..logger import logger
from .base import (
    BaseEvent,
    PlayerJoinedEvent,
    PlayerLeftEvent,
    RosterUpdatedEvent,
    TrackingStartedEvent,
    TrackingStoppedEvent,
)
from .types import EventType

EventT = TypeVar("EventT", bound=BaseEvent)

# Handlers may be sync or async
EventHandler = Union[Callable[[EventT], None], Callable[[EventT], Awaitable[None]]]


class EventDispatcher:
    """Dispatches events to registered handlers.

    Dispatch awaits every handler of an event before returning, so events
    dispatched one after another reach each handler in the same order.
    """

    def __init__(self):
        self._handlers: Dict[EventType, List[Callable]] = {
            event_type: [] for event_type in EventType
        }

    # Registration methods

    def on_tracking_started(self, handler: EventHandler[TrackingStartedEvent]) -> None:
        """Register handler for tracking started events."""
        self._handlers[EventType.TRACKING_STARTED].append(handler)

    def on_tracking_stopped(self, handler: EventHandler[TrackingStoppedEvent]) -> None:
        """Register handler for tracking stopped events."""
        self._handlers[EventType.TRACKING_STOPPED].append(handler)

    def on_player_joined(self, handler: EventHandler[PlayerJoinedEvent]) -> None:
        """Register handler for player joined notifications."""
        self._handlers[EventType.PLAYER_JOINED].append(handler)

    def on_player_left(self, handler: EventHandler[PlayerLeftEvent]) -> None:
        """Register handler for player left notifications."""
        self._handlers[EventType.PLAYER_LEFT].append(handler)

    def on_roster_updated(self, handler: EventHandler[RosterUpdatedEvent]) -> None:
        """Register handler for roster updates."""
        self._handlers[EventType.ROSTER_UPDATED].append(handler)

    # Dispatch methods

    async def dispatch_tracking_started(self, event: TrackingStartedEvent) -> None:
        await self._dispatch_event(event)

    async def dispatch_tracking_stopped(self, event: TrackingStoppedEvent) -> None:
        await self._dispatch_event(event)

    async def dispatch_player_joined(self, event: PlayerJoinedEvent) -> None:
        await self._dispatch_event(event)

    async def dispatch_player_left(self, event: PlayerLeftEvent) -> None:
        await self._dispatch_event(event)

    async def dispatch_roster_updated(self, event: RosterUpdatedEvent) -> None:
        await self._dispatch_event(event)

    async def _dispatch_event(self, event: BaseEvent) -> None:
        """Dispatch event to all registered handlers and wait for them.

        Handler failures are logged and never reach the dispatching side.
        """
        handlers = self._handlers.get(event.event_type, [])

        if not handlers:
            logger.debug(f"No handlers registered for event: {event.event_type}")
            return

        tasks = []
        for handler in handlers:
            if inspect.iscoroutinefunction(handler):
                tasks.append(asyncio.create_task(handler(event)))
            else:
                tasks.append(asyncio.create_task(asyncio.to_thread(handler, event)))

        results = await asyncio.gather(*tasks, return_exceptions=True)
        for handler, result in zip(handlers, results):
            if isinstance(result, Exception):
                logger.error(
                    f"Handler {getattr(handler, '__name__', handler)!r} failed for event {event.event_type}: {result}",
                    exc_info=result,
                )


# Global event dispatcher instance
event_dispatcher = EventDispatcher()
