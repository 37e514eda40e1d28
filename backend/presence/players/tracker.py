"""Player presence tracking for a single server."""

import asyncio
from typing import Optional

from ..config import ReconciliationSettings, settings
from ..events.base import (
    PlayerJoinedEvent,
    PlayerLeftEvent,
    RosterUpdatedEvent,
    TrackingStartedEvent,
    TrackingStoppedEvent,
)
from ..events.dispatcher import EventDispatcher
from ..log_monitor.parser import LineClassifier
from ..log_monitor.signals import NoMatch, Signal
from ..logger import logger
from ..process.types import LogSubscription, ProcessBackend
from .roster import Notification, NotificationKind, RosterReconciler


class ServerPresenceTracker:
    """Keeps the roster of one server current from its console output.

    Two stimuli feed the roster: every console line, classified and applied
    in arrival order, and a reconciliation loop that periodically asks the
    server to print its player listing. The listing comes back as an
    ordinary console line, so it goes through the same path as everything else.
    """

    def __init__(
        self,
        server_id: str,
        backend: ProcessBackend,
        event_dispatcher: EventDispatcher,
        classifier: LineClassifier,
        reconciliation: Optional[ReconciliationSettings] = None,
    ):
        """Initialize server presence tracker.

        Args:
            server_id: Server identifier
            backend: Process backend providing the log stream and command channel
            event_dispatcher: Dispatcher for notifications and roster updates
            classifier: Classifier turning console lines into signals
            reconciliation: Roster listing command and timing
        """
        self.server_id = server_id
        self.backend = backend
        self.event_dispatcher = event_dispatcher
        self.classifier = classifier
        self.reconciliation = reconciliation or settings.reconciliation

        self._reconciler: Optional[RosterReconciler] = None
        self._subscription: Optional[LogSubscription] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def tracking(self) -> bool:
        return self._reconciler is not None

    @property
    def players(self) -> list[str]:
        """Current roster, empty when not tracking."""
        if self._reconciler is None:
            return []
        return self._reconciler.players

    async def start(self) -> None:
        """Start tracking with an empty roster."""
        if self._reconciler is not None:
            logger.warning(f"Already tracking players on server {self.server_id}")
            return

        self._reconciler = RosterReconciler(self.server_id)
        try:
            self._subscription = await self.backend.subscribe_logs(
                self.server_id, self.handle_line
            )
        except Exception:
            self._reconciler = None
            raise

        self._task = asyncio.create_task(self._reconcile_loop())
        logger.info(f"Started tracking players on server {self.server_id}")

        await self.event_dispatcher.dispatch_tracking_started(
            TrackingStartedEvent(server_id=self.server_id)
        )

    async def stop(self) -> None:
        """Stop tracking and discard the roster. Safe to call more than once."""
        if self._reconciler is None:
            return

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._subscription:
            await self._subscription.unsubscribe()
            self._subscription = None

        self._reconciler = None
        logger.info(f"Stopped tracking players on server {self.server_id}")

        await self.event_dispatcher.dispatch_tracking_stopped(
            TrackingStoppedEvent(server_id=self.server_id)
        )

    async def handle_line(self, line: str) -> None:
        """Classify one console line and apply the resulting signal."""
        await self.apply(self.classifier.classify(line))

    async def apply(self, signal: Signal) -> None:
        """Apply one signal and publish what it changed."""
        if self._reconciler is None or isinstance(signal, NoMatch):
            return

        before = self._reconciler.roster
        notification = self._reconciler.feed(signal)
        after = self._reconciler.roster

        if notification:
            await self._notify(notification)

        if after != before:
            await self.event_dispatcher.dispatch_roster_updated(
                RosterUpdatedEvent(server_id=self.server_id, players=list(after))
            )

    async def request_snapshot(self) -> bool:
        """Ask the server to print its player listing.

        Failures to submit the command are logged and otherwise ignored; the
        current roster stays authoritative until a listing line arrives.

        Returns:
            Whether the command was submitted
        """
        try:
            await self.backend.send_command(
                self.server_id, self.reconciliation.command
            )
        except Exception as e:
            logger.warning(f"Failed to request player list from {self.server_id}: {e}")
            return False
        return True

    async def _notify(self, notification: Notification) -> None:
        logger.info(f"[{self.server_id}] {notification.message}")
        match notification.kind:
            case NotificationKind.JOINED:
                await self.event_dispatcher.dispatch_player_joined(
                    PlayerJoinedEvent(
                        server_id=self.server_id,
                        player_name=notification.player_name,
                    )
                )
            case NotificationKind.LEFT:
                await self.event_dispatcher.dispatch_player_left(
                    PlayerLeftEvent(
                        server_id=self.server_id,
                        player_name=notification.player_name,
                    )
                )

    async def _reconcile_loop(self) -> None:
        """One request shortly after start, then one every interval."""
        await asyncio.sleep(self.reconciliation.initial_delay_seconds)
        while True:
            await self.request_snapshot()
            await asyncio.sleep(self.reconciliation.interval_seconds)
