"""Player presence tracking across servers."""

from typing import Dict, Optional

from ..config import ReconciliationSettings, ServerSettings, settings
from ..events import event_dispatcher as default_event_dispatcher
from ..events.dispatcher import EventDispatcher
from ..log_monitor.parser import LineClassifier
from ..logger import logger
from ..process import LocalServerBackend
from ..process.types import ProcessBackend
from .tracker import ServerPresenceTracker


class PresenceManager:
    """Owns one ServerPresenceTracker per observed server.

    Trackers share nothing but the classifier, which is stateless, so
    servers are tracked fully independently of each other.
    """

    def __init__(
        self,
        backend: ProcessBackend,
        event_dispatcher: EventDispatcher,
        classifier: Optional[LineClassifier] = None,
        reconciliation: Optional[ReconciliationSettings] = None,
    ):
        """Initialize presence manager.

        Args:
            backend: Process backend shared by all trackers
            event_dispatcher: Dispatcher for notifications and roster updates
            classifier: Line classifier, built from settings when omitted
            reconciliation: Roster listing command and timing
        """
        self.backend = backend
        self.event_dispatcher = event_dispatcher
        self.classifier = classifier or LineClassifier()
        self.reconciliation = reconciliation or settings.reconciliation

        self._trackers: Dict[str, ServerPresenceTracker] = {}

    def tracked_servers(self) -> list[str]:
        return list(self._trackers)

    def is_tracking(self, server_id: str) -> bool:
        return server_id in self._trackers

    def get_tracker(self, server_id: str) -> ServerPresenceTracker:
        """Get the tracker of a server.

        Raises:
            KeyError: If the server is not being tracked
        """
        try:
            return self._trackers[server_id]
        except KeyError:
            raise KeyError(f"Server '{server_id}' is not being tracked") from None

    def get_players(self, server_id: str) -> list[str]:
        return self.get_tracker(server_id).players

    async def request_snapshot(self, server_id: str) -> bool:
        return await self.get_tracker(server_id).request_snapshot()

    async def start_tracking(self, server_id: str) -> None:
        if server_id in self._trackers:
            logger.warning(f"Already tracking players on server {server_id}")
            return

        tracker = ServerPresenceTracker(
            server_id=server_id,
            backend=self.backend,
            event_dispatcher=self.event_dispatcher,
            classifier=self.classifier,
            reconciliation=self.reconciliation,
        )
        await tracker.start()
        self._trackers[server_id] = tracker

    async def stop_tracking(self, server_id: str) -> None:
        if server_id not in self._trackers:
            logger.warning(f"Not tracking players on server {server_id}")
            return

        tracker = self._trackers.pop(server_id)
        await tracker.stop()

    async def stop_all(self) -> None:
        for server_id in list(self._trackers):
            await self.stop_tracking(server_id)

        logger.info("Stopped all player tracking")

    async def start_configured(
        self, servers: Optional[Dict[str, ServerSettings]] = None
    ) -> None:
        """Start tracking every configured server marked for automatic tracking."""
        servers = settings.servers if servers is None else servers
        for server_id, server in servers.items():
            if not server.auto_track:
                continue
            try:
                await self.start_tracking(server_id)
            except Exception as e:
                logger.error(
                    f"Error starting player tracking for {server_id}: {e}",
                    exc_info=True,
                )


presence_manager = PresenceManager(
    backend=LocalServerBackend(settings.servers),
    event_dispatcher=default_event_dispatcher,
)
