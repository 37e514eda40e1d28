"""Contract of the external process-management collaborator."""

from typing import Protocol

from ..log_monitor.monitor import LineHandler


class LogSubscription(Protocol):
    async def unsubscribe(self) -> None:
        """Stop delivering lines. Calling it again must be a no-op."""
        ...


class ProcessBackend(Protocol):
    """What the engine needs from whatever supervises the server processes."""

    async def subscribe_logs(
        self, server_id: str, on_line: LineHandler
    ) -> LogSubscription:
        """Deliver each console line of the server to on_line, in emission order."""
        ...

    async def send_command(self, server_id: str, command: str) -> None:
        """Submit a console command. Raises if the command could not be submitted."""
        ...
