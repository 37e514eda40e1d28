"""Process backend for servers running on this host."""

from typing import Dict

from ..config import ServerSettings
from ..log_monitor.monitor import LineHandler, LogFileTail
from ..logger import logger
from ..utils.exec import exec_command


class LocalServerBackend:
    """Reads console output from log files and injects commands through a CLI client.

    Each server is described by its log file and the argv prefix of a console
    client (for example `rcon-cli` or `docker exec mc rcon-cli`); the command
    text is appended as the last argument.
    """

    def __init__(self, servers: Dict[str, ServerSettings]):
        self.servers = servers

    def _get_server(self, server_id: str) -> ServerSettings:
        try:
            return self.servers[server_id]
        except KeyError:
            raise KeyError(f"Server '{server_id}' is not configured") from None

    async def subscribe_logs(self, server_id: str, on_line: LineHandler) -> LogFileTail:
        server = self._get_server(server_id)
        tail = LogFileTail(server_id, server.log_path, on_line)
        await tail.start()
        return tail

    async def send_command(self, server_id: str, command: str) -> None:
        server = self._get_server(server_id)
        if not server.command_exec:
            raise RuntimeError(f"No console client configured for server {server_id}")

        program, *args = server.command_exec
        output = await exec_command(
            program, *args, command, timeout=server.command_timeout_seconds
        )
        logger.debug(f"Sent '{command}' to {server_id}: {output.strip()}")
