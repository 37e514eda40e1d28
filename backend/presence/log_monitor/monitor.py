"""Log file tailing using watchfiles."""

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Optional

import aiofiles
from aiofiles import os as aioos
from watchfiles import Change, awatch

from ..logger import log_exception, logger

LineHandler = Callable[[str], Awaitable[None]]


class LogFileTail:
    """Follows one server's log file and hands every new line to a handler.

    Lines are delivered one at a time and awaited, so the handler sees them
    in the order they were written. Reading starts at the current end of the
    file; a truncated or recreated file is read again from the beginning.
    """

    def __init__(self, server_id: str, log_path: Path, on_line: LineHandler):
        """Initialize log file tail.

        Args:
            server_id: Server identifier, used for logging
            log_path: Path to the log file (typically logs/latest.log)
            on_line: Coroutine function called with each new line
        """
        self.server_id = server_id
        self.log_path = log_path
        self.on_line = on_line

        self._file_pointer = 0
        # trailing text of a line that is still being written
        self._partial_line = ""
        self._task: Optional[asyncio.Task] = None
        self._stop_event = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start following the log file."""
        if self._task is not None:
            logger.warning(f"Already following logs for server {self.server_id}")
            return

        self._stop_event.clear()
        self._partial_line = ""
        if await aioos.path.exists(self.log_path):
            self._file_pointer = await aioos.path.getsize(self.log_path)
            logger.info(
                f"Log file found for {self.server_id}, size: {self._file_pointer}"
            )
        else:
            self._file_pointer = 0
            logger.info(
                f"Log file not found for {self.server_id}, will start from beginning when created"
            )

        self._task = asyncio.create_task(self._watch_loop())
        logger.info(f"Started following logs for server {self.server_id}")

    async def unsubscribe(self) -> None:
        """Stop following the log file. Safe to call more than once."""
        if self._task is None:
            return

        task, self._task = self._task, None
        self._stop_event.set()
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

        logger.info(f"Stopped following logs for server {self.server_id}")

    async def _watch_loop(self) -> None:
        # wait for the log file to be created
        while not await aioos.path.exists(self.log_path):
            if self._stop_event.is_set():
                return
            await asyncio.sleep(1)

        try:
            async for changes in awatch(
                self.log_path.parent, stop_event=self._stop_event
            ):
                for change_type, changed_path in changes:
                    if Path(changed_path) != self.log_path:
                        continue

                    if change_type == Change.deleted:
                        logger.info(f"Log file deleted for {self.server_id}")
                        continue

                    if change_type == Change.added:
                        logger.info(f"Log file created for {self.server_id}")
                        self._file_pointer = 0
                        self._partial_line = ""

                    await self.process_changes()

        except asyncio.CancelledError:
            logger.debug(f"Watch loop cancelled for {self.server_id}")
            raise
        except Exception as e:
            logger.error(
                f"Error in watch loop for {self.server_id}: {e}", exc_info=True
            )

    @log_exception("Error processing log changes for {self.server_id}")
    async def process_changes(self) -> None:
        """Read everything appended since the last read and deliver it."""
        if not await aioos.path.exists(self.log_path):
            return

        current_size = await aioos.path.getsize(self.log_path)

        if current_size < self._file_pointer:
            logger.info(
                f"Log file truncated for {self.server_id}, reading from beginning"
            )
            self._file_pointer = 0
            self._partial_line = ""

        if current_size <= self._file_pointer:
            return

        async with aiofiles.open(
            self.log_path, "r", encoding="utf-8", errors="ignore"
        ) as f:
            await f.seek(self._file_pointer)
            new_content = await f.read()
            self._file_pointer = await f.tell()

        lines = (self._partial_line + new_content).split("\n")
        self._partial_line = lines.pop()

        for line in lines:
            line = line.strip()
            if line:
                await self.on_line(line)
