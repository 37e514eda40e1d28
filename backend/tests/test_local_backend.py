"""Tests for LocalServerBackend and console command execution."""

import asyncio
import sys
from unittest.mock import AsyncMock, patch

import pytest

from presence.config import ServerSettings
from presence.log_monitor.monitor import LogFileTail
from presence.process.local import LocalServerBackend
from presence.utils.exec import exec_command


@pytest.fixture
def servers(tmp_path):
    return {
        "survival": ServerSettings(
            log_path=tmp_path / "survival.log",
            command_exec=["docker", "exec", "mc", "rcon-cli"],
            command_timeout_seconds=5,
        ),
        "readonly": ServerSettings(log_path=tmp_path / "readonly.log", command_exec=[]),
    }


@pytest.fixture
def backend(servers):
    return LocalServerBackend(servers)


class TestSendCommand:
    @pytest.mark.asyncio
    async def test_command_is_appended_to_client_argv(self, backend):
        with patch(
            "presence.process.local.exec_command", new_callable=AsyncMock
        ) as mock_exec:
            mock_exec.return_value = "There are 0 of a max of 20 players online:\n"

            await backend.send_command("survival", "list")

        mock_exec.assert_awaited_once_with(
            "docker", "exec", "mc", "rcon-cli", "list", timeout=5
        )

    @pytest.mark.asyncio
    async def test_client_failure_propagates(self, backend):
        with patch(
            "presence.process.local.exec_command", new_callable=AsyncMock
        ) as mock_exec:
            mock_exec.side_effect = RuntimeError("Failed to exec command: docker")

            with pytest.raises(RuntimeError, match="Failed to exec command"):
                await backend.send_command("survival", "list")

    @pytest.mark.asyncio
    async def test_no_console_client(self, backend):
        with pytest.raises(RuntimeError, match="No console client configured"):
            await backend.send_command("readonly", "list")

    @pytest.mark.asyncio
    async def test_unknown_server(self, backend):
        with pytest.raises(KeyError, match="not configured"):
            await backend.send_command("missing", "list")


class TestSubscribeLogs:
    @pytest.mark.asyncio
    async def test_returns_running_tail(self, backend, servers):
        servers["survival"].log_path.write_text("")

        async def on_line(line: str) -> None:
            pass

        subscription = await backend.subscribe_logs("survival", on_line)
        try:
            assert isinstance(subscription, LogFileTail)
            assert subscription.running
            assert subscription.log_path == servers["survival"].log_path
        finally:
            await subscription.unsubscribe()

    @pytest.mark.asyncio
    async def test_unknown_server(self, backend):
        async def on_line(line: str) -> None:
            pass

        with pytest.raises(KeyError):
            await backend.subscribe_logs("missing", on_line)


class TestExecCommand:
    @pytest.mark.asyncio
    async def test_returns_stdout(self):
        output = await exec_command(sys.executable, "-c", "print('Alice, Bob')")

        assert output.strip() == "Alice, Bob"

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises(self):
        with pytest.raises(RuntimeError, match="Failed to exec command"):
            await exec_command(
                sys.executable, "-c", "import sys; sys.stderr.write('refused'); sys.exit(2)"
            )

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self):
        with pytest.raises(TimeoutError):
            await exec_command(
                sys.executable, "-c", "import time; time.sleep(30)", timeout=0.2
            )

    @pytest.mark.asyncio
    async def test_extra_env_is_merged(self):
        output = await exec_command(
            sys.executable,
            "-c",
            "import os; print(os.environ['RCON_PASSWORD'], 'PATH' in os.environ)",
            env={"RCON_PASSWORD": "secret"},
        )

        assert output.split() == ["secret", "True"]

    @pytest.mark.asyncio
    async def test_cancel_kills_process(self):
        started = []
        real_create = asyncio.create_subprocess_exec

        async def record_process(*args, **kwargs):
            process = await real_create(*args, **kwargs)
            started.append(process)
            return process

        with patch(
            "presence.utils.exec.asyncio.create_subprocess_exec", record_process
        ):
            task = asyncio.create_task(exec_command("sh", "-c", "sleep 30"))
            while not started:
                await asyncio.sleep(0.01)
            task.cancel()

            with pytest.raises(asyncio.CancelledError):
                await task

        assert started[0].returncode is not None
