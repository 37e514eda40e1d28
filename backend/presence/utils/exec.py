"""
Command execution utilities for running external console clients.
"""

import asyncio
import os


async def exec_command(
    command: str,
    *args: str,
    env: dict[str, str] | None = None,
    cwd: str | None = None,
    timeout: float | None = None,
) -> str:
    """
    Execute command with arguments asynchronously.

    Args:
        command: Command to execute
        *args: Command arguments
        env: Extra environment variables, merged over the current environment
        cwd: Working directory
        timeout: Seconds to wait before the process is killed

    Returns:
        Command output as string

    Raises:
        RuntimeError: If command exits with a non-zero status
        TimeoutError: If command does not finish within timeout

    The process is killed and reaped if the wait times out or is cancelled.
    """
    process = await asyncio.create_subprocess_exec(
        command,
        *args,
        env={**os.environ, **env} if env else None,
        cwd=cwd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
    except BaseException:
        # timed out or cancelled, the client must not outlive the caller
        if process.returncode is None:
            process.kill()
            await process.wait()
        raise

    if process.returncode != 0:
        raise RuntimeError(
            f"Failed to exec command: {command}\n{stderr.decode()}\n{stdout.decode()}"
        )
    return stdout.decode()
