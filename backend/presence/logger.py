import functools
import gzip
import inspect
import logging
import logging.handlers
import os
import shutil
import sys
from pathlib import Path
from typing import Callable

from .config import settings

logger = logging.getLogger("presence")
logger.setLevel(logging.DEBUG)
formatter = logging.Formatter(
    "%(asctime)s %(levelname)s [%(module)s:%(funcName)s:%(lineno)d] %(message)s"
)

logs_dir = Path(settings.logs_dir)
logs_dir.mkdir(parents=True, exist_ok=True)


def rotator(source: str, dest: str) -> None:
    """Compress a rotated log file and drop the uncompressed copy."""
    with open(source, "rb") as f_in, gzip.open(dest + ".gz", "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)
    os.remove(source)


log_file_handler = logging.handlers.TimedRotatingFileHandler(
    logs_dir / "presence.log", when="midnight", encoding="utf-8"
)
log_file_handler.setFormatter(formatter)
log_file_handler.rotator = rotator
logger.addHandler(log_file_handler)

log_stream_handler = logging.StreamHandler(sys.stdout)
log_stream_handler.setFormatter(formatter)
logger.addHandler(log_stream_handler)


def log_exception[**P, R](
    prefix: str = "",
    default_return: R | None = None,
    level: int = logging.ERROR,
    exc_info: bool = True,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator that logs and swallows any exception raised by the wrapped call.

    Works for both sync and async callables. The prefix may reference the
    call's arguments by name, e.g. "Sending {command} to {self.server_id}".

    Args:
        prefix: Message prefix, formatted with the bound call arguments
        default_return: Value returned when an exception was swallowed
        level: Log level used for the failure record
        exc_info: Whether to attach the traceback to the record
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        sig = inspect.signature(func)
        func_name = func.__qualname__

        def bind_arguments(args: tuple, kwargs: dict) -> tuple[dict, str]:
            try:
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
            except TypeError as e:
                logger.warning(
                    f"Failed to bind arguments for function {func_name}: {e}",
                    stacklevel=3,
                )
                return {}, ""
            shown = ", ".join(
                f"{k}={v!r}" for k, v in bound.arguments.items() if k != "self"
            )
            return bound.arguments, f"[{shown}] " if shown else ""

        def render_prefix(arguments: dict) -> str:
            if not prefix:
                return ""
            if "{" in prefix and "}" in prefix:
                try:
                    return f"{prefix.format_map(arguments)}: "
                except (AttributeError, KeyError, IndexError, ValueError) as e:
                    logger.warning(
                        f"Failed to format prefix '{prefix}' with arguments: {e}",
                        stacklevel=3,
                    )
            return f"{prefix}: "

        def report(args: tuple, kwargs: dict, e: Exception) -> None:
            arguments, shown = bind_arguments(args, kwargs)
            logger.log(
                level,
                f"{shown}{render_prefix(arguments)}{type(e).__name__}: {e}",
                exc_info=exc_info,
                stacklevel=3,
            )

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    report(args, kwargs, e)
                    return default_return  # type: ignore[return-value]

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                report(args, kwargs, e)
                return default_return  # type: ignore[return-value]

        return sync_wrapper  # type: ignore[return-value]

    return decorator
