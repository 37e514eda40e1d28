"""
External process-management collaborator: log stream and command channel.
"""

from .local import LocalServerBackend
from .types import LogSubscription, ProcessBackend

__all__ = [
    "LocalServerBackend",
    "LogSubscription",
    "ProcessBackend",
]
