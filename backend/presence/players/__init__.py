"""
Player presence tracking.

Derives the set of connected players of each server from its console output.
"""

from .manager import PresenceManager, presence_manager
from .roster import (
    EMPTY_ROSTER,
    Notification,
    NotificationKind,
    Roster,
    RosterReconciler,
    RosterState,
    apply_signal,
    notification_for,
)
from .tracker import ServerPresenceTracker

__all__ = [
    "PresenceManager",
    "presence_manager",
    "ServerPresenceTracker",
    "RosterReconciler",
    "Roster",
    "RosterState",
    "EMPTY_ROSTER",
    "Notification",
    "NotificationKind",
    "apply_signal",
    "notification_for",
]
