"""Roster state transitions for one tracked server.

The transition (apply_signal) and the notification decision
(notification_for) are pure functions; RosterReconciler only holds the
current state and chains the two.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from ..log_monitor.signals import (
    IdentityProbe,
    Join,
    Leave,
    NoMatch,
    RosterSnapshot,
    Signal,
)

# Ordered and free of duplicates
Roster = tuple[str, ...]


class NotificationKind(str, Enum):
    JOINED = "joined"
    LEFT = "left"


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    player_name: str

    @property
    def message(self) -> str:
        return f"{self.player_name} {self.kind.value}"


@dataclass(frozen=True)
class RosterState:
    """Roster plus the members whose join has not been announced yet.

    A member seeded by an identity probe is present but unannounced until
    its join line arrives.
    """

    players: Roster = ()
    unannounced: frozenset[str] = field(default_factory=frozenset)


EMPTY_ROSTER = RosterState()


def _dedupe(names: Iterable[str]) -> Roster:
    return tuple(dict.fromkeys(names))


def apply_signal(state: RosterState, signal: Signal) -> RosterState:
    """Return the state after applying one signal."""
    match signal:
        case Join(name=name):
            if name in state.players:
                if name not in state.unannounced:
                    return state
                return RosterState(state.players, state.unannounced - {name})
            return RosterState(state.players + (name,), state.unannounced)
        case IdentityProbe(name=name):
            if name in state.players:
                return state
            return RosterState(state.players + (name,), state.unannounced | {name})
        case Leave(name=name):
            if name not in state.players:
                return state
            return RosterState(
                tuple(player for player in state.players if player != name),
                state.unannounced - {name},
            )
        case RosterSnapshot(names=names):
            players = _dedupe(names)
            return RosterState(players, state.unannounced & frozenset(players))
        case NoMatch():
            return state
    return state


def notification_for(
    before: RosterState, after: RosterState, signal: Signal
) -> Optional[Notification]:
    """Decide which notification, if any, a transition produces.

    A join is announced once per stay: when it adds the player, or when the
    player was only seeded by an identity probe. A leave is announced when it
    removes the player. Identity probes and snapshots are always silent.
    """
    match signal:
        case Join(name=name) if name in after.players and (
            name not in before.players or name in before.unannounced
        ):
            return Notification(NotificationKind.JOINED, name)
        case Leave(name=name) if name in before.players and name not in after.players:
            return Notification(NotificationKind.LEFT, name)
    return None


class RosterReconciler:
    """Owns the roster of one server and applies signals in arrival order."""

    def __init__(self, server_id: str):
        self.server_id = server_id
        self._state = EMPTY_ROSTER

    @property
    def state(self) -> RosterState:
        return self._state

    @property
    def roster(self) -> Roster:
        return self._state.players

    @property
    def players(self) -> list[str]:
        return list(self._state.players)

    def feed(self, signal: Signal) -> Optional[Notification]:
        before = self._state
        self._state = apply_signal(before, signal)
        return notification_for(before, self._state, signal)

    def clear(self) -> None:
        self._state = EMPTY_ROSTER
