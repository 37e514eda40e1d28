"""Signals recognized in server log lines."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class SignalKind(str, Enum):
    JOIN = "join"
    LEAVE = "leave"
    ROSTER_SNAPSHOT = "roster_snapshot"
    IDENTITY_PROBE = "identity_probe"


@dataclass(frozen=True)
class Join:
    """A player connection was observed."""

    name: str


@dataclass(frozen=True)
class Leave:
    """A player disconnection was observed."""

    name: str


@dataclass(frozen=True)
class RosterSnapshot:
    """An authoritative full listing. An empty tuple means nobody is online."""

    names: tuple[str, ...] = ()


@dataclass(frozen=True)
class IdentityProbe:
    """A player's unique id was resolved, usually right before the join line."""

    name: str
    uuid: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True)
class NoMatch:
    """The line carried no recognizable event."""


NO_MATCH = NoMatch()

Signal = Union[Join, Leave, RosterSnapshot, IdentityProbe, NoMatch]
