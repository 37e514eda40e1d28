"""Shared fixtures for presence tracking tests."""

from typing import Callable, List

import pytest

from presence.config import ReconciliationSettings
from presence.events.dispatcher import EventDispatcher


class FakeSubscription:
    def __init__(self):
        self.unsubscribe_calls = 0

    async def unsubscribe(self) -> None:
        self.unsubscribe_calls += 1


class FakeBackend:
    """In-memory process backend recording subscriptions and commands."""

    def __init__(self, fail_commands: bool = False, broken_servers=()):
        self.fail_commands = fail_commands
        self.broken_servers = set(broken_servers)
        self.handlers = {}
        self.subscriptions = {}
        self.commands: List[tuple[str, str]] = []

    async def subscribe_logs(self, server_id, on_line):
        if server_id in self.broken_servers:
            raise FileNotFoundError(f"no log stream for {server_id}")
        self.handlers[server_id] = on_line
        self.subscriptions[server_id] = FakeSubscription()
        return self.subscriptions[server_id]

    async def send_command(self, server_id, command):
        self.commands.append((server_id, command))
        if self.fail_commands:
            raise RuntimeError("console client not reachable")

    async def emit(self, server_id, *lines):
        """Deliver lines the way a log subscription does: one at a time, in order."""
        for line in lines:
            await self.handlers[server_id](line)


@pytest.fixture
def make_backend() -> Callable[..., FakeBackend]:
    return FakeBackend


@pytest.fixture
def backend(make_backend):
    return make_backend()


@pytest.fixture
def dispatcher():
    return EventDispatcher()


@pytest.fixture
def recorded(dispatcher):
    """Record every event published on the dispatcher, in order."""
    events = []

    async def record(event):
        events.append(event)

    dispatcher.on_tracking_started(record)
    dispatcher.on_tracking_stopped(record)
    dispatcher.on_player_joined(record)
    dispatcher.on_player_left(record)
    dispatcher.on_roster_updated(record)
    return events


@pytest.fixture
def slow_reconciliation():
    """Reconciliation timing long enough to never fire during a test."""
    return ReconciliationSettings(initial_delay_seconds=3600, interval_seconds=3600)
