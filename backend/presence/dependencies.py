from .players import PresenceManager, presence_manager


def get_presence_manager() -> PresenceManager:
    """Presence manager dependency, overridable in tests."""
    return presence_manager
