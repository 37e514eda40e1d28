"""
Log monitoring for the presence engine.

Classifies server console lines into signals and follows log files.
"""

from .monitor import LineHandler, LogFileTail
from .parser import (
    LineClassifier,
    RecognizerRule,
    RuleMatch,
    build_rule_table,
    normalize_name,
    split_roster,
)
from .signals import (
    NO_MATCH,
    IdentityProbe,
    Join,
    Leave,
    NoMatch,
    RosterSnapshot,
    Signal,
    SignalKind,
)

__all__ = [
    "LineClassifier",
    "LineHandler",
    "LogFileTail",
    "RecognizerRule",
    "RuleMatch",
    "build_rule_table",
    "normalize_name",
    "split_roster",
    "NO_MATCH",
    "IdentityProbe",
    "Join",
    "Leave",
    "NoMatch",
    "RosterSnapshot",
    "Signal",
    "SignalKind",
]
