"""Line classifier for game server console logs."""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from ..config import ClassifierSettings, settings
from ..logger import logger
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

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
ROSTER_SEPARATOR = re.compile(r",\s*")

FALLBACK_GROUP = "generic"
SNAPSHOT_GROUP = "snapshot"
IDENTITY_GROUP = "identity"


def normalize_name(raw: str) -> str:
    """Strip terminal escapes, surrounding whitespace and trailing periods."""
    cleaned = ANSI_ESCAPE_PATTERN.sub("", raw).strip()
    return cleaned.rstrip(".").strip()


def split_roster(raw: str) -> tuple[str, ...]:
    """Split a comma separated player listing into unique normalized names."""
    names: list[str] = []
    for piece in ROSTER_SEPARATOR.split(raw):
        name = normalize_name(piece)
        if name and name not in names:
            names.append(name)
    return tuple(names)


@dataclass(frozen=True)
class RecognizerRule:
    """One pattern of the recognition table.

    `group` is the server family the rule belongs to, or one of the
    family-agnostic groups (fallback, snapshot, identity).
    """

    group: str
    kind: SignalKind
    pattern: re.Pattern[str]

    def build_signal(self, found: re.Match[str]) -> Signal:
        if self.kind == SignalKind.ROSTER_SNAPSHOT:
            return RosterSnapshot(split_roster(found.group("names") or ""))

        name = normalize_name(found.group("name") or "")
        if not name:
            return NO_MATCH

        match self.kind:
            case SignalKind.JOIN:
                return Join(name)
            case SignalKind.LEAVE:
                return Leave(name)
            case SignalKind.IDENTITY_PROBE:
                uuid = found.groupdict().get("uuid")
                return IdentityProbe(name, uuid=uuid.replace("-", "") if uuid else None)
        return NO_MATCH


@dataclass(frozen=True)
class RuleMatch:
    rule: RecognizerRule
    signal: Signal


def _compile_rule(group: str, kind: SignalKind, pattern: str) -> RecognizerRule:
    compiled = re.compile(pattern)
    required = "names" if kind == SignalKind.ROSTER_SNAPSHOT else "name"
    if required not in compiled.groupindex:
        raise ValueError(
            f"Pattern for {group}/{kind.value} must define a '{required}' group: {pattern}"
        )
    return RecognizerRule(group=group, kind=kind, pattern=compiled)


def build_rule_table(
    classifier_settings: ClassifierSettings,
) -> tuple[RecognizerRule, ...]:
    """Build the ordered recognition table.

    Order is priority: every server family in declaration order, then the
    generic fallback, then roster snapshots, then identity probes. The first
    matching rule decides the signal of a line, so a family match always
    shadows the fallback and every later family.
    """
    rules: list[RecognizerRule] = []

    for family, patterns in classifier_settings.families.items():
        rules.append(_compile_rule(family, SignalKind.JOIN, patterns.join))
        rules.append(_compile_rule(family, SignalKind.LEAVE, patterns.leave))

    fallback = classifier_settings.fallback
    rules.append(_compile_rule(FALLBACK_GROUP, SignalKind.JOIN, fallback.join))
    rules.append(_compile_rule(FALLBACK_GROUP, SignalKind.LEAVE, fallback.leave))

    for pattern in classifier_settings.snapshot_patterns:
        rules.append(_compile_rule(SNAPSHOT_GROUP, SignalKind.ROSTER_SNAPSHOT, pattern))

    for pattern in classifier_settings.identity_patterns:
        rules.append(_compile_rule(IDENTITY_GROUP, SignalKind.IDENTITY_PROBE, pattern))

    return tuple(rules)


class LineClassifier:
    """Maps one raw log line to exactly one signal.

    Stateless; unrecognized lines classify to NoMatch without logging.
    """

    def __init__(
        self,
        classifier_settings: Optional[ClassifierSettings] = None,
        rules: Optional[Iterable[RecognizerRule]] = None,
    ):
        """Initialize the classifier.

        Args:
            classifier_settings: Pattern configuration, defaults to the global settings
            rules: Prebuilt rule table, takes precedence over classifier_settings
        """
        if rules is not None:
            self.rules = tuple(rules)
        else:
            self.rules = build_rule_table(classifier_settings or settings.classifier)

    def match(self, line: str) -> Optional[RuleMatch]:
        """Return the first rule producing a signal for the line, if any."""
        for rule in self.rules:
            found = rule.pattern.search(line)
            if not found:
                continue
            signal = rule.build_signal(found)
            if isinstance(signal, NoMatch):
                continue
            logger.debug(f"Classified line as {signal} via {rule.group}/{rule.kind.value}")
            return RuleMatch(rule=rule, signal=signal)
        return None

    def classify(self, line: str) -> Signal:
        result = self.match(line)
        return result.signal if result else NO_MATCH
