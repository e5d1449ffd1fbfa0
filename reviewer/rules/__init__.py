"""Rule registry for the reviewer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, Iterable, Iterator, List, Optional, Pattern, Protocol, Sequence, Tuple

from reviewer.severity import Severity
from reviewer.tracker import StructuralTracker


class Concern(str, Enum):
    """Category a rule belongs to."""

    RESOURCE_LIFETIME = "resource-lifetime"
    ARCHITECTURE = "architecture"
    PERFORMANCE_ASYNC = "performance/async"
    ERROR_HANDLING = "error-handling"
    DEPENDENCY_COMPATIBILITY = "dependency-compatibility"


class Scope(str, Enum):
    """What a rule's predicate is evaluated against."""

    WHOLE_FILE = "whole-file"
    PER_LINE = "per-line"
    PER_PACKAGE = "per-package"


class Predicate(Protocol):
    """Protocol implemented by all rule predicates."""

    def evaluate(self, subject: Any, context: "ScanContext") -> Optional[Dict[str, object]]:
        """Return captured values when satisfied, otherwise ``None``."""


@dataclass
class ScanContext:
    """Per-file state shared by the rules evaluated against one file."""

    filename: str
    text: str
    lines: List[str] = field(init=False)
    tracker: StructuralTracker = field(default_factory=StructuralTracker)
    flags: Dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.lines = self.text.split("\n")

    @property
    def depth(self) -> int:
        return self.tracker.depth

    def flag(self, name: str, pattern: Pattern[str]) -> bool:
        """Return whether ``pattern`` occurs anywhere in the file, computed once per name."""

        if name not in self.flags:
            self.flags[name] = pattern.search(self.text) is not None
        return self.flags[name]


@dataclass(frozen=True)
class PatternRule:
    """A declarative predicate plus the metadata attached to its issues."""

    id: str
    concern: Concern
    severity: Severity
    scope: Scope
    predicate: Predicate
    title: str
    message: str
    applies_to: Optional[Pattern[str]] = None

    def applies(self, filename: str) -> bool:
        return self.applies_to is None or self.applies_to.search(PurePath(filename).name) is not None

    def render_message(self, captured: Optional[Dict[str, object]] = None) -> str:
        if not captured:
            return self.message
        return self.message.format(**captured)


class RuleRegistry:
    """Read-only, ordered collection of rules shared across scans."""

    def __init__(self, rules: Iterable[PatternRule]) -> None:
        ordered: List[PatternRule] = []
        index: Dict[str, PatternRule] = {}
        for rule in rules:
            if rule.id in index:
                raise ValueError(f"Duplicate rule id: {rule.id}")
            ordered.append(rule)
            index[rule.id] = rule
        self._rules: Tuple[PatternRule, ...] = tuple(ordered)
        self._index = index

    def __iter__(self) -> Iterator[PatternRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._index

    def get(self, rule_id: str) -> PatternRule:
        return self._index[rule_id]

    def rules_for(self, concern: Concern) -> List[PatternRule]:
        return [rule for rule in self._rules if rule.concern == concern]

    def rules_for_concerns(self, concerns: Sequence[Concern]) -> List[PatternRule]:
        wanted = set(concerns)
        return [rule for rule in self._rules if rule.concern in wanted]

    def without(self, rule_ids: Iterable[str]) -> "RuleRegistry":
        """Return a new registry that omits ``rule_ids``."""

        excluded = set(rule_ids)
        return RuleRegistry(rule for rule in self._rules if rule.id not in excluded)


def default_rules() -> List[PatternRule]:
    from .architecture import get_rules as architecture_rules
    from .dependencies import get_rules as dependency_rules
    from .error_handling import get_rules as error_handling_rules
    from .performance import get_rules as performance_rules
    from .resource_lifetime import get_rules as resource_lifetime_rules

    rules: List[PatternRule] = []
    rules.extend(resource_lifetime_rules())
    rules.extend(performance_rules())
    rules.extend(error_handling_rules())
    rules.extend(architecture_rules())
    rules.extend(dependency_rules())
    return rules


_DEFAULT_REGISTRY: Optional[RuleRegistry] = None


def default_registry() -> RuleRegistry:
    """Return the process-wide registry built from the bundled rule set."""

    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = RuleRegistry(default_rules())
    return _DEFAULT_REGISTRY
