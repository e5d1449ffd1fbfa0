"""Predicate variants used by pattern rules.

Each predicate is a frozen value: evaluating it twice on the same subject and
context gives the same answer. ``evaluate`` returns the values captured for
the rule's message template, or ``None`` when the predicate is not satisfied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Pattern

from . import Predicate, ScanContext


@dataclass(frozen=True)
class FileFlag:
    """A named file-wide condition, evaluated once per file and cached on the context."""

    name: str
    pattern: Pattern[str]

    def is_set(self, context: ScanContext) -> bool:
        return context.flag(self.name, self.pattern)


@dataclass(frozen=True)
class WholeFileContains:
    """Satisfied when the file text contains ``pattern`` and, if given, lacks ``absent``."""

    pattern: Pattern[str]
    absent: Optional[Pattern[str]] = None

    def evaluate(self, subject: str, context: ScanContext) -> Optional[Dict[str, object]]:
        match = self.pattern.search(subject)
        if match is None:
            return None
        if self.absent is not None and self.absent.search(subject):
            return None
        return {"match": match.group(0)}


@dataclass(frozen=True)
class LineMatches:
    """Satisfied when a single line matches ``pattern`` and does not match ``exclude``."""

    pattern: Pattern[str]
    exclude: Optional[Pattern[str]] = None

    def evaluate(self, subject: str, context: ScanContext) -> Optional[Dict[str, object]]:
        match = self.pattern.search(subject)
        if match is None:
            return None
        if self.exclude is not None and self.exclude.search(subject):
            return None
        captured: Dict[str, object] = {"match": match.group(0).strip()}
        captured.update({key: value for key, value in match.groupdict().items() if value is not None})
        return captured


@dataclass(frozen=True)
class CountComparison:
    """Satisfied when ``opening`` occurs more often than ``closing`` in the file.

    Occurrences are counted as non-overlapping matches over the whole text.
    """

    opening: Pattern[str]
    closing: Pattern[str]

    def evaluate(self, subject: str, context: ScanContext) -> Optional[Dict[str, object]]:
        opened = len(self.opening.findall(subject))
        closed = len(self.closing.findall(subject))
        if opened <= closed:
            return None
        return {"opened": opened, "closed": closed}


@dataclass(frozen=True)
class ContextGated:
    """Wrap another predicate with structural and file-wide conditions.

    The inner predicate only runs when the tracker depth is at least
    ``min_depth``, the subject does not match ``escape``, and the
    ``unless_file`` flag is not set for the file.
    """

    inner: Predicate
    min_depth: int = 0
    escape: Optional[Pattern[str]] = None
    unless_file: Optional[FileFlag] = None

    def evaluate(self, subject: str, context: ScanContext) -> Optional[Dict[str, object]]:
        if context.depth < self.min_depth:
            return None
        if self.escape is not None and self.escape.search(subject):
            return None
        if self.unless_file is not None and self.unless_file.is_set(context):
            return None
        return self.inner.evaluate(subject, context)


@dataclass(frozen=True)
class PackageMatches:
    """Satisfied by a package reference whose name and version match."""

    name: Pattern[str]
    version: Optional[Pattern[str]] = None

    def evaluate(self, subject: Any, context: ScanContext) -> Optional[Dict[str, object]]:
        if not self.name.match(subject.name):
            return None
        if self.version is not None:
            if not subject.version or not self.version.match(subject.version):
                return None
        return {"package": subject.name, "version": subject.version or "unspecified"}
