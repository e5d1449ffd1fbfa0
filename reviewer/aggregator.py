"""Merge raw matches from every scanned file into deduplicated issues."""

from __future__ import annotations

import threading
from typing import Iterable, List, Optional, Set, Tuple

from loguru import logger

from .engine import RawMatch
from .result import Issue, ScanFailure, ScanResult
from .rules import RuleRegistry

IssueKey = Tuple[str, str, Optional[int], Optional[int]]


class IssueAggregator:
    """Single merge point for per-file scans.

    ``add`` may be called from several worker threads. Issues keep the order
    in which their first match arrived; a later match with the same
    ``(file, rule, line)`` key is dropped. Package matches also key on the
    reference position so references declared on one line stay distinct.
    """

    def __init__(self, registry: RuleRegistry) -> None:
        self._registry = registry
        self._lock = threading.Lock()
        self._issues: List[Issue] = []
        self._seen: Set[IssueKey] = set()
        self._failures: List[ScanFailure] = []
        self._scanned: List[str] = []

    def add(self, match: RawMatch) -> None:
        rule = self._registry.get(match.rule_id)
        key = (match.file, match.rule_id, match.line, match.position)
        with self._lock:
            if key in self._seen:
                return
            self._seen.add(key)
            self._issues.append(
                Issue(
                    file=match.file,
                    line=match.line,
                    severity=rule.severity,
                    concern=rule.concern.value,
                    type=rule.title,
                    message=rule.render_message(match.captured),
                    rule=rule.id,
                )
            )

    def extend(self, matches: Iterable[RawMatch]) -> None:
        for match in matches:
            self.add(match)

    def mark_scanned(self, path: str) -> None:
        with self._lock:
            self._scanned.append(path)

    def record_failure(self, path: str, reason: str) -> None:
        logger.warning("Skipping {}: {}", path, reason)
        with self._lock:
            self._failures.append(ScanFailure(path=path, reason=reason))

    def finalize(self) -> List[Issue]:
        with self._lock:
            return list(self._issues)

    def result(self) -> ScanResult:
        with self._lock:
            return ScanResult(
                issues=list(self._issues),
                failures=list(self._failures),
                files_scanned=len(self._scanned),
            )
