"""Detect database round-trips inside loops and blocking waits on tasks."""

from __future__ import annotations

import re
from typing import List

from reviewer.severity import Severity

from . import Concern, PatternRule, Scope
from .predicates import ContextGated, LineMatches, WholeFileContains

QUERY_CALL = re.compile(r"await\s+.*\.(?P<call>Get|Find|Fetch|Query|ToListAsync)")
PARALLEL_ESCAPE = re.compile(r"Task\.WhenAll")
BLOCKING_WAIT = re.compile(r"\.Result\b|\.Wait\(\)")

RULES = (
    PatternRule(
        id="performance.query-in-loop",
        concern=Concern.PERFORMANCE_ASYNC,
        severity=Severity.HIGH,
        scope=Scope.PER_LINE,
        predicate=ContextGated(inner=LineMatches(pattern=QUERY_CALL), min_depth=1, escape=PARALLEL_ESCAPE),
        title="Performance / N+1 Problem",
        message=(
            "Database call detected inside a loop. This causes the N+1 problem. "
            "Fetch all data in a single query before the loop."
        ),
    ),
    PatternRule(
        id="performance.sync-over-async",
        concern=Concern.PERFORMANCE_ASYNC,
        severity=Severity.HIGH,
        scope=Scope.WHOLE_FILE,
        predicate=WholeFileContains(pattern=BLOCKING_WAIT),
        title="Async / Sync-over-Async",
        message="Blocking wait on Task detected (.Result or .Wait()). This can cause deadlocks. Use 'await' instead.",
    ),
)


def get_rules() -> List[PatternRule]:
    return list(RULES)
