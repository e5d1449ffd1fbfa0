"""Detect object-lifetime hazards: leaked subscriptions, undisposed resources, static state."""

from __future__ import annotations

import re
from typing import List

from reviewer.severity import Severity

from . import Concern, PatternRule, Scope
from .predicates import ContextGated, CountComparison, FileFlag, LineMatches, WholeFileContains

EVENT_SUBSCRIPTION = re.compile(r"\+=")
EVENT_UNSUBSCRIPTION = re.compile(r"-=")
DISPOSABLE_CONTRACT = re.compile(r":.*IDisposable")
DISPOSE_METHOD = re.compile(r"Dispose\(\)")
STATIC_MUTABLE_FIELD = re.compile(
    r"\bstatic\s+(?!readonly\b|const\b)[\w.<>\[\]?]+(?:,\s*[\w.<>\[\]?]+)*\s+\w+\s*=(?![=>])"
)
TIMER_CREATION = re.compile(r"new\s+Timer|new\s+System\.Timers\.Timer")
ASYNC_VOID = re.compile(r"async\s+void")
UNMANAGED_HANDLE = re.compile(r"\b(?P<handle>IntPtr|HandleRef)\b")
HTTP_CLIENT_CREATION = re.compile(r"new\s+HttpClient\s*\(")
STATIC_DECLARATION = re.compile(r"\bstatic\b")

DISPOSES_ANYTHING = FileFlag("dispose-call", re.compile(r"Dispose"))
WRAPS_HANDLES = FileFlag("safe-handle", re.compile(r"SafeHandle|Dispose"))

RULES = (
    PatternRule(
        id="resource.event-subscription-imbalance",
        concern=Concern.RESOURCE_LIFETIME,
        severity=Severity.MEDIUM,
        scope=Scope.WHOLE_FILE,
        predicate=CountComparison(opening=EVENT_SUBSCRIPTION, closing=EVENT_UNSUBSCRIPTION),
        title="Event Handler Leak",
        message=(
            "Found {opened} event subscriptions (+=) but only {closed} unsubscriptions (-=). "
            "Ensure you unsubscribe from events to prevent memory leaks, especially in long-lived objects."
        ),
    ),
    PatternRule(
        id="resource.missing-dispose",
        concern=Concern.RESOURCE_LIFETIME,
        severity=Severity.HIGH,
        scope=Scope.WHOLE_FILE,
        predicate=WholeFileContains(pattern=DISPOSABLE_CONTRACT, absent=DISPOSE_METHOD),
        title="Missing Dispose",
        message="Class implements IDisposable but does not appear to have a Dispose() method.",
    ),
    PatternRule(
        id="resource.static-mutable-field",
        concern=Concern.RESOURCE_LIFETIME,
        severity=Severity.MEDIUM,
        scope=Scope.PER_LINE,
        predicate=LineMatches(pattern=STATIC_MUTABLE_FIELD),
        title="Static State",
        message=(
            "Static mutable field detected. Static fields persist for the lifetime of the application "
            "and can hold references to large objects, causing leaks."
        ),
    ),
    PatternRule(
        id="resource.undisposed-timer",
        concern=Concern.RESOURCE_LIFETIME,
        severity=Severity.HIGH,
        scope=Scope.PER_LINE,
        predicate=ContextGated(inner=LineMatches(pattern=TIMER_CREATION), unless_file=DISPOSES_ANYTHING),
        title="Unmanaged Resource",
        message="Timer created. Timers must be disposed to stop them from firing and holding references.",
    ),
    PatternRule(
        id="resource.async-void",
        concern=Concern.RESOURCE_LIFETIME,
        severity=Severity.HIGH,
        scope=Scope.PER_LINE,
        predicate=LineMatches(pattern=ASYNC_VOID),
        title="Async Void",
        message=(
            "Avoid 'async void'. Exceptions in async void methods crash the process and they are "
            "difficult to track. Use 'async Task' instead."
        ),
    ),
    PatternRule(
        id="resource.unmanaged-handle",
        concern=Concern.RESOURCE_LIFETIME,
        severity=Severity.MEDIUM,
        scope=Scope.PER_LINE,
        predicate=ContextGated(inner=LineMatches(pattern=UNMANAGED_HANDLE), unless_file=WRAPS_HANDLES),
        title="Unmanaged Resource",
        message=(
            "Raw {handle} used without a SafeHandle or Dispose() in this file. "
            "Wrap native handles in a SafeHandle so they are released deterministically."
        ),
    ),
    PatternRule(
        id="resource.http-client-per-call",
        concern=Concern.RESOURCE_LIFETIME,
        severity=Severity.MEDIUM,
        scope=Scope.PER_LINE,
        predicate=LineMatches(pattern=HTTP_CLIENT_CREATION, exclude=STATIC_DECLARATION),
        title="Socket Exhaustion",
        message=(
            "HttpClient created per call. Each instance holds its own connection pool; "
            "inject IHttpClientFactory or reuse a shared client instead."
        ),
    ),
)


def get_rules() -> List[PatternRule]:
    return list(RULES)
