"""Detect swallowed and overly broad exception handlers."""

from __future__ import annotations

import re
from typing import List

from reviewer.severity import Severity

from . import Concern, PatternRule, Scope
from .predicates import WholeFileContains

EMPTY_CATCH = re.compile(r"catch\s*(?:\([^)]*\))?\s*\{\s*\}")
GENERIC_CATCH = re.compile(r"catch\s*\(\s*(?:System\.)?Exception(?:\s+\w+)?\s*\)")

RULES = (
    PatternRule(
        id="errors.empty-catch",
        concern=Concern.ERROR_HANDLING,
        severity=Severity.MEDIUM,
        scope=Scope.WHOLE_FILE,
        predicate=WholeFileContains(pattern=EMPTY_CATCH),
        title="Empty Catch Block",
        message=(
            "Empty catch block detected. Always log exceptions or handle them appropriately. "
            "Swallowing errors hides bugs."
        ),
    ),
    PatternRule(
        id="errors.generic-catch",
        concern=Concern.ERROR_HANDLING,
        severity=Severity.LOW,
        scope=Scope.WHOLE_FILE,
        predicate=WholeFileContains(pattern=GENERIC_CATCH),
        title="Generic Exception Catch",
        message=(
            "Catching 'Exception' is too broad. Catch specific exceptions to handle known error states correctly."
        ),
    ),
)


def get_rules() -> List[PatternRule]:
    return list(RULES)
