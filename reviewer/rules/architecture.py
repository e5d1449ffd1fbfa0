"""Detect controllers that carry business logic or talk to the database directly."""

from __future__ import annotations

import re
from typing import List

from reviewer.severity import Severity

from . import Concern, PatternRule, Scope
from .predicates import WholeFileContains

CONTROLLER_FILE = re.compile(r"Controller")
# A local assignment followed by a long body approximates a fat action method.
LONG_METHOD_BODY = re.compile(r"(var|const|int|string|bool)\s+\w+\s*=\s*.*;[\s\S]{100,}")
DIRECT_DB_ACCESS = re.compile(r"DbContext|DbSet")

RULES = (
    PatternRule(
        id="architecture.fat-controller",
        concern=Concern.ARCHITECTURE,
        severity=Severity.MEDIUM,
        scope=Scope.WHOLE_FILE,
        predicate=WholeFileContains(pattern=LONG_METHOD_BODY),
        title="Architecture / Separation of Concerns",
        message="Controller methods should be thin. Move business logic to a Service layer.",
        applies_to=CONTROLLER_FILE,
    ),
    PatternRule(
        id="architecture.db-in-controller",
        concern=Concern.ARCHITECTURE,
        severity=Severity.HIGH,
        scope=Scope.WHOLE_FILE,
        predicate=WholeFileContains(pattern=DIRECT_DB_ACCESS),
        title="Architecture / Database Access",
        message="Controllers should not access DbContext directly. Use a Repository or Service.",
        applies_to=CONTROLLER_FILE,
    ),
)


def get_rules() -> List[PatternRule]:
    return list(RULES)
