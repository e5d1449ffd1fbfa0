"""Evaluate pattern rules against one file's text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .rules import PatternRule, ScanContext, Scope
from .utils.project import ProjectDescriptor


@dataclass(frozen=True)
class RawMatch:
    """One predicate satisfaction, before aggregation."""

    rule_id: str
    file: str
    line: Optional[int] = None
    captured: Optional[Dict[str, object]] = None
    # Ordinal of the package reference; references can share a line.
    position: Optional[int] = None


def scan(content: str, filename: str, rules: Iterable[PatternRule]) -> List[RawMatch]:
    """Return the raw matches of ``rules`` over ``content``.

    Whole-file rules run first, in rule order, then every line is visited once.
    The structural tracker is advanced before the per-line rules see a line,
    so a loop header counts as being inside the loop.
    """

    context = ScanContext(filename=filename, text=content)
    applicable = [rule for rule in rules if rule.applies(filename)]
    whole_file = [rule for rule in applicable if rule.scope == Scope.WHOLE_FILE]
    per_line = [rule for rule in applicable if rule.scope == Scope.PER_LINE]

    matches: List[RawMatch] = []
    for rule in whole_file:
        captured = rule.predicate.evaluate(content, context)
        if captured is not None:
            matches.append(RawMatch(rule_id=rule.id, file=filename, captured=captured))

    if not per_line:
        return matches

    for number, line in enumerate(context.lines, start=1):
        context.tracker.advance(line)
        for rule in per_line:
            captured = rule.predicate.evaluate(line, context)
            if captured is not None:
                matches.append(RawMatch(rule_id=rule.id, file=filename, line=number, captured=captured))
    return matches


def scan_packages(descriptor: ProjectDescriptor, rules: Iterable[PatternRule]) -> List[RawMatch]:
    """Return the raw matches of per-package rules over a project's package references."""

    context = ScanContext(filename=descriptor.name, text=descriptor.text)
    package_rules = [rule for rule in rules if rule.scope == Scope.PER_PACKAGE]
    matches: List[RawMatch] = []
    for position, reference in enumerate(descriptor.package_references):
        for rule in package_rules:
            captured = rule.predicate.evaluate(reference, context)
            if captured is not None:
                matches.append(
                    RawMatch(
                        rule_id=rule.id,
                        file=descriptor.name,
                        line=reference.line,
                        captured=captured,
                        position=position,
                    )
                )
    return matches
