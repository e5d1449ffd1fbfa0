"""Core result data structures for the reviewer."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional

from .severity import Severity


@dataclass(frozen=True)
class Issue:
    """A finalized, deduplicated finding."""

    file: str
    line: Optional[int]
    severity: Severity
    concern: str
    type: str
    message: str
    rule: str

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


@dataclass(frozen=True)
class ScanFailure:
    """A file that was skipped because it could not be read."""

    path: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class Summary:
    """Aggregate issue counts by severity."""

    high: int = 0
    medium: int = 0
    low: int = 0

    def increment(self, severity: Severity) -> None:
        attr = severity.name.lower()
        setattr(self, attr, getattr(self, attr) + 1)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @property
    def total(self) -> int:
        return self.high + self.medium + self.low


@dataclass
class ScanResult:
    """Bundle the issues, skipped files and scan coverage of one invocation."""

    issues: List[Issue] = field(default_factory=list)
    failures: List[ScanFailure] = field(default_factory=list)
    files_scanned: int = 0

    @property
    def summary(self) -> Summary:
        summary = Summary()
        for issue in self.issues:
            summary.increment(issue.severity)
        return summary

    @property
    def passed(self) -> bool:
        return not self.issues

    @property
    def scanned_nothing(self) -> bool:
        """True when no source file was read at all, as opposed to a clean scan."""

        return self.files_scanned == 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "summary": self.summary.to_dict(),
            "files_scanned": self.files_scanned,
            "issues": [issue.to_dict() for issue in self.issues],
            "failures": [failure.to_dict() for failure in self.failures],
            "passed": self.passed,
        }

    def exit_code(self) -> int:
        """Return the rank of the most severe issue: 2 for High, 1 for Medium, else 0."""

        return max((issue.severity.rank for issue in self.issues), default=0)
