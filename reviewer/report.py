"""Render scan results as Markdown text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Sequence

from .result import Issue, ScanFailure, ScanResult
from .utils.project import ProjectDescriptor

if TYPE_CHECKING:
    from .microservice import MicroserviceAnalysis


class GroupBy(str, Enum):
    FILE = "file"
    TYPE = "type"


@dataclass(frozen=True)
class ReportStyle:
    """Headings used for one tool's report."""

    title: str
    clean_title: str
    clean_body: str


MEMORY_LEAK_STYLE = ReportStyle(
    title="Memory Leak Analysis Report ⚠️",
    clean_title="Memory Leak Analysis passed! ✅",
    clean_body="No common memory leak patterns detected in the scanned files.",
)

CODE_QUALITY_STYLE = ReportStyle(
    title="Code Quality & Performance Report 🔍",
    clean_title="Code Quality Review passed! ✅",
    clean_body="No major quality or performance issues detected in the scanned files.",
)


def render(result: ScanResult, group_by: GroupBy, style: ReportStyle) -> str:
    """Render ``result`` with issues grouped by file or by issue type.

    Groups appear in the order their first issue was found. An empty issue
    list renders the clean banner whether or not any file was scanned.
    """

    lines: List[str] = []
    if not result.issues:
        lines.append(f"## {style.clean_title}")
        lines.append("")
        lines.append(style.clean_body)
    else:
        count = result.summary.total
        lines.append(f"# {style.title}")
        lines.append("")
        lines.append(f"**{count} {'issue' if count == 1 else 'issues'} found.**")
        lines.append("")
        for heading, issues in _group(result.issues, group_by).items():
            lines.append(f"### {heading}")
            for issue in issues:
                lines.append(_issue_line(issue, with_file=group_by == GroupBy.TYPE))
            lines.append("")
    _append_failures(lines, result.failures)
    return "\n".join(lines).rstrip("\n") + "\n"


def render_dependency_report(descriptor: ProjectDescriptor, result: ScanResult) -> str:
    lines = [f"# Dependency Analysis for {descriptor.name}", ""]
    packages = descriptor.package_references
    if not packages:
        lines.append("No package references found.")
    else:
        lines.append(f"Found {len(packages)} packages.")
    lines.append("")

    if result.issues:
        lines.append("## ⚠️ Issues Detected")
        lines.append("")
        for issue in result.issues:
            lines.append(_issue_line(issue, with_file=False))
    else:
        lines.append("## ✅ No obvious dependency issues found.")
    lines.append("")

    lines.append("## Package List")
    for package in packages:
        lines.append(f"- {package.name} ({package.version or 'unspecified'})")
    return "\n".join(lines).rstrip("\n") + "\n"


def render_microservice_report(analysis: "MicroserviceAnalysis") -> str:
    def checkbox(enabled: bool) -> str:
        return "x" if enabled else " "

    layers = analysis.layers
    patterns = analysis.patterns
    lines = [
        "# Microservice Analysis Report",
        "",
        f"**Project Type:** {analysis.project_type}",
        f"**Framework:** {analysis.target_framework}",
        "",
        "## Architecture Layers",
        f"- **Controllers:** {len(layers.controllers)} found",
        f"- **Services:** {len(layers.services)} found",
        f"- **Repositories:** {len(layers.repositories)} found",
        f"- **DTOs:** {len(layers.dtos)} found",
        "",
        "## Microservice Patterns",
        f"- [{checkbox(patterns.health_checks)}] Health Checks",
        f"- [{checkbox(patterns.logging)}] Structured Logging",
        f"- [{checkbox(patterns.containerization)}] Docker Containerization",
        f"- [{checkbox(patterns.resilience)}] Resilience (Polly)",
        "",
        "## Observations",
    ]
    lines.extend(f"- {observation}" for observation in analysis.observations)
    _append_failures(lines, analysis.failures)
    return "\n".join(lines).rstrip("\n") + "\n"


def _group(issues: Sequence[Issue], group_by: GroupBy) -> Dict[str, List[Issue]]:
    grouped: Dict[str, List[Issue]] = {}
    for issue in issues:
        key = issue.file if group_by == GroupBy.FILE else issue.type
        grouped.setdefault(key, []).append(issue)
    return grouped


def _issue_line(issue: Issue, with_file: bool) -> str:
    location = f"Line {issue.line}" if issue.line is not None else ""
    if with_file:
        location = f"{issue.file}, {location}" if location else issue.file
    suffix = f" ({location})" if location else ""
    return f"- **[{issue.severity.value}] {issue.type}**{suffix}: {issue.message}"


def _append_failures(lines: List[str], failures: Sequence[ScanFailure]) -> None:
    if not failures:
        return
    while lines and not lines[-1]:
        lines.pop()
    lines.extend(["", "## Skipped Files", ""])
    lines.extend(f"- `{failure.path}`: {failure.reason}" for failure in failures)
