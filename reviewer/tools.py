"""The review tools exposed to callers, one rendered report per invocation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from loguru import logger

from .aggregator import IssueAggregator
from .config import ReviewConfig
from .engine import scan_packages
from .errors import ReviewError
from .microservice import MicroserviceAnalysis, analyze_microservice as run_microservice_analysis
from .pipeline import scan_path
from .report import (
    CODE_QUALITY_STYLE,
    MEMORY_LEAK_STYLE,
    GroupBy,
    render,
    render_dependency_report,
    render_microservice_report,
)
from .result import ScanResult
from .rules import Concern
from .utils.project import parse_project_descriptor

MEMORY_LEAK_CONCERNS = (Concern.RESOURCE_LIFETIME,)
CODE_QUALITY_CONCERNS = (Concern.PERFORMANCE_ASYNC, Concern.ERROR_HANDLING, Concern.ARCHITECTURE)
DEPENDENCY_CONCERNS = (Concern.DEPENDENCY_COMPATIBILITY,)


@dataclass
class ToolReport:
    """Rendered text of one tool call plus the structured data behind it."""

    tool: str
    text: str
    result: Optional[ScanResult] = None
    analysis: Optional[MicroserviceAnalysis] = None
    is_error: bool = False

    def exit_code(self) -> int:
        if self.is_error:
            return 1
        if self.result is not None:
            return self.result.exit_code()
        return 0

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {"tool": self.tool, "is_error": self.is_error}
        if self.is_error:
            data["error"] = self.text
        if self.result is not None:
            data.update(self.result.to_dict())
        if self.analysis is not None:
            data["analysis"] = self.analysis.to_dict()
        return data


def detect_memory_leaks(path: str, config: Optional[ReviewConfig] = None) -> ToolReport:
    """Scan C# sources for leaked subscriptions, undisposed resources and static state."""

    result = scan_path(Path(path), MEMORY_LEAK_CONCERNS, config)
    return ToolReport(
        tool="detect_memory_leaks",
        text=render(result, GroupBy.FILE, MEMORY_LEAK_STYLE),
        result=result,
    )


def review_code_quality(path: str, config: Optional[ReviewConfig] = None) -> ToolReport:
    """Review C# sources for N+1 queries, blocking waits, error handling and layering."""

    result = scan_path(Path(path), CODE_QUALITY_CONCERNS, config)
    return ToolReport(
        tool="review_code_quality",
        text=render(result, GroupBy.TYPE, CODE_QUALITY_STYLE),
        result=result,
    )


def check_dependencies(project_path: str, config: Optional[ReviewConfig] = None) -> ToolReport:
    """Check a project's package references for outdated or incompatible versions."""

    config = config or ReviewConfig()
    registry = config.registry()
    descriptor = parse_project_descriptor(Path(project_path))
    aggregator = IssueAggregator(registry)
    aggregator.mark_scanned(descriptor.name)
    aggregator.extend(scan_packages(descriptor, registry.rules_for_concerns(DEPENDENCY_CONCERNS)))
    result = aggregator.result()
    return ToolReport(
        tool="check_dependencies",
        text=render_dependency_report(descriptor, result),
        result=result,
    )


def analyze_microservice(project_path: str, config: Optional[ReviewConfig] = None) -> ToolReport:
    """Summarize the layers and operational patterns of a service project."""

    analysis = run_microservice_analysis(Path(project_path), config)
    return ToolReport(
        tool="analyze_microservice",
        text=render_microservice_report(analysis),
        analysis=analysis,
    )


TOOLS: Dict[str, Tuple[Callable[..., ToolReport], str]] = {
    "detect_memory_leaks": (detect_memory_leaks, "path"),
    "review_code_quality": (review_code_quality, "path"),
    "analyze_microservice": (analyze_microservice, "projectPath"),
    "check_dependencies": (check_dependencies, "projectPath"),
}


def run_tool(name: str, arguments: Mapping[str, Any], config: Optional[ReviewConfig] = None) -> ToolReport:
    """Dispatch a tool call by name, turning fatal review errors into an error report."""

    if name not in TOOLS:
        return ToolReport(tool=name, text=f"Error executing tool {name}: Unknown tool: {name}", is_error=True)
    handler, argument = TOOLS[name]
    value = arguments.get(argument)
    if not isinstance(value, str) or not value:
        return ToolReport(
            tool=name,
            text=f"Error executing tool {name}: Missing required argument '{argument}'",
            is_error=True,
        )
    try:
        return handler(value, config)
    except ReviewError as exc:
        logger.debug("Tool {} failed: {}", name, exc)
        return ToolReport(tool=name, text=f"Error executing tool {name}: {exc}", is_error=True)
