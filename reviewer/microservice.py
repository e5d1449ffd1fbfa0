"""Summarize the layering and operational patterns of a .NET service project."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Pattern

from loguru import logger

from .config import ReviewConfig
from .errors import FileReadError
from .result import ScanFailure
from .rules import Predicate, ScanContext
from .rules.predicates import WholeFileContains
from .utils.code import display_name, list_source_files
from .utils.fileio import read_text_file
from .utils.project import ProjectDescriptor, parse_project_descriptor

WEB_SDK = "Microsoft.NET.Sdk.Web"


@dataclass(frozen=True)
class LayerRule:
    """Assign a file to an architecture layer by its name or its content."""

    layer: str
    name: Optional[Pattern[str]] = None
    content: Optional[Predicate] = None
    excluded_name: Optional[Pattern[str]] = None

    def matches(self, filename: str, context: ScanContext) -> bool:
        stem = Path(filename).stem
        if self.excluded_name is not None and self.excluded_name.search(Path(filename).name):
            return False
        if self.name is not None and not self.name.search(stem):
            return False
        if self.content is not None and self.content.evaluate(context.text, context) is None:
            return False
        return self.name is not None or self.content is not None


LAYER_RULES = (
    LayerRule("controllers", name=re.compile(r"Controller")),
    LayerRule(
        "controllers",
        content=WholeFileContains(pattern=re.compile(r":.*Controller"), absent=re.compile(r"abstract.*class")),
    ),
    LayerRule("services", name=re.compile(r"Service"), excluded_name=re.compile(r"^Program\.cs$")),
    LayerRule("repositories", name=re.compile(r"Repository")),
    LayerRule("dtos", name=re.compile(r"(?:Dto|DTO)$")),
)

PATTERN_PREDICATES: Dict[str, Predicate] = {
    "health_checks": WholeFileContains(pattern=re.compile(r"MapHealthChecks|AddHealthChecks")),
    "logging": WholeFileContains(pattern=re.compile(r"ILogger|Serilog|NLog")),
    "resilience": WholeFileContains(pattern=re.compile(r"Polly|Policy")),
}


@dataclass
class Layers:
    controllers: List[str] = field(default_factory=list)
    services: List[str] = field(default_factory=list)
    repositories: List[str] = field(default_factory=list)
    dtos: List[str] = field(default_factory=list)

    def add(self, layer: str, filename: str) -> None:
        members: List[str] = getattr(self, layer)
        if filename not in members:
            members.append(filename)


@dataclass
class ServicePatterns:
    health_checks: bool = False
    logging: bool = False
    containerization: bool = False
    resilience: bool = False


@dataclass
class MicroserviceAnalysis:
    """Structure of one project, derived from its descriptor and sources."""

    project: str
    project_type: str = "Unknown"
    target_framework: str = "Unknown"
    layers: Layers = field(default_factory=Layers)
    patterns: ServicePatterns = field(default_factory=ServicePatterns)
    observations: List[str] = field(default_factory=list)
    failures: List[ScanFailure] = field(default_factory=list)
    files_scanned: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "project": self.project,
            "project_type": self.project_type,
            "target_framework": self.target_framework,
            "layers": {
                "controllers": list(self.layers.controllers),
                "services": list(self.layers.services),
                "repositories": list(self.layers.repositories),
                "dtos": list(self.layers.dtos),
            },
            "patterns": {
                "health_checks": self.patterns.health_checks,
                "logging": self.patterns.logging,
                "containerization": self.patterns.containerization,
                "resilience": self.patterns.resilience,
            },
            "observations": list(self.observations),
            "failures": [failure.to_dict() for failure in self.failures],
            "files_scanned": self.files_scanned,
        }


def analyze_microservice(project_path: Path, config: Optional[ReviewConfig] = None) -> MicroserviceAnalysis:
    config = config or ReviewConfig()
    descriptor = parse_project_descriptor(project_path)
    project_dir = descriptor.path.parent
    analysis = MicroserviceAnalysis(project=descriptor.name)
    _describe_project(descriptor, analysis)

    for path in list_source_files(project_dir, config.extensions, config.excluded_dirs):
        name = display_name(path, project_dir)
        try:
            content = read_text_file(path)
        except FileReadError as exc:
            logger.warning("Skipping {}: {}", name, exc.reason)
            analysis.failures.append(ScanFailure(path=name, reason=exc.reason))
            continue
        analysis.files_scanned += 1
        _classify_file(name, content, analysis)

    analysis.patterns.containerization = (project_dir / "Dockerfile").exists()
    analysis.observations.extend(_observations(analysis, config.target_framework))
    return analysis


def _describe_project(descriptor: ProjectDescriptor, analysis: MicroserviceAnalysis) -> None:
    if descriptor.target_framework:
        analysis.target_framework = descriptor.target_framework
    sdk = descriptor.sdk or descriptor.properties.get("Sdk", "")
    if WEB_SDK in sdk:
        analysis.project_type = "Web API"


def _classify_file(name: str, content: str, analysis: MicroserviceAnalysis) -> None:
    context = ScanContext(filename=name, text=content)
    filename = Path(name).name
    for rule in LAYER_RULES:
        if rule.matches(name, context):
            analysis.layers.add(rule.layer, filename)
    for attribute, predicate in PATTERN_PREDICATES.items():
        if predicate.evaluate(content, context) is not None:
            setattr(analysis.patterns, attribute, True)


def _observations(analysis: MicroserviceAnalysis, target_framework: str) -> List[str]:
    observations: List[str] = []
    if analysis.layers.controllers and not analysis.layers.services:
        observations.append(
            "⚠️ **Potential Issue:** Controllers found but no Services detected. "
            "Ensure business logic is not in controllers."
        )
    if analysis.project_type == "Web API" and not analysis.patterns.health_checks:
        observations.append("⚠️ **Recommendation:** Add Health Checks for microservice monitoring.")
    if analysis.target_framework != target_framework:
        observations.append(
            f"ℹ️ **Notice:** Framework is '{analysis.target_framework}'. "
            f"Consider upgrading to '{target_framework}' for performance and memory improvements."
        )
    else:
        observations.append(f"✅ Using '{target_framework}'.")
    return observations
