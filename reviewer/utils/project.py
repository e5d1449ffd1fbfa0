"""MSBuild project descriptor helpers."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from reviewer.errors import DescriptorNotFoundError, MalformedDescriptorError, PathNotFoundError

from .fileio import read_text_file

PROJECT_GLOB = "*.csproj"


@dataclass(frozen=True)
class PackageReference:
    """A ``<PackageReference>`` entry with the line it was declared on."""

    name: str
    version: Optional[str]
    line: Optional[int] = None


@dataclass
class ProjectDescriptor:
    """Build properties and package references read from a ``.csproj`` file."""

    path: Path
    sdk: Optional[str] = None
    properties: Dict[str, str] = field(default_factory=dict)
    package_references: List[PackageReference] = field(default_factory=list)
    text: str = ""

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def target_framework(self) -> Optional[str]:
        return self.properties.get("TargetFramework") or self.properties.get("TargetFrameworks")


def find_project_file(path: Path) -> Path:
    """Resolve ``path`` to a project file, picking the first ``.csproj`` of a directory."""

    if not path.exists():
        raise PathNotFoundError(str(path))
    if path.is_file():
        return path
    candidates = sorted(path.glob(PROJECT_GLOB))
    if not candidates:
        raise DescriptorNotFoundError(str(path))
    if len(candidates) > 1:
        logger.debug("Multiple project files in {}, using {}", path, candidates[0].name)
    return candidates[0]


def parse_project_descriptor(path: Path) -> ProjectDescriptor:
    """Load the project file at (or inside) ``path``."""

    project_file = find_project_file(path)
    text = read_text_file(project_file)
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise MalformedDescriptorError(str(project_file), str(exc)) from exc

    descriptor = ProjectDescriptor(path=project_file, sdk=root.get("Sdk"), text=text)
    lines = text.split("\n")
    for group in _children(root, "PropertyGroup"):
        for prop in group:
            value = (prop.text or "").strip()
            if value:
                descriptor.properties[_local_name(prop.tag)] = value
    for group in _children(root, "ItemGroup"):
        for reference in _children(group, "PackageReference"):
            name = reference.get("Include") or reference.get("Update")
            if not name:
                continue
            version = reference.get("Version") or _child_text(reference, "Version")
            descriptor.package_references.append(
                PackageReference(name=name, version=version, line=_locate_line(lines, name))
            )
    logger.debug(
        "Parsed {} with {} package references",
        project_file.name,
        len(descriptor.package_references),
    )
    return descriptor


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> List[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _child_text(element: ET.Element, name: str) -> Optional[str]:
    for child in _children(element, name):
        if child.text and child.text.strip():
            return child.text.strip()
    return None


def _locate_line(lines: List[str], package: str) -> Optional[int]:
    pattern = re.compile(r"""(?:Include|Update)\s*=\s*["']""" + re.escape(package) + r"""["']""")
    for index, line in enumerate(lines, start=1):
        if pattern.search(line):
            return index
    return None
