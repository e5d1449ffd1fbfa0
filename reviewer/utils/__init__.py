"""Utility helpers for the reviewer."""

from .fileio import read_yaml_file, read_text_file
from .project import PackageReference, ProjectDescriptor, find_project_file, parse_project_descriptor
from .code import display_name, list_source_files

__all__ = [
    "read_yaml_file",
    "read_text_file",
    "PackageReference",
    "ProjectDescriptor",
    "find_project_file",
    "parse_project_descriptor",
    "display_name",
    "list_source_files",
]
