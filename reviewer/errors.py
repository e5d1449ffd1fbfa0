"""Error kinds raised by the review engine and its collaborators."""

from __future__ import annotations


class ReviewError(Exception):
    """Base class for failures surfaced to the caller of a review tool."""


class PathNotFoundError(ReviewError):
    """The path handed to a tool does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path not found: {path}")
        self.path = path


class DescriptorNotFoundError(PathNotFoundError):
    """A project directory contains no ``.csproj`` file."""

    def __init__(self, path: str) -> None:
        ReviewError.__init__(self, f"No .csproj file found in {path}")
        self.path = path


class MalformedDescriptorError(ReviewError):
    """A project descriptor exists but cannot be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to parse project file {path}: {reason}")
        self.path = path
        self.reason = reason


class FileReadError(ReviewError):
    """A single source file could not be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(ReviewError, ValueError):
    pass
