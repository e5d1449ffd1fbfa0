"""Heuristic code review engine for .NET sources and projects."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("dotnet-review")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0-dev"

__all__ = ["__version__"]
