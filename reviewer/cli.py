"""Command-line entry point for the .NET code reviewer."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import List

from loguru import logger

from .config import load_config
from .errors import ConfigError
from .tools import ToolReport, run_tool

COMMANDS = {
    "memory-leaks": ("detect_memory_leaks", "path", "C# file or directory to scan for memory leaks."),
    "quality": ("review_code_quality", "path", "C# file or directory to review."),
    "microservice": ("analyze_microservice", "projectPath", "Project file or directory containing a .csproj."),
    "dependencies": ("check_dependencies", "projectPath", "Project file or directory containing a .csproj."),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotnet-review",
        description="Heuristic review of .NET sources and projects",
    )
    parser.add_argument(
        "--format",
        choices=["markdown", "json"],
        default="markdown",
        help="Report format (defaults to markdown).",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the report to instead of stdout.",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        type=str,
        default=None,
        help="YAML configuration file (defaults to .dotnet-review.yaml when present).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files to scan in parallel (overrides the config file).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log discovery and scan progress to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    for command, (_, _, help_text) in COMMANDS.items():
        subparser = subparsers.add_parser(command, help=help_text)
        subparser.add_argument("path", help=help_text)
    return parser


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING", format="{level}: {message}")


def write_output(report: ToolReport, output_path: str | None, report_format: str) -> None:
    if report_format == "json":
        payload = json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
    else:
        payload = report.text

    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(payload, encoding="utf-8")
        print(f"Report written to {output_path}")
    else:
        print(payload)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(Path(args.config_path) if args.config_path else None)
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1
    if args.workers is not None:
        if args.workers < 1:
            parser.error("--workers must be at least 1")
        config = replace(config, workers=args.workers)

    tool, argument, _ = COMMANDS[args.command]
    report = run_tool(tool, {argument: args.path}, config)
    if report.is_error:
        print(report.text, file=sys.stderr)
        return report.exit_code()
    write_output(report, args.output_path, args.format)
    return report.exit_code()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
