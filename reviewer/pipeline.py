"""Run the matcher over every source file under a path and merge the results."""

from __future__ import annotations

import concurrent.futures
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger

from .aggregator import IssueAggregator
from .config import ReviewConfig
from .engine import RawMatch, scan
from .errors import FileReadError
from .result import ScanResult
from .rules import Concern, PatternRule, RuleRegistry
from .utils.code import display_name, list_source_files
from .utils.fileio import read_text_file


def scan_file(path: Path, name: str, rules: Sequence[PatternRule]) -> List[RawMatch]:
    """Read and scan one file; read failures propagate as :class:`FileReadError`."""

    content = read_text_file(path)
    matches = scan(content, name, rules)
    logger.debug("Scanned {}: {} matches", name, len(matches))
    return matches


def scan_path(
    path: Path,
    concerns: Sequence[Concern],
    config: Optional[ReviewConfig] = None,
    registry: Optional[RuleRegistry] = None,
) -> ScanResult:
    """Scan a file or directory with the rules of ``concerns``.

    A missing ``path`` raises :class:`PathNotFoundError`. Files that cannot be
    read are reported as failures on the result while the remaining files are
    still scanned.
    """

    config = config or ReviewConfig()
    registry = registry or config.registry()
    rules = registry.rules_for_concerns(concerns)
    files = list_source_files(path, config.extensions, config.excluded_dirs)
    names = [display_name(file_path, path) for file_path in files]
    aggregator = IssueAggregator(registry)

    if config.workers <= 1 or len(files) <= 1:
        for file_path, name in zip(files, names):
            try:
                matches = scan_file(file_path, name, rules)
            except FileReadError as exc:
                aggregator.record_failure(name, exc.reason)
                continue
            aggregator.mark_scanned(name)
            aggregator.extend(matches)
        return aggregator.result()

    with concurrent.futures.ThreadPoolExecutor(max_workers=config.workers) as executor:
        futures = [executor.submit(scan_file, file_path, name, rules) for file_path, name in zip(files, names)]
        # Merge in discovery order so the report does not depend on scheduling.
        for name, future in zip(names, futures):
            try:
                matches = future.result()
            except FileReadError as exc:
                aggregator.record_failure(name, exc.reason)
                continue
            aggregator.mark_scanned(name)
            aggregator.extend(matches)
    return aggregator.result()
