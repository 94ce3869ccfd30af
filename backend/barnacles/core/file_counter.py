"""File/Line Counter: walk a project tree and aggregate file, line and language counts."""

import logging
import math
import os
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, Optional

import pathspec

from barnacles.config import get_settings
from barnacles.core.technology_detectors import TECHNOLOGY_DETECTORS

logger = logging.getLogger(__name__)

# Dependency directories removed by the delete-packages action
THIRD_PARTY_DIRECTORIES = (
    "node_modules",
    "vendor",
    ".venv",
    "venv",
    "target/debug",
    "target/release",
)

BINARY_SNIFF_BYTES = 8192


@dataclass
class LanguageStat:
    """Per-technology share of a project's files."""
    file_count: int
    percentage: float
    lines_of_code: int


@dataclass
class FileCountResult:
    """Aggregate counts for one project tree."""
    file_count: int = 0
    directory_count: int = 0
    size: int = 0
    lines_of_code: int = 0
    last_modified: Optional[datetime] = None
    extension_counts: Dict[str, int] = field(default_factory=dict)
    extension_lines: Dict[str, int] = field(default_factory=dict)
    language_stats: Dict[str, LanguageStat] = field(default_factory=dict)

    @property
    def file_extensions(self) -> set[str]:
        return set(self.extension_counts)


def percentage_of(count: int, total: int) -> float:
    """Share of total in percent, rounded half up to one decimal."""
    if total <= 0:
        return 0.0
    return math.floor(count / total * 1000 + 0.5) / 10


def encode_percentage(percentage: float) -> int:
    """52.5 -> 525. Rounds half up, precision beyond one decimal is dropped."""
    return int(math.floor(percentage * 10 + 0.5))


def decode_percentage(stored: int) -> float:
    """525 -> 52.5"""
    return stored / 10


def count_lines(file_path: Path) -> Optional[int]:
    """Count lines of a text file.

    Returns:
        Number of lines, or None for binary files (null byte in the first
        8 KiB) and unreadable files
    """
    try:
        with open(file_path, "rb") as f:
            if b"\0" in f.read(BINARY_SNIFF_BYTES):
                return None
            f.seek(0)
            return sum(1 for _ in f)
    except OSError:
        return None


def load_gitignore(project_path: Path) -> Optional[pathspec.GitIgnoreSpec]:
    """Load the project's root .gitignore, if any."""
    gitignore_path = project_path / ".gitignore"
    if not gitignore_path.is_file():
        return None
    try:
        with open(gitignore_path, encoding="utf-8", errors="ignore") as f:
            return pathspec.GitIgnoreSpec.from_lines(f.readlines())
    except OSError as e:
        logger.debug(f"Could not read {gitignore_path}: {e}")
        return None


def build_language_stats(
    extension_counts: Dict[str, int],
    extension_lines: Dict[str, int],
    total_files: int,
) -> Dict[str, LanguageStat]:
    """Attribute per-extension counts to catalog technologies."""
    language_stats: Dict[str, LanguageStat] = {}
    for detector in TECHNOLOGY_DETECTORS:
        if not detector.file_extensions:
            continue
        count = sum(extension_counts.get(ext, 0) for ext in detector.file_extensions)
        if count == 0:
            continue
        lines = sum(extension_lines.get(ext, 0) for ext in detector.file_extensions)
        language_stats[detector.slug] = LanguageStat(
            file_count=count,
            percentage=percentage_of(count, total_files),
            lines_of_code=lines,
        )
    return language_stats


def count_project_files(
    project_path: str | Path,
    skip_directories: Optional[Iterable[str]] = None,
    ignore_files: Optional[Iterable[str]] = None,
    respect_gitignore: bool = True,
) -> FileCountResult:
    """Walk a project depth-first and aggregate its counts.

    Excluded directory names are matched exactly, symlinked directories are
    never entered, and a directory that cannot be read contributes nothing.

    Args:
        project_path: Root of the project
        skip_directories: Directory names to prune
        ignore_files: File names to skip entirely
        respect_gitignore: Apply the root .gitignore

    Returns:
        FileCountResult with totals and the language breakdown
    """
    root = Path(project_path)
    settings = get_settings()
    skip = set(settings.skip_directories if skip_directories is None else skip_directories)
    ignored_names = set(settings.ignore_files if ignore_files is None else ignore_files)
    spec = load_gitignore(root) if respect_gitignore else None

    result = FileCountResult()
    extension_counts: Dict[str, int] = defaultdict(int)
    extension_lines: Dict[str, int] = defaultdict(int)
    newest_mtime = 0.0

    stack = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {current}: {e}")
            continue

        for entry in entries:
            if entry.name in skip or entry.name in ignored_names:
                continue

            entry_path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file(follow_symlinks=False)
            except OSError:
                continue

            if spec is not None:
                relative = entry_path.relative_to(root).as_posix()
                if spec.match_file(relative + "/" if is_dir else relative):
                    continue

            if is_dir:
                result.directory_count += 1
                stack.append(entry_path)
            elif is_file:
                result.file_count += 1
                try:
                    stat = entry.stat(follow_symlinks=False)
                    result.size += stat.st_size
                    newest_mtime = max(newest_mtime, stat.st_mtime)
                except OSError:
                    pass

                lines = count_lines(entry_path)
                ext = entry_path.suffix.lower()
                if ext:
                    extension_counts[ext] += 1
                if lines is not None:
                    result.lines_of_code += lines
                    if ext:
                        extension_lines[ext] += lines

    if newest_mtime:
        result.last_modified = datetime.fromtimestamp(newest_mtime)
    else:
        try:
            result.last_modified = datetime.fromtimestamp(root.stat().st_mtime)
        except OSError:
            result.last_modified = None

    result.extension_counts = dict(extension_counts)
    result.extension_lines = dict(extension_lines)
    result.language_stats = build_language_stats(
        result.extension_counts, result.extension_lines, result.file_count
    )
    return result


def measure_directory_size(dir_path: str | Path) -> int:
    """Total bytes of regular files below a directory, symlinks not followed."""
    total = 0
    stack = [Path(dir_path)]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            stack.append(Path(entry.path))
                        elif entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                    except OSError:
                        continue
        except OSError:
            continue
    return total


def measure_third_party_size(project_path: str | Path) -> int:
    """Bytes held in the project's dependency directories."""
    root = Path(project_path)
    return sum(
        measure_directory_size(root / name)
        for name in THIRD_PARTY_DIRECTORIES
        if (root / name).is_dir()
    )
