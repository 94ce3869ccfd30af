"""Project Scanner: discover projects under scan roots and collect their metrics."""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from barnacles.config import get_settings
from barnacles.core.detector import detect_technologies, get_project_metadata, is_valid_project
from barnacles.core.file_counter import LanguageStat, count_project_files, measure_third_party_size
from barnacles.core.git_inspector import GitInfo, GitInspector, GitPythonInspector
from barnacles.utils.exceptions import ScanError

logger = logging.getLogger(__name__)


@dataclass
class ProjectScanStats:
    """Metrics gathered for one project."""
    file_count: int = 0
    directory_count: int = 0
    lines_of_code: int = 0
    language_stats: Dict[str, LanguageStat] = field(default_factory=dict)
    last_modified: Optional[datetime] = None
    size: Optional[int] = None
    third_party_size: Optional[int] = None


@dataclass
class ProjectInfo:
    """Everything a scan learns about a project directory."""
    name: str
    path: str
    description: Optional[str] = None
    technologies: List[str] = field(default_factory=list)
    stats: ProjectScanStats = field(default_factory=ProjectScanStats)
    git_info: Optional[GitInfo] = None


class ProjectScanner:
    """
    Orchestrates detection, counting and Git inspection.

    Per-project work is fanned out with asyncio; at most
    ``max_concurrent_scans`` projects are counted at the same time.
    """

    def __init__(
        self,
        git_inspector: Optional[GitInspector] = None,
        skip_directories: Optional[Iterable[str]] = None,
        ignore_files: Optional[Iterable[str]] = None,
        respect_gitignore: Optional[bool] = None,
        max_concurrent_scans: Optional[int] = None,
        max_depth_limit: Optional[int] = None,
    ):
        settings = get_settings()
        self.git_inspector = git_inspector or GitPythonInspector(timeout=settings.git_command_timeout)
        self.skip_directories = list(
            settings.skip_directories if skip_directories is None else skip_directories
        )
        self.ignore_files = list(settings.ignore_files if ignore_files is None else ignore_files)
        self.respect_gitignore = (
            settings.respect_gitignore if respect_gitignore is None else respect_gitignore
        )
        self.max_concurrent_scans = max(1, max_concurrent_scans or settings.scan_max_concurrent)
        self.max_depth_limit = max_depth_limit if max_depth_limit is not None else settings.scan_max_depth_limit
        self.default_max_depth = settings.scan_max_depth

    async def scan_project(self, project_path: str | Path) -> ProjectInfo:
        """
        Scan one directory.

        File counting and Git inspection run concurrently. A directory without
        any marker still yields counts, with no technologies and no Git info.

        Args:
            project_path: Directory to scan

        Returns:
            ProjectInfo for the directory

        Raises:
            ScanError: If the path is not a directory
        """
        path = os.path.abspath(project_path)
        if not os.path.isdir(path):
            raise ScanError(f"Not a directory: {path}", path=path)

        counts, git_info, third_party_size, metadata = await asyncio.gather(
            asyncio.to_thread(
                count_project_files,
                path,
                self.skip_directories,
                self.ignore_files,
                self.respect_gitignore,
            ),
            self.git_inspector.inspect(path),
            asyncio.to_thread(measure_third_party_size, path),
            asyncio.to_thread(get_project_metadata, path),
        )
        technologies = await asyncio.to_thread(detect_technologies, path, counts.file_extensions)

        return ProjectInfo(
            name=metadata["name"],
            path=path,
            description=metadata["description"],
            technologies=technologies,
            stats=ProjectScanStats(
                file_count=counts.file_count,
                directory_count=counts.directory_count,
                lines_of_code=counts.lines_of_code,
                language_stats=counts.language_stats,
                last_modified=counts.last_modified,
                size=counts.size,
                third_party_size=third_party_size,
            ),
            git_info=git_info,
        )

    def discover_projects(self, base_paths: Iterable[str | Path], max_depth: int) -> List[str]:
        """
        Walk scan roots and collect project directories.

        Depth 0 is the root itself. A directory that is a project is not
        descended into; hidden and excluded directories are skipped and no
        directory is visited twice.
        """
        skip = set(self.skip_directories)
        visited: set[str] = set()
        found: List[str] = []

        def walk(dir_path: str, depth: int):
            if depth > max_depth or dir_path in visited:
                return
            visited.add(dir_path)

            if is_valid_project(dir_path):
                found.append(dir_path)
                return

            try:
                with os.scandir(dir_path) as it:
                    children = sorted(
                        entry.path
                        for entry in it
                        if entry.is_dir(follow_symlinks=False)
                        and not entry.name.startswith(".")
                        and entry.name not in skip
                    )
            except OSError as e:
                logger.debug(f"Cannot list {dir_path}: {e}")
                return

            for child in children:
                walk(child, depth + 1)

        for base_path in base_paths:
            root = os.path.abspath(base_path)
            if os.path.isdir(root):
                walk(root, 0)
            else:
                logger.info(f"Scan root does not exist, skipping: {root}")

        return found

    async def scan_directories(
        self,
        base_paths: Iterable[str | Path],
        max_depth: Optional[int] = None,
    ) -> List[ProjectInfo]:
        """
        Discover and scan every project under the given roots.

        Args:
            base_paths: Scan roots
            max_depth: Recursion depth, clamped to the configured limit

        Returns:
            ProjectInfo per discovered project, in discovery order
        """
        depth = self.default_max_depth if max_depth is None else max_depth
        depth = max(0, min(depth, self.max_depth_limit))

        candidates = await asyncio.to_thread(self.discover_projects, list(base_paths), depth)
        logger.info(f"Discovered {len(candidates)} projects (max_depth={depth})")

        semaphore = asyncio.Semaphore(self.max_concurrent_scans)

        async def scan_one(path: str) -> Optional[ProjectInfo]:
            async with semaphore:
                try:
                    return await self.scan_project(path)
                except ScanError as e:
                    # Removed between discovery and scanning
                    logger.warning(f"Skipping {path}: {e.message}")
                    return None

        results = await asyncio.gather(*(scan_one(path) for path in candidates))
        return [info for info in results if info is not None]


project_scanner = ProjectScanner()
