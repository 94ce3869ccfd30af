"""Git metadata lookup for scanned projects."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from git import Repo, GitCommandError
from git.exc import GitError

from barnacles.config import get_settings

logger = logging.getLogger(__name__)

STATUS_CLEAN = "clean"
STATUS_MODIFIED = "modified"


def _parse_commit_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


@dataclass
class GitInfo:
    """Repository state of one project."""
    branch: Optional[str]
    status: Optional[str]  # clean, modified
    remote_url: Optional[str] = None
    last_commit_date: Optional[datetime] = None
    last_commit_message: Optional[str] = None
    has_uncommitted_changes: Optional[bool] = False


class GitInspector(Protocol):
    """Given a directory, return its repository metadata or None."""

    async def inspect(self, path: str | Path) -> Optional[GitInfo]:
        ...


class GitPythonInspector:
    """GitInspector backed by GitPython.

    Every git invocation is killed after ``timeout`` seconds and the whole
    lookup is bounded by the same budget. Non-repositories, git failures
    and timeouts all produce None.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else get_settings().git_command_timeout

    async def inspect(self, path: str | Path) -> Optional[GitInfo]:
        project_path = Path(path)
        if not (project_path / ".git").exists():
            return None

        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._read_git_info, project_path),
                timeout=self.timeout * 2,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Git inspection timed out for {project_path}")
            return None
        except (GitError, OSError) as e:
            logger.debug(f"Git inspection failed for {project_path}: {e}")
            return None

    def _git(self, repo: Repo, command: str, *args: str) -> str:
        return getattr(repo.git, command)(*args, kill_after_timeout=self.timeout).strip()

    def _optional_git(self, repo: Repo, command: str, *args: str) -> Optional[str]:
        # Exits non-zero when the value is unset, e.g. no origin or no commits
        try:
            return self._git(repo, command, *args) or None
        except GitCommandError:
            return None

    def _read_git_info(self, project_path: Path) -> GitInfo:
        repo = Repo(project_path)
        try:
            branch = self._optional_git(repo, "rev_parse", "--abbrev-ref", "HEAD")
            if branch is None or branch == "HEAD":
                # Unborn branch in a repository without commits
                branch = self._optional_git(repo, "symbolic_ref", "--short", "HEAD") or "HEAD"

            porcelain = self._git(repo, "status", "--porcelain")
            has_changes = bool(porcelain)

            return GitInfo(
                branch=branch,
                status=STATUS_MODIFIED if has_changes else STATUS_CLEAN,
                remote_url=self._optional_git(repo, "config", "--get", "remote.origin.url"),
                last_commit_date=_parse_commit_date(self._optional_git(repo, "log", "-1", "--format=%cI")),
                last_commit_message=self._optional_git(repo, "log", "-1", "--format=%s"),
                has_uncommitted_changes=has_changes,
            )
        finally:
            repo.close()
