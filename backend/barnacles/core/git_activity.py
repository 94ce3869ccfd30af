"""Commit activity of one repository over a date window."""

import logging
import os
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from typing import Collection, Optional, Set

from git import Git, Repo
from git.exc import GitError

logger = logging.getLogger(__name__)

# Generated lock files are left out of file and line totals
EXCLUDED_FILES = frozenset({
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "bun.lockb",
    "Gemfile.lock",
    "Cargo.lock",
    "composer.lock",
    "poetry.lock",
    "Pipfile.lock",
})


@dataclass
class GitActivity:
    """Commits of the selected authors in one repository."""
    commits: int = 0
    files_changed: Set[str] = field(default_factory=set)  # absolute paths
    lines_added: int = 0
    lines_removed: int = 0
    commit_dates: Set[date] = field(default_factory=set)


def get_global_user_email() -> Optional[str]:
    """user.email from the global git config, None when unset or git is unusable"""
    try:
        return Git().config("--global", "--get", "user.email").strip() or None
    except (GitError, OSError) as e:
        logger.debug(f"No global git user.email: {e}")
        return None


def read_git_activity(
    project_path: str | Path,
    since: date,
    until: date,
    author_emails: Collection[str],
) -> Optional[GitActivity]:
    """Collect the commits on any ref whose commit date lies in [since, until].

    Only commits authored by one of ``author_emails`` count; an empty
    collection counts every author. Merge commits add to the commit count
    but not to the file and line totals, and a file whose change counts no
    lines (binaries) is not reported as changed.

    Raises GitPython errors for broken repositories; callers decide how to
    treat them.

    Returns:
        GitActivity, or None when the directory is not a repository or no
        matching commit exists in the window
    """
    root = Path(project_path)
    if not (root / ".git").exists():
        return None

    emails = {email.lower() for email in author_emails}
    activity = GitActivity()

    repo = Repo(root)
    try:
        # Coarse git-side filter a day early; commit dates are checked exactly below
        for commit in repo.iter_commits("--all", since=(since - timedelta(days=1)).isoformat()):
            day = commit.committed_datetime.date()
            if day < since or day > until:
                continue
            if emails and (commit.author.email or "").lower() not in emails:
                continue

            activity.commits += 1
            activity.commit_dates.add(day)
            if len(commit.parents) > 1:
                continue

            for file_path, file_stats in commit.stats.files.items():
                if os.path.basename(file_path) in EXCLUDED_FILES:
                    continue
                added = file_stats.get("insertions", 0)
                removed = file_stats.get("deletions", 0)
                if not added and not removed:
                    continue
                activity.lines_added += added
                activity.lines_removed += removed
                activity.files_changed.add(str(root / file_path))
    finally:
        repo.close()

    return activity if activity.commits else None
