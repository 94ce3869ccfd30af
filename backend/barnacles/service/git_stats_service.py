"""
Git Stats Service

Commit activity of the configured authors across all active projects,
for the current week, the previous week or the current month.
"""

import asyncio
import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from git.exc import GitError

from barnacles.config import get_settings
from barnacles.config.logging_config import log_print
from barnacles.core.git_activity import GitActivity, get_global_user_email, read_git_activity
from barnacles.db.repository import ProjectRepository
from barnacles.db.schemas import GitStatsResponse

logger = logging.getLogger(__name__)

PERIOD_WEEK = "week"
PERIOD_MONTH = "month"
PERIOD_LAST_WEEK = "last-week"
PERIODS = (PERIOD_WEEK, PERIOD_MONTH, PERIOD_LAST_WEEK)


def period_range(period: str, today: date) -> Tuple[date, date]:
    """
    Inclusive date window of a period

    week is Monday to today, last-week the previous Monday to Sunday,
    month the first of the month to today.
    """
    if period == PERIOD_LAST_WEEK:
        monday = today - timedelta(days=today.weekday() + 7)
        return monday, monday + timedelta(days=6)
    if period == PERIOD_MONTH:
        return today.replace(day=1), today
    return today - timedelta(days=today.weekday()), today


def calculate_streak(commit_dates: Iterable[date], today: date) -> int:
    """Consecutive commit days ending at the latest one; 0 when that is older than yesterday"""
    days = sorted(set(commit_dates), reverse=True)
    if not days or (today - days[0]).days > 1:
        return 0

    streak = 1
    for newer, older in zip(days, days[1:]):
        if newer - older != timedelta(days=1):
            break
        streak += 1
    return streak


class GitStatsService:
    """
    Git activity service

    Authors are the configured ``git.author_emails`` plus the global
    git user.email; with neither, every author counts.
    """

    def __init__(
        self,
        author_emails: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        max_concurrent: Optional[int] = None,
    ):
        settings = get_settings()
        self.project_repo = ProjectRepository()
        self.author_emails = list(author_emails) if author_emails is not None else None
        self.timeout = timeout if timeout is not None else settings.git_stats_timeout
        self.max_concurrent = max(1, max_concurrent or settings.scan_max_concurrent)

    def _resolve_author_emails(self) -> List[str]:
        if self.author_emails is not None:
            return self.author_emails
        emails = list(get_settings().git_author_emails)
        global_email = get_global_user_email()
        if global_email:
            emails.append(global_email)
        return emails

    async def _project_activity(
        self,
        path: str,
        since: date,
        until: date,
        emails: List[str],
    ) -> Optional[GitActivity]:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(read_git_activity, path, since, until, emails),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Git activity lookup timed out for {path}")
            return None
        except (GitError, OSError, ValueError) as e:
            logger.debug(f"Git activity lookup failed for {path}: {e}")
            return None

    @log_print
    async def get_git_stats(self, period: str = PERIOD_WEEK, today: Optional[date] = None) -> GitStatsResponse:
        """
        Aggregate commit activity over every non-archived project

        Args:
            period: week, month or last-week; anything else means week
            today: Reference day, the current date when omitted

        Returns:
            GitStatsResponse with totals, distinct files and the streak
        """
        period = period if period in PERIODS else PERIOD_WEEK
        today = today or date.today()
        since, until = period_range(period, today)

        emails = await asyncio.to_thread(self._resolve_author_emails)
        projects = await self.project_repo.list_projects(include_archived=False)

        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def read_one(path: str) -> Optional[GitActivity]:
            async with semaphore:
                return await self._project_activity(path, since, until, emails)

        activities = await asyncio.gather(*(read_one(p.path) for p in projects))

        stats = GitStatsResponse(period=period)
        files_changed = set()
        commit_dates = set()
        for activity in activities:
            if activity is None:
                continue
            stats.commits += activity.commits
            stats.lines_added += activity.lines_added
            stats.lines_removed += activity.lines_removed
            stats.projects_worked_on += 1
            files_changed |= activity.files_changed
            commit_dates |= activity.commit_dates

        stats.files_changed = len(files_changed)
        stats.streak = calculate_streak(commit_dates, today)
        return stats
