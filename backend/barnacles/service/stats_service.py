"""
Stats Service

Persistence of scan metrics: one stats row per project plus the
per-technology language breakdown.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from barnacles.config.logging_config import log_print
from barnacles.core.file_counter import LanguageStat, decode_percentage, encode_percentage
from barnacles.core.scanner import ProjectInfo
from barnacles.db.repository import StatsRepository
from barnacles.db.schemas import LanguageStatResponse, ProjectStatsResponse

logger = logging.getLogger(__name__)

LanguageStatsInput = Mapping[str, Union[LanguageStat, LanguageStatResponse, Mapping]]


def _language_row(slug: str, stat) -> Dict:
    if isinstance(stat, Mapping):
        file_count = stat.get("file_count", stat.get("fileCount", 0))
        percentage = stat.get("percentage", 0)
        lines = stat.get("lines_of_code", stat.get("linesOfCode", 0))
    else:
        file_count, percentage, lines = stat.file_count, stat.percentage, stat.lines_of_code
    return {
        "technology_slug": slug,
        "file_count": int(file_count),
        "percentage": encode_percentage(percentage),
        "lines_of_code": int(lines or 0),
    }


def stats_values(project_info: ProjectInfo) -> Dict[str, Any]:
    """Scalar stats columns of a scan result; missing Git info clears the Git columns"""
    stats = project_info.stats
    git = project_info.git_info
    return {
        "file_count": stats.file_count,
        "directory_count": stats.directory_count,
        "lines_of_code": stats.lines_of_code,
        "third_party_size": stats.third_party_size,
        "git_branch": git.branch if git else None,
        "git_status": git.status if git else None,
        "git_remote_url": git.remote_url if git else None,
        "last_commit_date": git.last_commit_date if git else None,
        "last_commit_message": git.last_commit_message if git else None,
        "has_uncommitted_changes": git.has_uncommitted_changes if git else None,
    }


def scan_language_rows(project_info: ProjectInfo) -> Optional[List[Dict[str, Any]]]:
    """Language rows of a scan result, None for an empty map so stored rows are kept"""
    language_stats = project_info.stats.language_stats
    if not language_stats:
        return None
    return [_language_row(slug, stat) for slug, stat in language_stats.items()]


class StatsService:
    """
    Stats persistence service

    A project that has never been scanned has no stats; reads return None
    for it rather than an empty object.
    """

    def __init__(self):
        self.stats_repo = StatsRepository()

    @log_print
    async def get_project_stats(
        self,
        project_id: int,
        include_language_stats: bool = True,
    ) -> Optional[ProjectStatsResponse]:
        """
        Read the stats of a project

        Args:
            project_id: Project ID
            include_language_stats: Attach the language breakdown; when False
                the field stays None instead of an empty mapping

        Returns:
            ProjectStatsResponse, or None when no stats row exists
        """
        stats = await self.stats_repo.get_stats_by_project_id(project_id=project_id)
        if stats is None:
            return None

        response = ProjectStatsResponse.model_validate(stats)
        if include_language_stats:
            response.language_stats = await self._read_language_stats(project_id)
        return response

    async def _read_language_stats(self, project_id: int) -> Dict[str, LanguageStatResponse]:
        rows = await self.stats_repo.get_language_stats(project_id=project_id)
        return {
            row.technology_slug: LanguageStatResponse(
                file_count=row.file_count,
                percentage=decode_percentage(row.percentage),
                lines_of_code=row.lines_of_code,
            )
            for row in rows
        }

    @log_print
    async def save_project_stats(
        self,
        project_id: int,
        project_info: ProjectInfo,
    ) -> Optional[ProjectStatsResponse]:
        """
        Upsert the stats of a project from a scan result

        Every scalar field is overwritten, missing Git info clears the Git
        columns. A non-empty language map replaces the stored set; an empty
        one (quick rescans) leaves it untouched.

        Returns:
            The stored stats, or None when the project does not exist
        """
        saved = await self.stats_repo.save_stats(
            project_id=project_id,
            values=stats_values(project_info),
            language_rows=scan_language_rows(project_info),
        )
        if not saved:
            logger.warning(f"Cannot save stats, project {project_id} does not exist")
            return None

        return await self.get_project_stats(project_id)

    @log_print
    async def save_language_stats(
        self,
        project_id: int,
        language_stats: LanguageStatsInput,
    ) -> Optional[Dict[str, LanguageStatResponse]]:
        """
        Replace the whole language set of a project

        Percentages are stored x10 (52.5 -> 525).

        Returns:
            The stored breakdown, or None when the project does not exist
        """
        rows = [_language_row(slug, stat) for slug, stat in language_stats.items()]
        saved = await self.stats_repo.replace_language_stats(project_id=project_id, language_rows=rows)
        if not saved:
            logger.warning(f"Cannot save language stats, project {project_id} does not exist")
            return None

        return await self._read_language_stats(project_id)
