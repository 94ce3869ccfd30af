"""
Project Stats Repository

Data access for project_stats and project_language_stats
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from barnacles.db.models import Project, ProjectStats, ProjectLanguageStats
from barnacles.db.repository.base_repository import BaseRepository
from barnacles.db.session import async_with_session


class StatsRepository(BaseRepository[ProjectStats]):
    """Stats repository; language rows are always handled as a whole set"""

    def __init__(self):
        super().__init__(ProjectStats)

    @async_with_session
    async def get_stats_by_project_id(self, session: AsyncSession, project_id: int) -> Optional[ProjectStats]:
        """Stats row of a project, None when never scanned"""
        return await self.get_one_by(session, project_id=project_id)

    @async_with_session
    async def get_language_stats(self, session: AsyncSession, project_id: int) -> List[ProjectLanguageStats]:
        """Language rows of a project ordered by slug"""
        stmt = (
            select(ProjectLanguageStats)
            .where(ProjectLanguageStats.project_id == project_id)
            .order_by(ProjectLanguageStats.technology_slug)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @async_with_session
    async def save_stats(
        self,
        session: AsyncSession,
        project_id: int,
        values: Dict[str, Any],
        language_rows: Optional[List[Dict[str, Any]]] = None,
    ) -> bool:
        """
        Upsert the stats row and optionally replace the language rows

        Both writes share one transaction.

        Args:
            project_id: Owning project
            values: Every scalar stats column, written unconditionally
            language_rows: New language set, None leaves the stored rows untouched

        Returns:
            False when the project does not exist
        """
        if await session.get(Project, project_id) is None:
            return False

        stats = await self.get_one_by(session, project_id=project_id)
        if stats is None:
            await self.create(session, values, project_id=project_id)
        else:
            await self.update(session, stats, values)

        if language_rows is not None:
            await self._replace_language_rows(session, project_id, language_rows)
        return True

    @async_with_session
    async def replace_language_stats(
        self,
        session: AsyncSession,
        project_id: int,
        language_rows: List[Dict[str, Any]],
    ) -> bool:
        """
        Delete every language row of the project, then insert the given ones

        Returns:
            False when the project does not exist
        """
        if await session.get(Project, project_id) is None:
            return False

        await self._replace_language_rows(session, project_id, language_rows)
        return True

    async def _replace_language_rows(
        self,
        session: AsyncSession,
        project_id: int,
        language_rows: List[Dict[str, Any]],
    ) -> None:
        await session.execute(
            delete(ProjectLanguageStats).where(ProjectLanguageStats.project_id == project_id)
        )
        session.add_all(
            ProjectLanguageStats(project_id=project_id, **row) for row in language_rows
        )
        await session.flush()
