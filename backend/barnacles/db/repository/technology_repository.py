"""
Technology Repository

Data access for the technology catalog and project links
"""

from typing import List, Sequence

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from barnacles.core.technology_detectors import TechnologyDetector
from barnacles.db.models import Technology, project_technology
from barnacles.db.repository.base_repository import BaseRepository
from barnacles.db.session import async_with_session


class TechnologyRepository(BaseRepository[Technology]):
    """Technology repository"""

    def __init__(self):
        super().__init__(Technology)

    @async_with_session
    async def list_technologies(self, session: AsyncSession) -> List[Technology]:
        """Every stored technology ordered by name"""
        return await self.get_multi(session, order_by="name")

    @async_with_session
    async def get_project_technologies(self, session: AsyncSession, project_id: int) -> List[Technology]:
        """Technologies linked to a project"""
        stmt = (
            select(Technology)
            .join(project_technology, project_technology.c.technology_id == Technology.id)
            .where(project_technology.c.project_id == project_id)
            .order_by(Technology.name)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @async_with_session
    async def set_project_technologies(
        self,
        session: AsyncSession,
        project_id: int,
        detectors: Sequence[TechnologyDetector],
    ) -> None:
        """Replace the project's links, creating catalog rows on first sight"""
        await session.execute(
            delete(project_technology).where(project_technology.c.project_id == project_id)
        )
        for detector in detectors:
            technology = await self._ensure_technology(session, detector)
            await session.execute(
                insert(project_technology).values(project_id=project_id, technology_id=technology.id)
            )
        await session.flush()

    async def _ensure_technology(self, session: AsyncSession, detector: TechnologyDetector) -> Technology:
        technology = await self.get_one_by(session, slug=detector.slug)
        if technology is not None:
            return technology

        return await self.create(
            session,
            name=detector.name,
            slug=detector.slug,
            icon=detector.icon,
            color=detector.color,
        )
