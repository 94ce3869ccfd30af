"""
Project Repository

Data access for the project table
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from barnacles.db.models import Project, Technology, project_technology
from barnacles.db.repository.base_repository import BaseRepository
from barnacles.db.session import async_with_session


class ProjectRepository(BaseRepository[Project]):
    """Project repository with specialized queries"""

    def __init__(self):
        super().__init__(Project)

    @async_with_session
    async def get_project_by_id(self, session: AsyncSession, project_id: int) -> Optional[Project]:
        """Get project by ID"""
        return await self.get_by_id(session, project_id)

    @async_with_session
    async def get_project_by_path(self, session: AsyncSession, path: str) -> Optional[Project]:
        """Get project by its absolute path"""
        return await self.get_one_by(session, path=path)

    @async_with_session
    async def list_projects(
        self,
        session: AsyncSession,
        search: Optional[str] = None,
        technology_slugs: Optional[Sequence[str]] = None,
        include_archived: bool = False,
    ) -> List[Project]:
        """
        List projects, newest last_modified first

        Args:
            search: Substring matched against name or path
            technology_slugs: Keep projects linked to any of these technologies
            include_archived: Archived projects are hidden unless set
        """
        stmt = select(Project)

        if not include_archived:
            stmt = stmt.where(Project.archived_at.is_(None))

        if search:
            # % and _ in the search text match literally
            stmt = stmt.where(or_(
                Project.name.contains(search, autoescape=True),
                Project.path.contains(search, autoescape=True),
            ))

        if technology_slugs:
            linked = (
                select(project_technology.c.project_id)
                .join(Technology, Technology.id == project_technology.c.technology_id)
                .where(Technology.slug.in_(list(technology_slugs)))
            )
            stmt = stmt.where(Project.id.in_(linked))

        stmt = stmt.order_by(Project.last_modified.desc(), Project.id)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @async_with_session
    async def list_all_projects(self, session: AsyncSession) -> List[Project]:
        """Every project, archived ones included"""
        return await self.get_multi(session, order_by="id")

    @async_with_session
    async def upsert_project(self, session: AsyncSession, path: str, values: Dict[str, Any]) -> Project:
        """
        Insert or update the project identified by path

        Preferences and favorite/archive state of an existing row are kept.
        """
        project = await self.get_one_by(session, path=path)
        if project is None:
            return await self.create(session, values, path=path)
        return await self.update(session, project, values)

    @async_with_session
    async def update_project(self, session: AsyncSession, project_id: int, **values) -> Optional[Project]:
        """Update columns of a project, None when it does not exist"""
        project = await self.get_by_id(session, project_id)
        if not project:
            return None
        return await self.update(session, project, values)

    @async_with_session
    async def toggle_favorite(self, session: AsyncSession, project_id: int) -> Optional[bool]:
        """Flip the favorite flag and return the new value"""
        project = await self.get_by_id(session, project_id)
        if not project:
            return None
        project = await self.update(session, project, is_favorite=not project.is_favorite)
        return project.is_favorite

    @async_with_session
    async def set_archived(self, session: AsyncSession, project_id: int, archived: bool) -> Optional[Project]:
        """Archive (soft delete) or restore a project"""
        project = await self.get_by_id(session, project_id)
        if not project:
            return None
        return await self.update(session, project, archived_at=datetime.now() if archived else None)

    @async_with_session
    async def delete_project(self, session: AsyncSession, project_id: int) -> Optional[Project]:
        """Delete project, stats and technology links go with it"""
        return await self.delete(session, project_id)
