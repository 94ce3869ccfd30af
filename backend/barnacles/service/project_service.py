"""
Project Service

Business logic for discovered projects: scanning and saving, rescans,
archive/favorite state, preferences and the per-project file actions.
"""

import asyncio
import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from barnacles.config import get_settings
from barnacles.config.logging_config import log_print
from barnacles.core.detector import get_project_metadata, is_valid_project
from barnacles.core.icon_finder import find_project_icon
from barnacles.core.scanner import ProjectInfo, ProjectScanStats, ProjectScanner, project_scanner
from barnacles.db.models import Project
from barnacles.db.repository import ProjectRepository, StatsRepository, TechnologyRepository
from barnacles.db.session import async_session_scope
from barnacles.db.schemas import (
    DeletePackagesResponse,
    ProjectDetailResponse,
    ProjectInfoSchema,
    ProjectPreferencesUpdate,
    ProjectStatsResponse,
)
from barnacles.service.filesystem_service import FileSystemService
from barnacles.service.package_service import PackageService
from barnacles.service.stats_service import StatsService, scan_language_rows, stats_values
from barnacles.service.technology_service import TechnologyService, resolve_detectors
from barnacles.utils.exceptions import NotFoundError, ScanError

logger = logging.getLogger(__name__)


class ProjectService:
    """
    Project service

    Methods raise NotFoundError for unknown project IDs.
    """

    def __init__(self, scanner: Optional[ProjectScanner] = None):
        self.scanner = scanner or project_scanner
        self.project_repo = ProjectRepository()
        self.stats_repo = StatsRepository()
        self.technology_repo = TechnologyRepository()
        self.stats_service = StatsService()
        self.technology_service = TechnologyService()
        self.package_service = PackageService()
        self.filesystem_service = FileSystemService()

    async def _require_project(self, project_id: int) -> Project:
        project = await self.project_repo.get_project_by_id(project_id=project_id)
        if not project:
            raise NotFoundError(
                message=f"Project {project_id} not found",
                resource_type="project",
                resource_id=project_id,
            )
        return project

    async def _with_details(self, project: Project, include_language_stats: bool = True) -> ProjectDetailResponse:
        technologies = await self.technology_service.get_project_technologies(project.id)
        stats = await self.stats_service.get_project_stats(
            project.id, include_language_stats=include_language_stats
        )
        detail = ProjectDetailResponse.model_validate(project)
        detail.technologies = technologies
        detail.stats = stats
        return detail

    @log_print
    async def list_projects(
        self,
        search: Optional[str] = None,
        technologies: Optional[Sequence[str]] = None,
        include_archived: bool = False,
    ) -> List[ProjectDetailResponse]:
        """
        List projects, most recently modified first

        Args:
            search: Substring of the name or path
            technologies: Keep projects using any of these technology slugs
            include_archived: Archived projects are hidden by default

        Returns:
            Projects with technologies and stats, without language breakdown
        """
        projects = await self.project_repo.list_projects(
            search=search,
            technology_slugs=list(technologies) if technologies else None,
            include_archived=include_archived,
        )
        return [await self._with_details(p, include_language_stats=False) for p in projects]

    @log_print
    async def get_project(self, project_id: int) -> ProjectDetailResponse:
        """Project with technologies and full stats"""
        project = await self._require_project(project_id)
        return await self._with_details(project)

    @log_print
    async def get_project_stats(
        self,
        project_id: int,
        include_language_stats: bool = True,
    ) -> Optional[ProjectStatsResponse]:
        """Stats of a known project, None when it was never scanned"""
        await self._require_project(project_id)
        return await self.stats_service.get_project_stats(
            project_id, include_language_stats=include_language_stats
        )

    @log_print
    async def save_project(self, project_info: ProjectInfo) -> ProjectDetailResponse:
        """
        Persist a scan result

        Upserts by path: preferences, favorite and archive state of a known
        project are kept, everything the scan measured is overwritten.
        """
        icon = await asyncio.to_thread(find_project_icon, project_info.path)
        values: Dict[str, Any] = {
            "name": project_info.name,
            "description": project_info.description,
            "icon": icon,
            "last_modified": project_info.stats.last_modified,
        }
        if project_info.stats.size is not None:
            values["size"] = project_info.stats.size

        detectors = resolve_detectors(project_info.technologies)

        # Row, technology links and stats are written in one transaction
        async with async_session_scope() as session:
            project = await self.project_repo.upsert_project(
                session=session, path=project_info.path, values=values
            )
            await self.technology_repo.set_project_technologies(
                session=session, project_id=project.id, detectors=detectors
            )
            await self.stats_repo.save_stats(
                session=session,
                project_id=project.id,
                values=stats_values(project_info),
                language_rows=scan_language_rows(project_info),
            )

        return await self._with_details(project)

    @log_print
    async def inspect_path(self, path: str) -> ProjectInfoSchema:
        """Scan one directory without saving it"""
        project_info = await self.scanner.scan_project(path)
        return ProjectInfoSchema.model_validate(project_info)

    @log_print
    async def scan_and_save(
        self,
        directories: Optional[Sequence[str]] = None,
        max_depth: Optional[int] = None,
    ) -> List[ProjectDetailResponse]:
        """
        Discover projects under the scan roots and save each of them

        Args:
            directories: Scan roots, the configured ones when omitted
            max_depth: Recursion depth, the configured default when omitted
        """
        roots = list(directories) if directories else list(get_settings().scan_directories)
        scanned = await self.scanner.scan_directories(roots, max_depth)

        # SQLite has a single writer, save one project at a time
        saved = []
        for project_info in scanned:
            saved.append(await self.save_project(project_info))
        logger.info(f"Scanned {len(roots)} roots, saved {len(saved)} projects")
        return saved

    @log_print
    async def rescan_project(self, project_id: int) -> ProjectDetailResponse:
        """Full rescan of a known project"""
        project = await self._require_project(project_id)
        project_info = await self.scanner.scan_project(project.path)
        return await self.save_project(project_info)

    async def _quick_scan(self, project: Project) -> Optional[ProjectInfo]:
        path = project.path
        if not await asyncio.to_thread(is_valid_project, path):
            return None

        try:
            mtime = await asyncio.to_thread(os.path.getmtime, path)
        except OSError:
            return None

        metadata, git_info = await asyncio.gather(
            asyncio.to_thread(get_project_metadata, path),
            self.scanner.git_inspector.inspect(path),
        )
        technologies = await self.technology_service.get_project_technologies(project.id)
        previous = await self.stats_service.get_project_stats(project.id, include_language_stats=False)

        return ProjectInfo(
            name=metadata["name"],
            path=path,
            description=metadata["description"],
            technologies=[t.slug for t in technologies],
            stats=ProjectScanStats(
                file_count=(previous.file_count if previous else None) or 0,
                directory_count=(previous.directory_count if previous else None) or 0,
                lines_of_code=(previous.lines_of_code if previous else None) or 0,
                third_party_size=(previous.third_party_size if previous else None) or 0,
                # Empty so the stored language breakdown is kept
                language_stats={},
                last_modified=datetime.fromtimestamp(mtime),
                size=project.size,
            ),
            git_info=git_info,
        )

    @log_print
    async def quick_rescan_project(self, path: str) -> Optional[ProjectDetailResponse]:
        """
        Refresh Git info and modification time of a known project

        File counts and the language breakdown are carried over from the
        previous full scan.

        Returns:
            The updated project, or None when the path is unknown, gone or no
            longer a project
        """
        project = await self.project_repo.get_project_by_path(path=path)
        if project is None:
            return None

        project_info = await self._quick_scan(project)
        if project_info is None:
            return None
        return await self.save_project(project_info)

    @log_print
    async def delete_project(self, project_id: int) -> None:
        """Remove a project with its stats and technology links"""
        deleted = await self.project_repo.delete_project(project_id=project_id)
        if deleted is None:
            raise NotFoundError(message=f"Project {project_id} not found", resource_type="project", resource_id=project_id)

    @log_print
    async def archive_project(self, project_id: int) -> ProjectDetailResponse:
        """Soft-delete: hidden from the default list"""
        await self._require_project(project_id)
        project = await self.project_repo.set_archived(project_id=project_id, archived=True)
        return await self._with_details(project)

    @log_print
    async def unarchive_project(self, project_id: int) -> ProjectDetailResponse:
        await self._require_project(project_id)
        project = await self.project_repo.set_archived(project_id=project_id, archived=False)
        return await self._with_details(project)

    @log_print
    async def toggle_favorite(self, project_id: int) -> bool:
        """Flip the favorite flag, returns the new value"""
        is_favorite = await self.project_repo.toggle_favorite(project_id=project_id)
        if is_favorite is None:
            raise NotFoundError(message=f"Project {project_id} not found", resource_type="project", resource_id=project_id)
        return is_favorite

    @log_print
    async def update_preferences(self, project_id: int, data: ProjectPreferencesUpdate) -> ProjectDetailResponse:
        """Set preferred IDE and/or terminal; explicit nulls clear them"""
        await self._require_project(project_id)
        changes = data.model_dump(exclude_unset=True)
        project = await self.project_repo.update_project(project_id=project_id, **changes)
        return await self._with_details(project)

    @log_print
    async def get_readme(self, project_id: int) -> Optional[str]:
        project = await self._require_project(project_id)
        return await asyncio.to_thread(self.filesystem_service.get_readme, project.path)

    @log_print
    async def get_package_scripts(self, project_id: int) -> Dict[str, Any]:
        project = await self._require_project(project_id)
        return await asyncio.to_thread(self.package_service.get_package_scripts, project.path)

    @log_print
    async def get_composer_scripts(self, project_id: int) -> Dict[str, Any]:
        project = await self._require_project(project_id)
        return await asyncio.to_thread(self.package_service.get_composer_scripts, project.path)

    @log_print
    async def detect_package_manager(self, project_id: int) -> str:
        project = await self._require_project(project_id)
        return await asyncio.to_thread(self.package_service.detect_package_manager, project.path)

    @log_print
    async def delete_packages(self, project_id: int) -> DeletePackagesResponse:
        """
        Delete the project's dependency directories and rescan it

        Returns:
            Bytes removed, measured right before each directory was deleted
        """
        project = await self._require_project(project_id)
        deleted_size = await asyncio.to_thread(
            self.filesystem_service.delete_third_party_packages, project.path
        )
        try:
            await self.rescan_project(project_id)
        except ScanError as e:
            logger.warning(f"Rescan after package deletion failed for {project.path}: {e.message}")
        return DeletePackagesResponse(deleted_size=deleted_size)
