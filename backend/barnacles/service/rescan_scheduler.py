"""
Rescan Scheduler

Periodic quick rescan of every known project, archived ones included.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from barnacles.config import get_settings
from barnacles.db.repository import ProjectRepository
from barnacles.service.project_service import ProjectService

logger = logging.getLogger(__name__)


@dataclass
class RescanResult:
    """Outcome of one pass over all projects."""
    updated: int = 0
    skipped: int = 0
    errors: int = 0


class RescanScheduler:
    """Background task refreshing Git info and modification times"""

    def __init__(
        self,
        project_service: Optional[ProjectService] = None,
        interval_minutes: Optional[float] = None,
        initial_delay_seconds: Optional[float] = None,
    ):
        settings = get_settings()
        self.project_service = project_service or ProjectService()
        self.project_repo = ProjectRepository()
        self.interval_minutes = interval_minutes or settings.rescan_interval_minutes
        self.initial_delay_seconds = (
            settings.rescan_initial_delay_seconds if initial_delay_seconds is None else initial_delay_seconds
        )
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def rescan_all_projects(self) -> RescanResult:
        """Quick rescan every project; failures are logged and counted"""
        result = RescanResult()
        projects = await self.project_repo.list_all_projects()
        logger.info(f"Starting periodic rescan of {len(projects)} projects")

        for project in projects:
            try:
                updated = await self.project_service.quick_rescan_project(project.path)
            except Exception as e:
                logger.error(f"Error rescanning project {project.path}: {e}")
                result.errors += 1
                continue
            if updated is None:
                result.skipped += 1
            else:
                result.updated += 1

        logger.info(
            f"Periodic rescan completed: {result.updated} updated, "
            f"{result.skipped} skipped, {result.errors} errors"
        )
        return result

    async def trigger(self) -> RescanResult:
        """Run one pass now, independent of the schedule"""
        return await self.rescan_all_projects()

    async def start(self):
        """Start the periodic loop, the first pass runs after the initial delay"""
        async def rescan_loop():
            await asyncio.sleep(self.initial_delay_seconds)
            while True:
                try:
                    await self.rescan_all_projects()
                except Exception as e:
                    logger.error(f"Error in rescan task: {e}")
                await asyncio.sleep(self.interval_minutes * 60)

        if self.is_running:
            logger.warning("Rescan scheduler is already running")
            return

        self._task = asyncio.create_task(rescan_loop())
        logger.info(f"Started project rescan scheduler (interval: {self.interval_minutes} minutes)")

    async def stop(self):
        """Stop the periodic loop"""
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Stopped project rescan scheduler")
