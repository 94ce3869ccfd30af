"""
Service Module

Business logic layer
"""

from .stats_service import StatsService
from .technology_service import TechnologyService
from .package_service import PackageService
from .filesystem_service import FileSystemService
from .project_service import ProjectService
from .rescan_scheduler import RescanScheduler, RescanResult

__all__ = [
    "StatsService",
    "TechnologyService",
    "PackageService",
    "FileSystemService",
    "ProjectService",
    "RescanScheduler",
    "RescanResult",
]
