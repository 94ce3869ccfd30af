"""
Database Repositories

Repository pattern implementation for data access.
"""

from .base_repository import BaseRepository
from .project_repository import ProjectRepository
from .stats_repository import StatsRepository
from .technology_repository import TechnologyRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "StatsRepository",
    "TechnologyRepository",
]
