"""
Database Models

SQLAlchemy ORM models for the application.
"""

from .technology import Technology, project_technology
from .project import Project
from .project_stats import ProjectStats, ProjectLanguageStats

__all__ = [
    "Technology",
    "project_technology",
    "Project",
    "ProjectStats",
    "ProjectLanguageStats",
]
