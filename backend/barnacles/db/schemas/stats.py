"""
Project Stats Schemas

Pydantic models for persisted project statistics
"""

from typing import Dict, Optional
from datetime import datetime
from pydantic import Field

from .common import CamelModel


class LanguageStatResponse(CamelModel):
    """Share of a project's files attributed to one technology"""
    file_count: int = Field(..., ge=0)
    percentage: float = Field(..., ge=0, le=100, description="Percent with one decimal, e.g. 52.5")
    lines_of_code: int = Field(0, ge=0)


class ProjectStatsResponse(CamelModel):
    """
    Schema for persisted project stats

    language_stats is None when it was not requested, which is distinct
    from an empty mapping.
    """
    id: int
    project_id: int
    file_count: Optional[int] = None
    directory_count: Optional[int] = None
    lines_of_code: Optional[int] = None
    third_party_size: Optional[int] = None
    git_branch: Optional[str] = None
    git_status: Optional[str] = None
    git_remote_url: Optional[str] = None
    last_commit_date: Optional[datetime] = None
    last_commit_message: Optional[str] = None
    has_uncommitted_changes: Optional[bool] = None
    language_stats: Optional[Dict[str, LanguageStatResponse]] = None
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None


class GitStatsResponse(CamelModel):
    """Commit activity of the configured authors across all active projects"""
    commits: int = 0
    files_changed: int = 0
    projects_worked_on: int = 0
    lines_added: int = 0
    lines_removed: int = 0
    streak: int = Field(0, description="Consecutive days with commits up to today or yesterday")
    period: str = Field("week", description="week, month or last-week")
