"""
Project Schemas

Pydantic models for Project validation and serialization
"""

from typing import List, Optional
from datetime import datetime
from pydantic import Field

from .common import CamelModel
from .stats import ProjectStatsResponse
from .technology import TechnologyResponse


class ProjectResponse(CamelModel):
    """Schema for project response"""
    id: int
    path: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    is_favorite: bool = False
    archived_at: Optional[datetime] = None
    preferred_ide: Optional[str] = None
    preferred_terminal: Optional[str] = None
    last_modified: Optional[datetime] = None
    size: Optional[int] = None
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None


class ProjectDetailResponse(ProjectResponse):
    """Project with its technologies and stats"""
    technologies: List[TechnologyResponse] = Field(default_factory=list)
    stats: Optional[ProjectStatsResponse] = None


class ProjectPreferencesUpdate(CamelModel):
    """Schema for updating IDE/terminal preferences, unset fields are left alone"""
    preferred_ide: Optional[str] = Field(None, max_length=128)
    preferred_terminal: Optional[str] = Field(None, max_length=128)


class DeletePackagesResponse(CamelModel):
    """Bytes freed by removing dependency directories"""
    deleted_size: int
