"""
Scan Schemas

Request bodies for scan triggers and the camelCase scan output record
"""

from typing import Dict, List, Optional
from datetime import datetime
from pydantic import Field

from .common import CamelModel
from .stats import LanguageStatResponse


class ScanRequest(CamelModel):
    """Schema for scanning directories"""
    directories: Optional[List[str]] = Field(None, description="Scan roots, defaults to the configured ones")
    max_depth: Optional[int] = Field(None, ge=0, description="Recursion depth below each root")


class InspectRequest(CamelModel):
    """Schema for scanning one directory without saving it"""
    path: str = Field(..., min_length=1, description="Directory to scan")


class ScanStatsSchema(CamelModel):
    """Metrics gathered for one project"""
    file_count: int
    directory_count: int
    lines_of_code: int
    language_stats: Dict[str, LanguageStatResponse] = Field(default_factory=dict)
    last_modified: Optional[datetime] = None
    size: Optional[int] = None
    third_party_size: Optional[int] = None


class GitInfoSchema(CamelModel):
    """Repository state of one project"""
    branch: Optional[str] = None
    status: Optional[str] = None
    remote_url: Optional[str] = None
    last_commit_date: Optional[datetime] = None
    last_commit_message: Optional[str] = None
    has_uncommitted_changes: Optional[bool] = None


class ProjectInfoSchema(CamelModel):
    """Scan output record for one project"""
    name: str
    path: str
    description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    stats: ScanStatsSchema
    git_info: Optional[GitInfoSchema] = None
