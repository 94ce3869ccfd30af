"""
Database Schemas

Pydantic models for request/response validation.
"""

from .common import CamelModel
from .technology import TechnologyResponse
from .stats import (
    LanguageStatResponse,
    ProjectStatsResponse,
    GitStatsResponse,
)
from .scan import (
    ScanRequest,
    InspectRequest,
    ScanStatsSchema,
    GitInfoSchema,
    ProjectInfoSchema,
)
from .project import (
    ProjectResponse,
    ProjectDetailResponse,
    ProjectPreferencesUpdate,
    DeletePackagesResponse,
)

__all__ = [
    "CamelModel",
    # Technology
    "TechnologyResponse",
    # Stats
    "LanguageStatResponse",
    "ProjectStatsResponse",
    "GitStatsResponse",
    # Scan
    "ScanRequest",
    "InspectRequest",
    "ScanStatsSchema",
    "GitInfoSchema",
    "ProjectInfoSchema",
    # Project
    "ProjectResponse",
    "ProjectDetailResponse",
    "ProjectPreferencesUpdate",
    "DeletePackagesResponse",
]
