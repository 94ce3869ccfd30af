"""
API Routers Module

FastAPI routers
"""

from .project_router import project_router
from .technology_router import technology_router

__all__ = [
    "project_router",
    "technology_router",
]
