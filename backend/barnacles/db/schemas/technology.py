"""
Technology Schemas

Pydantic models for Technology serialization
"""

from typing import Optional

from .common import CamelModel


class TechnologyResponse(CamelModel):
    """Schema for a catalog technology"""
    id: Optional[int] = None
    name: str
    slug: str
    icon: Optional[str] = None
    color: Optional[str] = None
