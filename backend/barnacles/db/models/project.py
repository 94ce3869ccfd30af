"""
Project Model

Discovered project on disk, created on first scan and updated on rescan
"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, BigInteger, Index
from barnacles.db.base import Base, BaseModel


class Project(Base, BaseModel):
    """
    Project table

    One row per project directory. Stats, language stats and technology links
    are owned by the project and removed with it.
    """
    __tablename__ = "project"

    path = Column(String(4096), nullable=False, unique=True, comment="Absolute project path")
    name = Column(String(512), nullable=False, comment="Display name")
    description = Column(Text, nullable=True, comment="Description from package.json")
    icon = Column(String(1024), nullable=True, comment="Icon path relative to the project root")
    is_favorite = Column(Boolean, nullable=False, default=False, comment="Favorite flag")
    archived_at = Column(DateTime, nullable=True, comment="Soft-delete timestamp")
    preferred_ide = Column(String(128), nullable=True, comment="Preferred IDE identifier")
    preferred_terminal = Column(String(128), nullable=True, comment="Preferred terminal identifier")
    last_modified = Column(DateTime, nullable=True, comment="Newest file mtime seen by the scanner")
    size = Column(BigInteger, nullable=True, comment="On-disk size in bytes")

    __table_args__ = (
        Index("idx_project_last_modified", "last_modified"),
    )

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name}, path={self.path})>"
