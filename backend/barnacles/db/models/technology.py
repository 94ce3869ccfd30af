"""
Technology Model

Process-wide technology catalog shared by projects through a join table
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Table

from barnacles.db.base import Base, BaseModel


project_technology = Table(
    "project_technology",
    Base.metadata,
    Column("project_id", Integer, ForeignKey("project.id", ondelete="CASCADE"), primary_key=True),
    Column("technology_id", Integer, ForeignKey("technology.id", ondelete="CASCADE"), primary_key=True),
    Column("create_time", DateTime, default=datetime.now),
)


class Technology(Base, BaseModel):
    """Catalog entry, created lazily the first time a scan detects it"""
    __tablename__ = "technology"

    name = Column(String(128), nullable=False, unique=True, comment="Display name")
    slug = Column(String(64), nullable=False, unique=True, comment="Stable identifier")
    icon = Column(String(128), nullable=True, comment="Icon key")
    color = Column(String(16), nullable=True, comment="Brand color")

    def __repr__(self):
        return f"<Technology(id={self.id}, slug={self.slug})>"
