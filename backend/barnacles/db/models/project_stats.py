"""
Project Stats Models

Aggregate scan results and per-language breakdown, overwritten on each scan
"""

from sqlalchemy import Column, Integer, BigInteger, String, Text, Boolean, DateTime, ForeignKey, Index, UniqueConstraint

from barnacles.db.base import Base, BaseModel


class ProjectStats(Base, BaseModel):
    """
    One-to-one with Project

    Git fields are independently nullable, a row may hold a branch without a remote.
    """
    __tablename__ = "project_stats"

    project_id = Column(
        Integer,
        ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        comment="Owning project",
    )
    file_count = Column(Integer, nullable=True, comment="Files counted by the scanner")
    directory_count = Column(Integer, nullable=True, comment="Directories counted by the scanner")
    lines_of_code = Column(Integer, nullable=True, comment="Total lines in text files")
    third_party_size = Column(BigInteger, nullable=True, comment="Bytes in node_modules, vendor, venv and similar")
    git_branch = Column(String(255), nullable=True, comment="Current branch")
    git_status = Column(String(32), nullable=True, comment="clean / modified")
    git_remote_url = Column(String(1024), nullable=True, comment="origin remote URL")
    last_commit_date = Column(DateTime, nullable=True, comment="Committer date of HEAD")
    last_commit_message = Column(Text, nullable=True, comment="Subject of HEAD")
    has_uncommitted_changes = Column(Boolean, nullable=True, comment="Dirty working tree")

    def __repr__(self):
        return f"<ProjectStats(project_id={self.project_id}, file_count={self.file_count})>"


class ProjectLanguageStats(Base, BaseModel):
    """
    One-to-many with Project, keyed by technology slug

    percentage is fixed point with one implied decimal: 52.5% is stored as 525.
    """
    __tablename__ = "project_language_stats"

    project_id = Column(
        Integer,
        ForeignKey("project.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning project",
    )
    technology_slug = Column(String(64), nullable=False, comment="Technology slug, e.g. typescript")
    file_count = Column(Integer, nullable=False, comment="Files with this language's extensions")
    percentage = Column(Integer, nullable=False, comment="Share of files x10")
    lines_of_code = Column(Integer, nullable=False, comment="Lines in this language's files")

    __table_args__ = (
        UniqueConstraint("project_id", "technology_slug", name="uq_language_stats_project_slug"),
        Index("idx_language_stats_project_id", "project_id"),
    )

    def __repr__(self):
        return (
            f"<ProjectLanguageStats(project_id={self.project_id}, "
            f"slug={self.technology_slug}, percentage={self.percentage})>"
        )
