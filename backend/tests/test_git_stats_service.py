"""Tests for commit activity stats."""

from datetime import date
from pathlib import Path

import pytest
import pytest_asyncio
from git import Actor, Git

from barnacles.db.repository import ProjectRepository
from barnacles.service.git_stats_service import GitStatsService, calculate_streak, period_range


@pytest_asyncio.fixture
async def active_repo(database, git_repo):
    """
    The test repository registered as a project, with three commits made today:
      Initial commit            README.md (1 line)            test@example.com
      Add app                   app.py (2 lines), lock file   test@example.com
      Other work                other.txt (1 line)            other@example.com
    """
    workspace = Path(git_repo.working_tree_dir)
    (workspace / "app.py").write_text("a = 1\nb = 2\n")
    (workspace / "package-lock.json").write_text("{\n}\n")
    git_repo.index.add(["app.py", "package-lock.json"])
    git_repo.index.commit("Add app")

    other = Actor("Other Dev", "other@example.com")
    (workspace / "other.txt").write_text("x\n")
    git_repo.index.add(["other.txt"])
    git_repo.index.commit("Other work", author=other, committer=other)

    await ProjectRepository().upsert_project(path=str(workspace), values={"name": "Repo"})
    return git_repo


class TestPeriodRange:
    """Tests for period_range."""

    def test_midweek(self):
        wednesday = date(2024, 5, 8)
        assert period_range("week", wednesday) == (date(2024, 5, 6), wednesday)
        assert period_range("last-week", wednesday) == (date(2024, 4, 29), date(2024, 5, 5))
        assert period_range("month", wednesday) == (date(2024, 5, 1), wednesday)

    def test_sunday_belongs_to_the_week_before(self):
        sunday = date(2024, 5, 12)
        assert period_range("week", sunday) == (date(2024, 5, 6), sunday)
        assert period_range("last-week", sunday) == (date(2024, 4, 29), date(2024, 5, 5))

    def test_monday(self):
        monday = date(2024, 5, 6)
        assert period_range("week", monday) == (monday, monday)


class TestCalculateStreak:
    """Tests for calculate_streak."""

    def test_no_commits(self):
        assert calculate_streak([], date(2024, 5, 8)) == 0

    def test_consecutive_days_up_to_today(self):
        days = [date(2024, 5, 8), date(2024, 5, 7), date(2024, 5, 6), date(2024, 5, 3)]
        assert calculate_streak(days, date(2024, 5, 8)) == 3

    def test_streak_ending_yesterday_counts(self):
        assert calculate_streak([date(2024, 5, 7), date(2024, 5, 6)], date(2024, 5, 8)) == 2

    def test_broken_streak(self):
        """Test that a last commit before yesterday means no streak."""
        assert calculate_streak([date(2024, 5, 6), date(2024, 5, 5)], date(2024, 5, 8)) == 0

    def test_duplicate_days(self):
        assert calculate_streak([date(2024, 5, 8), date(2024, 5, 8)], date(2024, 5, 8)) == 1


class TestGitStatsService:
    """Tests for GitStatsService.get_git_stats."""

    @pytest.mark.asyncio
    async def test_author_activity(self, active_repo):
        """Test totals for one author; lock files and other authors are left out."""
        stats = await GitStatsService(author_emails=["TEST@example.com"]).get_git_stats("week")

        assert stats.period == "week"
        assert stats.commits == 2
        assert stats.lines_added == 3
        assert stats.lines_removed == 0
        assert stats.files_changed == 2
        assert stats.projects_worked_on == 1
        assert stats.streak == 1

    @pytest.mark.asyncio
    async def test_no_author_filter(self, active_repo):
        """Test that without author emails every commit counts."""
        stats = await GitStatsService(author_emails=[]).get_git_stats("month")

        assert stats.commits == 3
        assert stats.files_changed == 3

    @pytest.mark.asyncio
    async def test_previous_week_is_empty(self, active_repo):
        stats = await GitStatsService(author_emails=[]).get_git_stats("last-week")

        assert stats.period == "last-week"
        assert stats.commits == 0
        assert stats.projects_worked_on == 0
        assert stats.streak == 0

    @pytest.mark.asyncio
    async def test_unknown_period_means_week(self, active_repo):
        stats = await GitStatsService(author_emails=[]).get_git_stats("year")
        assert stats.period == "week"

    @pytest.mark.asyncio
    async def test_archived_and_non_repository_projects_are_skipped(self, active_repo, tmp_path):
        """Test that only active repositories contribute."""
        repo = ProjectRepository()
        project = await repo.get_project_by_path(path=active_repo.working_tree_dir)
        await repo.set_archived(project_id=project.id, archived=True)
        plain = tmp_path / "plain"
        plain.mkdir()
        await repo.upsert_project(path=str(plain), values={"name": "Plain"})
        await repo.upsert_project(path=str(tmp_path / "gone"), values={"name": "Gone"})

        stats = await GitStatsService(author_emails=[]).get_git_stats("week")

        assert stats.commits == 0
        assert stats.projects_worked_on == 0

    @pytest.mark.asyncio
    async def test_git_failure_counts_nothing(self, active_repo, monkeypatch):
        """Test that an unusable git binary gives empty stats instead of an error."""
        monkeypatch.setattr(Git, "GIT_PYTHON_GIT_EXECUTABLE", "/nonexistent/git")

        stats = await GitStatsService(author_emails=[]).get_git_stats("week")

        assert stats.commits == 0
        assert stats.projects_worked_on == 0
