"""Tests for stats persistence."""

from datetime import datetime

import pytest
import pytest_asyncio

from barnacles.core.file_counter import LanguageStat
from barnacles.core.git_inspector import GitInfo
from barnacles.core.scanner import ProjectInfo, ProjectScanStats
from barnacles.db.repository import ProjectRepository, StatsRepository
from barnacles.service.stats_service import StatsService


def make_info(path: str, language_stats=None, git_info=None, **stats) -> ProjectInfo:
    return ProjectInfo(
        name="Demo",
        path=path,
        stats=ProjectScanStats(language_stats=language_stats or {}, **stats),
        git_info=git_info,
    )


@pytest_asyncio.fixture
async def project_id(database):
    project = await ProjectRepository().upsert_project(path="/work/demo", values={"name": "Demo"})
    return project.id


@pytest.fixture
def service() -> StatsService:
    return StatsService()


class TestGetProjectStats:
    """Tests for StatsService.get_project_stats."""

    @pytest.mark.asyncio
    async def test_never_scanned(self, service, project_id):
        """Test that a project without a stats row yields None."""
        assert await service.get_project_stats(project_id) is None

    @pytest.mark.asyncio
    async def test_language_stats_not_requested(self, service, project_id):
        """Test that skipping the breakdown gives None, not an empty mapping."""
        info = make_info("/work/demo", {"python": LanguageStat(3, 100.0, 30)}, file_count=3)
        await service.save_project_stats(project_id, info)

        stats = await service.get_project_stats(project_id, include_language_stats=False)

        assert stats.file_count == 3
        assert stats.language_stats is None

    @pytest.mark.asyncio
    async def test_no_language_rows(self, service, project_id):
        """Test that a requested but empty breakdown is an empty mapping."""
        await service.save_project_stats(project_id, make_info("/work/demo", file_count=1))

        stats = await service.get_project_stats(project_id)

        assert stats.language_stats == {}


class TestSaveProjectStats:
    """Tests for StatsService.save_project_stats."""

    @pytest.mark.asyncio
    async def test_round_trip(self, service, project_id):
        """Test that every scalar and the breakdown read back unchanged."""
        commit_date = datetime(2024, 5, 1, 12, 30)
        info = make_info(
            "/work/demo",
            {
                "typescript": LanguageStat(file_count=21, percentage=52.5, lines_of_code=1200),
                "css": LanguageStat(file_count=19, percentage=47.5, lines_of_code=300),
            },
            GitInfo(
                branch="develop",
                status="modified",
                remote_url="https://example.com/acme/demo.git",
                last_commit_date=commit_date,
                last_commit_message="Add feature",
                has_uncommitted_changes=True,
            ),
            file_count=40,
            directory_count=7,
            lines_of_code=1500,
            third_party_size=4096,
        )

        saved = await service.save_project_stats(project_id, info)

        assert saved.project_id == project_id
        assert saved.file_count == 40
        assert saved.directory_count == 7
        assert saved.lines_of_code == 1500
        assert saved.third_party_size == 4096
        assert saved.git_branch == "develop"
        assert saved.git_status == "modified"
        assert saved.git_remote_url == "https://example.com/acme/demo.git"
        assert saved.last_commit_date == commit_date
        assert saved.last_commit_message == "Add feature"
        assert saved.has_uncommitted_changes is True
        assert saved.language_stats["typescript"].percentage == 52.5
        assert saved.language_stats["typescript"].file_count == 21
        assert saved.language_stats["typescript"].lines_of_code == 1200
        assert saved.language_stats["css"].percentage == 47.5

    @pytest.mark.asyncio
    async def test_percentage_stored_times_ten(self, service, project_id):
        """Test the fixed point column value."""
        await service.save_project_stats(
            project_id, make_info("/work/demo", {"go": LanguageStat(1, 33.3, 5)})
        )

        rows = await StatsRepository().get_language_stats(project_id=project_id)

        assert [(r.technology_slug, r.percentage) for r in rows] == [("go", 333)]

    @pytest.mark.asyncio
    async def test_empty_language_map_keeps_stored_rows(self, service, project_id):
        """Test that a quick rescan does not wipe the breakdown."""
        await service.save_project_stats(
            project_id, make_info("/work/demo", {"rust": LanguageStat(4, 80.0, 400)}, file_count=5)
        )
        await service.save_project_stats(project_id, make_info("/work/demo", file_count=6))

        stats = await service.get_project_stats(project_id)

        assert stats.file_count == 6
        assert list(stats.language_stats) == ["rust"]
        assert stats.language_stats["rust"].percentage == 80.0

    @pytest.mark.asyncio
    async def test_non_empty_language_map_replaces_rows(self, service, project_id):
        """Test that a full scan replaces the whole set."""
        await service.save_project_stats(
            project_id,
            make_info("/work/demo", {"rust": LanguageStat(4, 80.0, 400), "go": LanguageStat(1, 20.0, 10)}),
        )
        await service.save_project_stats(
            project_id, make_info("/work/demo", {"python": LanguageStat(2, 100.0, 50)})
        )

        stats = await service.get_project_stats(project_id)

        assert list(stats.language_stats) == ["python"]

    @pytest.mark.asyncio
    async def test_missing_git_info_clears_git_columns(self, service, project_id, fake_git):
        """Test that a project no longer under Git loses its Git fields."""
        await service.save_project_stats(project_id, make_info("/work/demo", git_info=fake_git.info))
        await service.save_project_stats(project_id, make_info("/work/demo", git_info=None))

        stats = await service.get_project_stats(project_id)

        assert stats.git_branch is None
        assert stats.git_status is None
        assert stats.git_remote_url is None
        assert stats.has_uncommitted_changes is None

    @pytest.mark.asyncio
    async def test_partial_git_info(self, service, project_id):
        """Test that Git fields are stored independently."""
        info = make_info("/work/demo", git_info=GitInfo(branch="main", status=None))
        saved = await service.save_project_stats(project_id, info)

        assert saved.git_branch == "main"
        assert saved.git_status is None
        assert saved.git_remote_url is None

    @pytest.mark.asyncio
    async def test_one_row_per_project(self, service, project_id):
        """Test that saving twice updates the same row."""
        first = await service.save_project_stats(project_id, make_info("/work/demo", file_count=1))
        second = await service.save_project_stats(project_id, make_info("/work/demo", file_count=2))

        assert first.id == second.id
        assert second.file_count == 2

    @pytest.mark.asyncio
    async def test_missing_project(self, service, database):
        """Test that stats for an unknown project are refused."""
        assert await service.save_project_stats(9999, make_info("/nowhere")) is None
        assert await service.get_project_stats(9999) is None


class TestSaveLanguageStats:
    """Tests for StatsService.save_language_stats."""

    @pytest.mark.asyncio
    async def test_accepts_camel_case_mappings(self, service, project_id):
        """Test input in the API's camelCase shape."""
        await service.save_project_stats(project_id, make_info("/work/demo"))
        await service.save_language_stats(
            project_id,
            {"vue": {"fileCount": 3, "percentage": 12.5, "linesOfCode": 90}},
        )

        stats = await service.get_project_stats(project_id)

        assert stats.language_stats["vue"].file_count == 3
        assert stats.language_stats["vue"].percentage == 12.5
        assert stats.language_stats["vue"].lines_of_code == 90

    @pytest.mark.asyncio
    async def test_empty_map_clears_rows(self, service, project_id):
        """Test that an explicit replacement with nothing removes every row."""
        await service.save_project_stats(project_id, make_info("/work/demo", {"go": LanguageStat(1, 100.0, 1)}))
        await service.save_language_stats(project_id, {})

        stats = await service.get_project_stats(project_id)

        assert stats.language_stats == {}

    @pytest.mark.asyncio
    async def test_missing_project(self, service, database):
        """Test that a breakdown for an unknown project is refused."""
        result = await service.save_language_stats(9999, {"go": LanguageStat(1, 50.0, 1)})

        assert result is None
        assert await StatsRepository().get_language_stats(project_id=9999) == []

    @pytest.mark.asyncio
    async def test_returns_stored_breakdown(self, service, project_id):
        stored = await service.save_language_stats(project_id, {"go": LanguageStat(2, 66.7, 40)})

        assert stored["go"].file_count == 2
        assert stored["go"].percentage == 66.7

    @pytest.mark.asyncio
    async def test_every_one_decimal_percentage_reads_back(self, service, project_id):
        """Test that each percentage from 0.0 to 100.0 in 0.1 steps survives storage."""
        percentages = {f"lang{i:04d}": i / 10 for i in range(1001)}
        await service.save_project_stats(project_id, make_info("/work/demo"))
        await service.save_language_stats(
            project_id,
            {slug: LanguageStat(1, percentage, 1) for slug, percentage in percentages.items()},
        )

        stats = await service.get_project_stats(project_id)

        assert len(stats.language_stats) == 1001
        for slug, percentage in percentages.items():
            assert stats.language_stats[slug].percentage == percentage, slug
