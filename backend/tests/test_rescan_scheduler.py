"""Tests for the periodic rescan scheduler."""

import asyncio

import pytest

from barnacles.core.scanner import ProjectScanner
from barnacles.service.project_service import ProjectService
from barnacles.service.rescan_scheduler import RescanScheduler


@pytest.fixture
def project_service(fake_git) -> ProjectService:
    return ProjectService(scanner=ProjectScanner(git_inspector=fake_git))


class TestRescanScheduler:
    """Tests for RescanScheduler."""

    @pytest.mark.asyncio
    async def test_trigger_counts_outcomes(self, project_service, database, tmp_path, write_files):
        """Test updated and skipped counts for one pass."""
        alive = write_files(tmp_path / "alive", {"go.mod": "module alive\n"})
        gone = write_files(tmp_path / "gone", {"Cargo.toml": "[package]\n"})
        archived = write_files(tmp_path / "archived", {"composer.json": {}})
        saved = await project_service.scan_and_save([str(tmp_path)], max_depth=1)
        await project_service.archive_project(next(p.id for p in saved if p.path == str(archived)))
        (gone / "Cargo.toml").unlink()

        scheduler = RescanScheduler(project_service=project_service)
        result = await scheduler.trigger()

        assert result.updated == 2
        assert result.skipped == 1
        assert result.errors == 0
        assert str(alive) in [p.path for p in saved]

    @pytest.mark.asyncio
    async def test_errors_are_counted(self, project_service, database, tmp_path, write_files, monkeypatch):
        """Test that a failing project does not stop the pass."""
        write_files(tmp_path / "one", {"go.mod": "module one\n"})
        write_files(tmp_path / "two", {"go.mod": "module two\n"})
        await project_service.scan_and_save([str(tmp_path)], max_depth=1)

        original = project_service.quick_rescan_project

        async def flaky(path):
            if path.endswith("one"):
                raise RuntimeError("boom")
            return await original(path)

        monkeypatch.setattr(project_service, "quick_rescan_project", flaky)

        result = await RescanScheduler(project_service=project_service).trigger()

        assert (result.updated, result.skipped, result.errors) == (1, 0, 1)

    @pytest.mark.asyncio
    async def test_start_and_stop(self, project_service, database):
        """Test that the loop runs after the initial delay and stops cleanly."""
        scheduler = RescanScheduler(
            project_service=project_service,
            interval_minutes=60,
            initial_delay_seconds=0,
        )
        passes = []

        async def record_pass():
            passes.append(1)

        scheduler.rescan_all_projects = record_pass

        await scheduler.start()
        assert scheduler.is_running
        await asyncio.sleep(0.05)
        await scheduler.stop()

        assert passes == [1]
        assert not scheduler.is_running

    @pytest.mark.asyncio
    async def test_stop_without_start(self, project_service):
        scheduler = RescanScheduler(project_service=project_service)
        await scheduler.stop()
        assert not scheduler.is_running
