"""Tests for the GitPython-backed inspector."""

import asyncio
import time
from pathlib import Path

import pytest
from git import Git, GitCommandError, Repo

from barnacles.core.git_inspector import GitPythonInspector, STATUS_CLEAN, STATUS_MODIFIED


@pytest.fixture
def inspector() -> GitPythonInspector:
    return GitPythonInspector(timeout=5)


class TestGitPythonInspector:
    """Tests for GitPythonInspector.inspect."""

    @pytest.mark.asyncio
    async def test_not_a_repository(self, inspector, tmp_path):
        """Test that a directory without .git yields None."""
        assert await inspector.inspect(tmp_path) is None

    @pytest.mark.asyncio
    async def test_clean_repository(self, inspector, git_repo):
        """Test branch, status and last commit of a clean repository."""
        info = await inspector.inspect(git_repo.working_tree_dir)

        assert info is not None
        assert info.branch == git_repo.active_branch.name
        assert info.status == STATUS_CLEAN
        assert info.has_uncommitted_changes is False
        assert info.last_commit_message == "Initial commit"
        assert info.last_commit_date is not None
        assert info.remote_url is None

    @pytest.mark.asyncio
    async def test_modified_repository(self, inspector, git_repo):
        """Test that untracked or edited files mark the repository modified."""
        Path(git_repo.working_tree_dir, "new.txt").write_text("change\n")

        info = await inspector.inspect(git_repo.working_tree_dir)

        assert info.status == STATUS_MODIFIED
        assert info.has_uncommitted_changes is True

    @pytest.mark.asyncio
    async def test_remote_url(self, inspector, git_repo):
        """Test that the origin URL is reported."""
        git_repo.create_remote("origin", "https://example.com/acme/demo.git")

        info = await inspector.inspect(git_repo.working_tree_dir)

        assert info.remote_url == "https://example.com/acme/demo.git"

    @pytest.mark.asyncio
    async def test_repository_without_commits(self, inspector, tmp_path):
        """Test that an unborn branch still reports its name."""
        repo = Repo.init(tmp_path / "empty")
        try:
            expected_branch = repo.head.reference.name
            info = await inspector.inspect(tmp_path / "empty")
        finally:
            repo.close()

        assert info is not None
        assert info.branch == expected_branch
        assert info.status == STATUS_CLEAN
        assert info.last_commit_date is None
        assert info.last_commit_message is None

    @pytest.mark.asyncio
    async def test_timeout_yields_none(self, git_repo, monkeypatch):
        """Test that a hung lookup is abandoned."""
        inspector = GitPythonInspector(timeout=0.05)

        def slow_read(project_path):
            time.sleep(0.5)

        monkeypatch.setattr(inspector, "_read_git_info", slow_read)

        assert await inspector.inspect(git_repo.working_tree_dir) is None

    @pytest.mark.asyncio
    async def test_git_failure_yields_none(self, inspector, git_repo, monkeypatch):
        """Test that a failing git command is not an error."""
        def failing_read(project_path):
            raise GitCommandError("status", 128)

        monkeypatch.setattr(inspector, "_read_git_info", failing_read)

        assert await inspector.inspect(git_repo.working_tree_dir) is None

    @pytest.mark.asyncio
    async def test_missing_git_executable_yields_none(self, inspector, git_repo, monkeypatch):
        """Test that an unusable git binary gives no Git info instead of an error."""
        monkeypatch.setattr(Git, "GIT_PYTHON_GIT_EXECUTABLE", "/nonexistent/git")

        assert await inspector.inspect(git_repo.working_tree_dir) is None

    @pytest.mark.asyncio
    async def test_concurrent_inspections(self, inspector, git_repo, tmp_path):
        """Test that lookups run side by side."""
        results = await asyncio.gather(
            inspector.inspect(git_repo.working_tree_dir),
            inspector.inspect(tmp_path),
        )
        assert results[0] is not None
        assert results[1] is None
