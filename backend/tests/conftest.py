"""Pytest configuration and fixtures for backend tests."""

import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional

import pytest
import pytest_asyncio

# Point the engine at a throwaway database before barnacles is imported
_test_db_dir = tempfile.mkdtemp(prefix="barnacles-tests-")
os.environ["BARNACLES_DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_db_dir}/test.db"

# Add backend to path
backend_path = Path(__file__).parent.parent
sys.path.insert(0, str(backend_path))

from barnacles.core.git_inspector import GitInfo  # noqa: E402


class FakeGitInspector:
    """GitInspector returning a fixed result and recording the paths asked for."""

    def __init__(self, info: Optional[GitInfo] = None):
        self.info = info
        self.calls = []

    async def inspect(self, path):
        self.calls.append(str(path))
        return self.info


@pytest_asyncio.fixture
async def database():
    """Fresh tables for each test, connections closed afterwards."""
    from barnacles.db.base import async_engine, drop_db, init_db

    await drop_db()
    await init_db()
    yield
    await async_engine.dispose()


@pytest.fixture
def fake_git() -> FakeGitInspector:
    return FakeGitInspector(
        GitInfo(
            branch="main",
            status="clean",
            remote_url="git@github.com:acme/demo.git",
            last_commit_message="Initial commit",
            has_uncommitted_changes=False,
        )
    )


@pytest.fixture
def no_git() -> FakeGitInspector:
    return FakeGitInspector(None)


@pytest.fixture
def write_files():
    """Create files below a root from a {relative_path: content} mapping."""
    def _write(root: Path, files: dict) -> Path:
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            elif isinstance(content, (dict, list)):
                path.write_text(json.dumps(content))
            else:
                path.write_text(content)
        return root
    return _write


@pytest.fixture
def node_project(tmp_path, write_files) -> Path:
    """A Vite app with a node_modules directory of known size (300 bytes)."""
    project = tmp_path / "my-vite_app"
    project.mkdir()
    write_files(project, {
        "package.json": {
            "name": "my-vite-app",
            "description": "Demo app",
            "scripts": {"dev": "vite"},
            "devDependencies": {"vite": "^5.0.0"},
        },
        "src/main.js": "console.log('a');\nconsole.log('b');\n",
        "src/util.js": "export const x = 1;\n",
        "index.html": "<html>\n</html>\n",
        "node_modules/vite/index.js": b"x" * 200,
        "node_modules/.bin/vite": b"y" * 100,
    })
    return project


@pytest.fixture
def git_repo(tmp_path):
    """A real repository with one commit."""
    from git import Repo

    workspace = tmp_path / "repo"
    workspace.mkdir()
    repo = Repo.init(workspace)
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")

    readme = workspace / "README.md"
    readme.write_text("# Test Repo\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    yield repo
    repo.close()
