"""
Package Service

Scripts and package manager information read from manifest files
"""

from pathlib import Path
from typing import Any, Dict

from barnacles.core.detector import read_json_object

PACKAGE_MANAGER_LOCK_FILES = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
)
DEFAULT_PACKAGE_MANAGER = "npm"


def _scripts_of(manifest_path: Path) -> Dict[str, Any]:
    manifest = read_json_object(manifest_path)
    scripts = manifest.get("scripts") if manifest else None
    if not isinstance(scripts, dict):
        return {}
    return {str(name): command for name, command in scripts.items()}


class PackageService:
    """Manifest inspection; missing or malformed files give empty results"""

    def get_package_scripts(self, project_path: str | Path) -> Dict[str, Any]:
        """``scripts`` of package.json"""
        return _scripts_of(Path(project_path) / "package.json")

    def get_composer_scripts(self, project_path: str | Path) -> Dict[str, Any]:
        """``scripts`` of composer.json; values may be strings or lists"""
        return _scripts_of(Path(project_path) / "composer.json")

    def detect_package_manager(self, project_path: str | Path) -> str:
        """pnpm-lock.yaml means pnpm, yarn.lock means yarn, anything else npm"""
        path = Path(project_path)
        for lock_file, manager in PACKAGE_MANAGER_LOCK_FILES:
            if (path / lock_file).exists():
                return manager
        return DEFAULT_PACKAGE_MANAGER
