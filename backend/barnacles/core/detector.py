"""Technology Detector: classify a directory by its marker files."""

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable, Optional

from barnacles.core.technology_detectors import TECHNOLOGY_DETECTORS, TechnologyDetector

logger = logging.getLogger(__name__)

# Any of these at the top level makes a directory a project
PROJECT_MARKERS = (
    "package.json",
    "composer.json",
    "Cargo.toml",
    "go.mod",
    "requirements.txt",
    "pyproject.toml",
    "setup.py",
    "pom.xml",
    "build.gradle",
    ".git",
)


def is_valid_project(dir_path: str | Path) -> bool:
    """Check whether a directory carries at least one project marker.

    Unreadable or missing directories are simply not projects.
    """
    path = Path(dir_path)
    try:
        entries = {entry.name for entry in path.iterdir()}
    except OSError:
        return False
    return any(marker in entries for marker in PROJECT_MARKERS)


def read_json_object(file_path: Path) -> Optional[dict[str, Any]]:
    """Parse a JSON file that must contain an object, else None."""
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def read_package_json(project_path: str | Path) -> Optional[dict[str, Any]]:
    """Load package.json of a project when present and well formed."""
    return read_json_object(Path(project_path) / "package.json")


def _package_dependencies(package_json: Optional[dict[str, Any]]) -> set[str]:
    if not package_json:
        return set()
    names: set[str] = set()
    for key in ("dependencies", "devDependencies"):
        deps = package_json.get(key)
        if isinstance(deps, dict):
            names.update(deps.keys())
    return names


def _matches(
    detector: TechnologyDetector,
    path: Path,
    dependencies: set[str],
    file_extensions: set[str],
) -> bool:
    # Marker files first, then package.json dependencies, then seen extensions
    for marker in detector.files:
        if (path / marker).exists():
            return True
    if any(key in dependencies for key in detector.package_json_keys):
        return True
    return any(ext in file_extensions for ext in detector.file_extensions)


def detect_technologies(
    project_path: str | Path,
    file_extensions: Optional[Iterable[str]] = None,
) -> list[str]:
    """Return the slugs of every catalog technology found in a directory.

    Args:
        project_path: Directory to inspect
        file_extensions: Lower-cased extensions seen by the file counter, used
            as a fallback for detectors that declare language extensions

    Returns:
        Slugs in catalog order; a directory may match several technologies
    """
    path = Path(project_path)
    dependencies = _package_dependencies(read_package_json(path))
    extensions = {ext.lower() for ext in (file_extensions or ())}

    detected = [
        detector.slug
        for detector in TECHNOLOGY_DETECTORS
        if _matches(detector, path, dependencies, extensions)
    ]
    logger.debug(f"Detected technologies for {path}: {detected}")
    return detected


def folder_name_to_title_case(folder_name: str) -> str:
    """Turn ``my-cool_app`` into ``My Cool App``."""
    words = [word for word in re.split(r"[-_\s]+", folder_name) if word]
    return " ".join(word[0].upper() + word[1:].lower() for word in words)


def get_project_metadata(project_path: str | Path) -> dict[str, Optional[str]]:
    """Display name from the folder name, description from package.json."""
    path = Path(project_path)
    package_json = read_package_json(path)
    description = package_json.get("description") if package_json else None
    return {
        "name": folder_name_to_title_case(path.name) or path.name,
        "description": description if isinstance(description, str) else None,
    }
