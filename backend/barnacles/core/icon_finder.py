"""Locate an icon or logo file inside a project."""

from pathlib import Path
from typing import Optional

ICON_FILENAMES = (
    "favicon.ico",
    "favicon.png",
    "favicon.svg",
    "logo.png",
    "logo.svg",
    "logo.jpg",
    "logo.jpeg",
    "icon.png",
    "icon.svg",
    "app-icon.png",
    "app-icon.svg",
)

# Searched in order, "" is the project root
ICON_DIRECTORIES = (
    "",
    "public",
    "static",
    "assets",
    "src",
    "public/assets",
    "public/images",
    "static/images",
    "assets/images",
    "src/assets",
    "src/assets/images",
    "images",
)


def find_project_icon(project_path: str | Path) -> Optional[str]:
    """Return the icon path relative to the project root, or None."""
    root = Path(project_path)
    for directory in ICON_DIRECTORIES:
        search_dir = root / directory if directory else root
        if not search_dir.is_dir():
            continue
        for filename in ICON_FILENAMES:
            icon_path = search_dir / filename
            if icon_path.is_file():
                return icon_path.relative_to(root).as_posix()
    return None
