"""
Filesystem Service

README lookup and removal of dependency directories
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from barnacles.core.file_counter import THIRD_PARTY_DIRECTORIES, measure_directory_size

logger = logging.getLogger(__name__)

README_FILENAMES = ("README.md", "readme.md", "Readme.md", "README.MD")


class FileSystemService:
    """Project file access"""

    def get_readme(self, project_path: str | Path) -> Optional[str]:
        """Content of the first README variant found, or None"""
        root = Path(project_path)
        for filename in README_FILENAMES:
            readme_path = root / filename
            if not readme_path.is_file():
                continue
            try:
                return readme_path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.debug(f"Cannot read {readme_path}: {e}")
        return None

    def delete_third_party_packages(self, project_path: str | Path) -> int:
        """
        Remove node_modules, vendor, virtualenvs and Rust build output

        Each directory is measured right before it is removed; a directory that
        cannot be removed is skipped and not counted.

        Returns:
            Total bytes removed
        """
        root = Path(project_path)
        deleted_size = 0
        for name in THIRD_PARTY_DIRECTORIES:
            dir_path = root / name
            if not dir_path.is_dir() or dir_path.is_symlink():
                continue
            size = measure_directory_size(dir_path)
            try:
                shutil.rmtree(dir_path)
            except OSError as e:
                logger.warning(f"Failed to delete {dir_path}: {e}")
                continue
            logger.info(f"Deleted {dir_path} ({size} bytes)")
            deleted_size += size
        return deleted_size
