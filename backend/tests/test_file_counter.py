"""Tests for the file/line counter."""

import os

import pytest

from barnacles.core.file_counter import (
    count_lines,
    count_project_files,
    decode_percentage,
    encode_percentage,
    measure_directory_size,
    measure_third_party_size,
    percentage_of,
)


class TestCountLines:
    """Tests for count_lines."""

    def test_text_file(self, tmp_path):
        """Test lines with and without a trailing newline."""
        path = tmp_path / "a.txt"
        path.write_text("one\ntwo\nthree")
        assert count_lines(path) == 3
        path.write_text("one\ntwo\n")
        assert count_lines(path) == 2

    def test_empty_file(self, tmp_path):
        """Test that an empty file has no lines."""
        path = tmp_path / "empty.py"
        path.write_text("")
        assert count_lines(path) == 0

    def test_binary_file(self, tmp_path):
        """Test that a null byte marks the file as binary."""
        path = tmp_path / "image.png"
        path.write_bytes(b"\x89PNG\r\n\x00\x00\n\n")
        assert count_lines(path) is None


class TestCountProjectFiles:
    """Tests for count_project_files."""

    def test_totals(self, tmp_path, write_files):
        """Test file, directory, size and line totals."""
        write_files(tmp_path, {
            "main.py": "import os\nprint(os.name)\n",
            "pkg/util.py": "x = 1\n",
            "pkg/data/blob.bin": b"\x00\x01\x02\x03",
            "README": "docs\n",
        })
        result = count_project_files(tmp_path, skip_directories=[], ignore_files=[])

        assert result.file_count == 4
        assert result.directory_count == 2
        assert result.lines_of_code == 4
        assert result.size == sum(
            (tmp_path / p).stat().st_size
            for p in ("main.py", "pkg/util.py", "pkg/data/blob.bin", "README")
        )
        assert result.extension_counts == {".py": 2, ".bin": 1}
        assert result.extension_lines == {".py": 3}
        assert result.last_modified is not None

    def test_excluded_names_match_exactly(self, tmp_path, write_files):
        """Test that exclusions are exact names, not prefixes or globs."""
        write_files(tmp_path, {
            "node_modules/lib/index.js": "a\n",
            "node_modules_backup/index.js": "a\n",
            "src/build/out.js": "a\n",
        })
        result = count_project_files(tmp_path, skip_directories=["node_modules", "build"], ignore_files=[])
        assert result.file_count == 1
        assert result.extension_counts == {".js": 1}

    def test_ignored_files(self, tmp_path, write_files):
        """Test that noise files are skipped entirely."""
        write_files(tmp_path, {".DS_Store": b"\x00", "app.js": "a\n"})
        result = count_project_files(tmp_path, skip_directories=[], ignore_files=[".DS_Store"])
        assert result.file_count == 1

    def test_symlinked_directory_not_followed(self, tmp_path, write_files):
        """Test that a symlink cycle does not recurse."""
        project = tmp_path / "project"
        write_files(project, {"src/a.py": "a\n"})
        os.symlink(project, project / "src" / "loop", target_is_directory=True)

        result = count_project_files(project, skip_directories=[], ignore_files=[])
        assert result.file_count == 1
        assert result.directory_count == 1

    def test_gitignore(self, tmp_path, write_files):
        """Test that .gitignore patterns are honored when enabled."""
        write_files(tmp_path, {
            ".gitignore": "*.log\ncoverage/\n",
            "app.py": "a\n",
            "debug.log": "x\n",
            "coverage/index.html": "<html>\n",
        })
        honored = count_project_files(tmp_path, skip_directories=[], ignore_files=[])
        assert honored.file_count == 2
        assert honored.extension_counts == {".py": 1}

        ignored = count_project_files(tmp_path, skip_directories=[], ignore_files=[], respect_gitignore=False)
        assert ignored.file_count == 4

    @pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs an unprivileged POSIX user")
    def test_unreadable_directory_contributes_nothing(self, tmp_path, write_files):
        """Test that a permission error skips only that directory."""
        write_files(tmp_path, {"ok/a.py": "a\n", "locked/b.py": "b\n"})
        locked = tmp_path / "locked"
        locked.chmod(0)
        try:
            result = count_project_files(tmp_path, skip_directories=[], ignore_files=[])
        finally:
            locked.chmod(0o755)
        assert result.file_count == 1
        assert result.directory_count == 2

    def test_language_stats(self, tmp_path, write_files):
        """Test the per-technology breakdown and its rounding."""
        write_files(tmp_path, {
            "a.ts": "1\n2\n",
            "b.tsx": "1\n",
            "c.js": "1\n",
            "d.css": "1\n",
            "e.scss": "1\n",
            "notes.md": "1\n",
        })
        result = count_project_files(tmp_path, skip_directories=[], ignore_files=[])

        stats = result.language_stats
        assert set(stats) == {"typescript", "javascript", "css"}
        assert stats["typescript"].file_count == 2
        assert stats["typescript"].lines_of_code == 3
        assert stats["typescript"].percentage == 33.3
        assert stats["javascript"].percentage == 16.7
        assert stats["css"].percentage == 33.3

    def test_empty_directory(self, tmp_path):
        """Test an empty tree."""
        result = count_project_files(tmp_path)
        assert result.file_count == 0
        assert result.language_stats == {}
        assert result.last_modified is not None


class TestPercentages:
    """Tests for the percentage helpers."""

    def test_percentage_rounds_half_up(self):
        """Test one-decimal rounding of file shares."""
        assert percentage_of(1, 3) == 33.3
        assert percentage_of(2, 3) == 66.7
        assert percentage_of(1, 8) == 12.5
        assert percentage_of(1, 1) == 100.0
        assert percentage_of(1, 0) == 0.0

    @pytest.mark.parametrize("value,stored", [
        (52.5, 525),
        (0.1, 1),
        (33.3, 333),
        (100.0, 1000),
        (0.0, 0),
        (12.34, 123),
    ])
    def test_encode(self, value, stored):
        """Test x10 fixed point encoding."""
        assert encode_percentage(value) == stored

    def test_decode_restores_one_decimal(self):
        """Test that every one-decimal value survives the round trip."""
        for tenths in range(0, 1001):
            value = tenths / 10
            assert decode_percentage(encode_percentage(value)) == value


class TestDirectorySizes:
    """Tests for size measurement."""

    def test_measure_directory_size(self, tmp_path, write_files):
        """Test recursive byte totals."""
        write_files(tmp_path, {"a": b"x" * 10, "b/c": b"x" * 5})
        assert measure_directory_size(tmp_path) == 15

    def test_measure_missing_directory(self, tmp_path):
        """Test that a missing directory measures zero."""
        assert measure_directory_size(tmp_path / "missing") == 0

    def test_third_party_size(self, node_project, write_files):
        """Test the sum over dependency directories."""
        write_files(node_project, {"vendor/autoload.php": b"z" * 50, "target/debug/app": b"w" * 25})
        assert measure_third_party_size(node_project) == 375
