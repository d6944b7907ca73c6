"""
Tests unitaires pour l'adaptateur du systeme de fichiers.
"""

import errno
from pathlib import Path
from unittest.mock import patch

import pytest

from nfoorg.adapters.file_system import FileSystemAdapter


@pytest.fixture
def fs() -> FileSystemAdapter:
    return FileSystemAdapter()


class TestMoveDirectory:
    def test_rename(self, fs, tmp_path, make_media_dir):
        source = make_media_dir(tmp_path / "src" / "Film")
        destination = tmp_path / "dst" / "CnMovie" / "Film"

        fs.move_directory(source, destination)

        assert (destination / "video.mkv").exists()
        assert not source.exists()

    def test_cross_device_copies_then_removes(self, fs, tmp_path, make_media_dir):
        source = make_media_dir(tmp_path / "src" / "Film", seasons=["Season 1"])
        destination = tmp_path / "dst" / "Film"

        with patch(
            "nfoorg.adapters.file_system.os.rename",
            side_effect=OSError(errno.EXDEV, "Invalid cross-device link"),
        ):
            fs.move_directory(source, destination)

        assert (destination / "Season 1" / "Season 1.E01.mkv").exists()
        assert not source.exists()

    def test_cross_device_single_file(self, fs, tmp_path):
        source = tmp_path / "poster.jpg"
        source.write_bytes(b"img")

        with patch(
            "nfoorg.adapters.file_system.os.rename",
            side_effect=OSError(errno.EXDEV, "Invalid cross-device link"),
        ):
            fs.move_directory(source, tmp_path / "out" / "poster.jpg")

        assert (tmp_path / "out" / "poster.jpg").read_bytes() == b"img"
        assert not source.exists()

    def test_other_errors_propagate(self, fs, tmp_path, make_media_dir):
        source = make_media_dir(tmp_path / "src" / "Film")

        with patch(
            "nfoorg.adapters.file_system.os.rename",
            side_effect=OSError(errno.EACCES, "Permission denied"),
        ):
            with pytest.raises(OSError):
                fs.move_directory(source, tmp_path / "dst")

        assert source.exists()

    def test_missing_source(self, fs, tmp_path):
        with pytest.raises(FileNotFoundError):
            fs.move_directory(tmp_path / "absent", tmp_path / "dst")


class TestInspection:
    def test_has_media_files_recursive(self, fs, tmp_path, make_media_dir):
        show = make_media_dir(tmp_path / "Show", seasons=["S01"])
        empty = tmp_path / "Empty"
        empty.mkdir()
        (empty / "notes.txt").write_text("x")

        assert fs.has_media_files(show)
        assert not fs.has_media_files(empty)

    def test_media_extension_is_case_insensitive(self, fs, tmp_path):
        (tmp_path / "FILM.MKV").write_bytes(b"")
        assert fs.has_media_files(tmp_path)

    def test_project_directory(self, fs, tmp_path):
        (tmp_path / ".git").mkdir()
        assert fs.is_project_directory(tmp_path)
        assert not fs.is_project_directory(tmp_path, markers=("go.mod",))

    def test_list_and_count_nfo(self, fs, tmp_path):
        (tmp_path / "b.nfo").write_text("")
        (tmp_path / "a.NFO").write_text("")
        (tmp_path / "sub.nfo").mkdir()

        assert fs.list_nfo_files(tmp_path) == [tmp_path / "a.NFO", tmp_path / "b.nfo"]
        assert fs.count_nfo_files(tmp_path) == 2
        assert fs.count_nfo_files(tmp_path / "absent") == 0

    def test_iter_directories_with_prune(self, fs, tmp_path):
        for name in ("b", "a", "a/x", "skip", "skip/inner"):
            (tmp_path / name).mkdir()

        result = list(fs.iter_directories(tmp_path, prune=lambda p: p.name == "skip"))

        assert result == [tmp_path, tmp_path / "a", tmp_path / "a" / "x", tmp_path / "b"]

    def test_remove_tree(self, fs, tmp_path):
        target = tmp_path / "gone"
        (target / "sub").mkdir(parents=True)

        assert fs.remove_tree(target)
        assert not target.exists()
        assert not fs.remove_tree(target)
