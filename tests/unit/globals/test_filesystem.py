import pytest

from validate_pipelines.globals.filesystem import InMemoryFileSystem, LocalFileSystem


class TestLocalFileSystem:
    def test_reads_existing_file(self, tmp_path):
        path = tmp_path / "ci.yml"
        path.write_text("on: push\n", encoding="utf-8")
        filesystem = LocalFileSystem()

        assert filesystem.exists(path) is True
        assert filesystem.exists(str(path)) is True
        assert filesystem.read_text(path) == "on: push\n"

    def test_directory_is_not_a_file(self, tmp_path):
        assert LocalFileSystem().exists(tmp_path) is False

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            LocalFileSystem().read_text(tmp_path / "missing.yml")


class TestInMemoryFileSystem:
    def test_lookup_by_string_or_path(self, tmp_path):
        path = tmp_path / "ci.yml"
        filesystem = InMemoryFileSystem({path: "jobs: {}"})

        assert filesystem.exists(str(path)) is True
        assert filesystem.read_text(path) == "jobs: {}"

    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            InMemoryFileSystem({}).read_text("ci.yml")
