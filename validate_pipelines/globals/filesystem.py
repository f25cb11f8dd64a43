from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Union

PathLike = Union[str, Path]


class FileSystem(ABC):
    """Read-only filesystem access used by the workflow validator.

    Keeping this behind an interface lets tests hand the validator in-memory
    content instead of touching the disk.
    """

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Return True if a regular file exists at path."""
        pass

    @abstractmethod
    def read_text(self, path: PathLike) -> str:
        """Return the file content decoded as UTF-8.

        Raises:
            OSError: If the file cannot be read.
        """
        pass


class LocalFileSystem(FileSystem):
    def exists(self, path: PathLike) -> bool:
        return Path(path).is_file()

    def read_text(self, path: PathLike) -> str:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()


class InMemoryFileSystem(FileSystem):
    """Filesystem backed by a dict of path -> content."""

    def __init__(self, files: Dict[str, str]) -> None:
        self.files = {str(path): content for path, content in files.items()}

    def exists(self, path: PathLike) -> bool:
        return str(path) in self.files

    def read_text(self, path: PathLike) -> str:
        try:
            return self.files[str(path)]
        except KeyError:
            raise FileNotFoundError(str(path)) from None
