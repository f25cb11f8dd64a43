from .cli_config import CLIConfig
from .config_parser import ConfigParseError, ConfigParser, PyYAMLConfigParser
from .filesystem import FileSystem, InMemoryFileSystem, LocalFileSystem
from .validation_result import ValidationResult

__all__ = [
    "CLIConfig",
    "ConfigParseError",
    "ConfigParser",
    "PyYAMLConfigParser",
    "FileSystem",
    "InMemoryFileSystem",
    "LocalFileSystem",
    "ValidationResult",
]
