from abc import ABC, abstractmethod
from typing import Any

import yaml


class ConfigParseError(Exception):
    """Raised when text cannot be parsed as structured config."""


class ConfigParser(ABC):
    """Abstract base class for structured-config parser implementations."""

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Parse text into plain Python data (dicts, lists, scalars).

        Args:
            text (str): Raw config text.

        Returns:
            Any: The parsed document, or None for an empty document.

        Raises:
            ConfigParseError: If the text is not well-formed.
        """
        pass


class PyYAMLConfigParser(ConfigParser):
    """Config parser implementation using PyYAML's safe loader.

    YAML 1.1 resolves a bare ``on`` key to boolean True, which is exactly the
    trigger key of a GitHub workflow. Top-level True keys are mapped back to
    ``"on"`` so callers can look triggers up by name.
    """

    def parse(self, text: str) -> Any:
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(str(e)) from e

        if isinstance(document, dict) and True in document and "on" not in document:
            document = {("on" if key is True else key): value for key, value in document.items()}
        return document
