from dataclasses import dataclass
from typing import Optional


@dataclass
class CLIConfig:
    """
    Configuration for CLI operations.

    Attributes:
        workflow_file: Path to specific workflow file, or None to validate all
        no_warnings: Whether to hide warnings and ignore them for the exit code
        json_output: Whether to print reports as JSON instead of colored text
        check_steps: Whether to also classify the steps of every job
        verbose: Whether to enable debug logging
    """

    workflow_file: Optional[str] = None
    no_warnings: bool = False
    json_output: bool = False
    check_steps: bool = True
    verbose: bool = False
