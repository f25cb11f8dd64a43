import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from rich.progress import Progress, SpinnerColumn, TextColumn

from validate_pipelines.cli_components.output_formatter import ColoredFormatter, OutputFormatter
from validate_pipelines.cli_components.result_aggregator import (
    ResultAggregator,
    StandardResultAggregator,
)
from validate_pipelines.cli_components.validation_service import (
    StandardValidationService,
    ValidationService,
)
from validate_pipelines.domain_model.config import load_pipeline_config
from validate_pipelines.domain_model.results import PipelineTestResult
from validate_pipelines.globals.cli_config import CLIConfig
from validate_pipelines.globals.config_parser import (
    ConfigParseError,
    ConfigParser,
    PyYAMLConfigParser,
)
from validate_pipelines.globals.validation_result import ValidationResult
from validate_pipelines.pipeline_stages.job_scheduler import PipelineError, run_pipeline_jobs_sync
from validate_pipelines.runners import Runner, SimulatedRunner

logger = logging.getLogger(__name__)


class CLI(ABC):
    """Interface for CLI implementations."""

    @abstractmethod
    def run(self) -> int:
        """
        Run the CLI and return exit code.

        Returns:
            int: Exit code (0=success, 1=errors, 2=warnings only)
        """
        pass


class StandardCLI(CLI):
    """
    Standard CLI implementation with separated concerns.

    Coordinates validation using pluggable components:
    - OutputFormatter: handles display formatting
    - ResultAggregator: collects and summarizes results
    - ValidationService: runs the workflow validator and step classifier
    """

    def __init__(
        self,
        config: CLIConfig,
        formatter: Optional[OutputFormatter] = None,
        aggregator: Optional[ResultAggregator] = None,
        validation_service: Optional[ValidationService] = None,
    ):
        self.config = config
        self.formatter = formatter or ColoredFormatter()
        self.aggregator = aggregator or StandardResultAggregator()
        self.validation_service = validation_service or StandardValidationService()

    def run(self) -> int:
        """Main CLI execution method.

        Validates either a single workflow file (if specified in config) or
        discovers and validates all workflow files in the .github/workflows/
        directory.

        Returns:
            int: Exit code indicating validation results:
                - 0: Success (no errors)
                - 1: Errors found
                - 2: Warnings only (when not suppressed)
        """
        if self.config.workflow_file:
            exit_code = self._run_files([Path(self.config.workflow_file)])
        else:
            exit_code = self._run_directory()

        if self.config.json_output and self.aggregator.get_results():
            print(json.dumps([r.to_dict() for r in self.aggregator.get_results()], indent=2))
        return exit_code

    def _run_directory(self) -> int:
        """Validate all workflow files in the standard .github/workflows directory."""
        project_root = self._find_workflows_directory()
        if not project_root:
            print(
                "Could not find .github/workflows directory. "
                "Please run from your project root or create the directory structure: "
                ".github/workflows/"
            )
            return 1

        directory = project_root / ".github/workflows"
        files = self._find_workflow_files(directory)

        if not files:
            print(
                f"No workflow files (*.yml, *.yaml) found in {directory}. "
                f"Create workflow files or check the directory path."
            )
            return 1

        return self._run_files(files)

    def _run_files(self, files: List[Path]) -> int:
        for file in files:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                transient=True,
                disable=self.config.json_output,
            ) as progress:
                progress.add_task(description=f"Validating {file.name}...", total=None)
                result = self.validation_service.validate_file(file, self.config)

            self.aggregator.add_result(result)
            if not self.config.json_output:
                self._display_result(result)

        if not self.config.json_output:
            self._display_summary()
        return self.aggregator.get_exit_code()

    def _display_result(self, result: ValidationResult) -> None:
        """Display validation results for a single file."""
        print(self.formatter.format_file_header(result.file))

        if not result.errors and not result.warnings:
            print(self.formatter.format_no_problems())
            return

        for error in result.errors:
            print(self.formatter.format_error(error))
        for warning in result.warnings:
            print(self.formatter.format_warning(warning))

    def _display_summary(self) -> None:
        """Display final summary of all validation results."""
        incomplete = self.aggregator.get_incomplete_workflows()
        if incomplete and not self.config.no_warnings:
            names = ", ".join(path.name for path in incomplete)
            print(f"\n{self.formatter.format_warning(f'Missing essential steps in: {names}')}")
        print(
            self.formatter.format_summary(
                self.aggregator.get_total_errors(),
                self.aggregator.get_total_warnings(),
            )
        )

    def _find_workflows_directory(self, marker: str = ".github") -> Optional[Path]:
        """Find the project root containing .github directory."""
        start_dir = Path.cwd()
        for directory in [start_dir] + list(start_dir.parents)[:2]:
            if (directory / marker).is_dir():
                return directory
        return None

    def _find_workflow_files(self, directory: Path) -> List[Path]:
        """Find all YAML workflow files in a directory."""
        return sorted(list(directory.glob("*.yml")) + list(directory.glob("*.yaml")))


class PipelineRunCLI(CLI):
    """
    Executes a pipeline config file through the job scheduler.

    The config file is a YAML (or JSON) mapping of job name to job
    definition. Without an explicit runner every job is dry-run by a
    SimulatedRunner.
    """

    def __init__(
        self,
        config_file: Path,
        validate_secrets: bool = False,
        collect_metrics: bool = False,
        json_output: bool = False,
        runner: Optional[Runner] = None,
        parser: Optional[ConfigParser] = None,
        formatter: Optional[OutputFormatter] = None,
    ):
        self.config_file = config_file
        self.validate_secrets = validate_secrets
        self.collect_metrics = collect_metrics
        self.json_output = json_output
        self.runner = runner or SimulatedRunner()
        self.parser = parser or PyYAMLConfigParser()
        self.formatter = formatter or ColoredFormatter()

    def run(self) -> int:
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                document = self.parser.parse(f.read())
            jobs = load_pipeline_config(document or {})
        except (OSError, ConfigParseError, TypeError, ValueError) as e:
            print(f"Could not load pipeline config {self.config_file}: {e}")
            return 1

        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                transient=True,
                disable=self.json_output,
            ) as progress:
                progress.add_task(description=f"Running {len(jobs)} jobs...", total=None)
                result = run_pipeline_jobs_sync(
                    jobs,
                    runner=self.runner,
                    validate_secrets=self.validate_secrets,
                    collect_metrics=self.collect_metrics,
                )
        except PipelineError as e:
            logger.debug(f"Pipeline aborted: {e!r}")
            print(self.formatter.format_error(str(e)))
            return 1

        self._display_result(result)
        return 0 if result.success else 1

    def _display_result(self, result: PipelineTestResult) -> None:
        if self.json_output:
            print(json.dumps(result.to_dict(), indent=2))
            return

        print(self.formatter.format_file_header(self.config_file))
        for name, job_result in result.jobs.items():
            print(self.formatter.format_job_result(name, job_result))
            for index, variant in enumerate((result.matrix_results or {}).get(name, [])):
                print(self.formatter.format_job_result(f"  {name}[{index}]", variant))

        if result.metrics is not None:
            metrics = result.metrics
            print(
                f"\n  average job duration {metrics.average_job_duration:.1f}ms, "
                f"parallel efficiency {metrics.parallel_efficiency:.2f}"
            )
        print(self.formatter.format_pipeline_summary(result))
