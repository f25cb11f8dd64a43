from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Mapping, Optional

from validate_pipelines.domain_model.results import StepValidation
from validate_pipelines.globals.cli_config import CLIConfig
from validate_pipelines.globals.config_parser import ConfigParser, PyYAMLConfigParser
from validate_pipelines.globals.filesystem import FileSystem, LocalFileSystem
from validate_pipelines.globals.validation_result import ValidationResult
from validate_pipelines.pipeline_stages.step_classifier import DefaultStepClassifier, StepClassifier
from validate_pipelines.pipeline_stages.workflow_validator import (
    DefaultWorkflowValidator,
    WorkflowValidator,
)


class ValidationService(ABC):
    """Interface for validation services that process workflow files."""

    @abstractmethod
    def validate_file(self, file: Path, config: CLIConfig) -> ValidationResult:
        """Validate a single workflow file and return results."""
        pass


class StandardValidationService(ValidationService):
    """
    Standard validation service.

    Runs the structural validator on the file and, when enabled in the
    configuration, classifies the steps of all its jobs as one pipeline.
    """

    def __init__(
        self,
        filesystem: Optional[FileSystem] = None,
        parser: Optional[ConfigParser] = None,
        validator: Optional[WorkflowValidator] = None,
        classifier: Optional[StepClassifier] = None,
    ):
        self.filesystem = filesystem or LocalFileSystem()
        self.parser = parser or PyYAMLConfigParser()
        self.validator = validator or DefaultWorkflowValidator(self.filesystem, self.parser)
        self.classifier = classifier or DefaultStepClassifier()

    def validate_file(self, file: Path, config: CLIConfig) -> ValidationResult:
        """Validate a single workflow file and return results."""
        workflow = self.validator.validate(file)

        steps: Optional[StepValidation] = None
        if config.check_steps and workflow.is_valid:
            steps = self._classify_steps(self.parser.parse(self.filesystem.read_text(file)))

        warnings: List[str] = []
        if not config.no_warnings:
            warnings = workflow.warnings + workflow.security_warnings
            if steps is not None:
                warnings += [f"Missing essential step: {step}" for step in steps.missing_steps]
                warnings += steps.warnings

        return ValidationResult(
            file=file,
            workflow=workflow,
            steps=steps,
            errors=list(workflow.errors),
            warnings=warnings,
        )

    def _classify_steps(self, document: Any) -> StepValidation:
        jobs = document.get("jobs") if isinstance(document, Mapping) else None
        if not isinstance(jobs, Mapping):
            jobs = {}

        all_steps = []
        for job in jobs.values():
            if isinstance(job, Mapping):
                all_steps.extend(s for s in job.get("steps") or [] if isinstance(s, Mapping))

        return self.classifier.classify(all_steps, jobs)
