"""Structural validation of GitHub Actions workflow files.

The validator never raises for bad input. A missing file, malformed YAML or an
unexpected document shape all come back as entries in
``WorkflowValidation.errors``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional

from validate_pipelines.domain_model.config import normalize_needs
from validate_pipelines.domain_model.results import WorkflowValidation
from validate_pipelines.globals.config_parser import (
    ConfigParseError,
    ConfigParser,
    PyYAMLConfigParser,
)
from validate_pipelines.globals.filesystem import FileSystem, LocalFileSystem, PathLike

logger = logging.getLogger(__name__)

RECOMMENDED_JOBS = ["test", "build", "security-scan"]

EXPLICIT_PERMISSIONS = "Explicit permissions defined"
NO_EXPLICIT_PERMISSIONS = "No explicit permissions defined"
SECURITY_SCANNING = "Security scanning included"
DEPENDENCY_AUDIT = "Dependency audit included"
SECRET_EXPOSED = "Secret potentially exposed in logs"


def _dedupe(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class WorkflowValidator(ABC):
    """Interface for structural workflow validators."""

    @abstractmethod
    def validate(self, path: PathLike) -> WorkflowValidation:
        """Validate the workflow file at path and return its report."""
        pass


class DefaultWorkflowValidator(WorkflowValidator):
    """
    Validates a workflow file read through a FileSystem and parsed by a
    ConfigParser.

    Besides extracting jobs, triggers and branches, the validator checks for
    the recommended jobs (test, build, security-scan) and runs a handful of
    string heuristics over every job to report security features and
    warnings.
    """

    def __init__(
        self,
        filesystem: Optional[FileSystem] = None,
        parser: Optional[ConfigParser] = None,
    ) -> None:
        self.filesystem = filesystem or LocalFileSystem()
        self.parser = parser or PyYAMLConfigParser()

    def validate(self, path: PathLike) -> WorkflowValidation:
        if not self.filesystem.exists(path):
            return WorkflowValidation(is_valid=False, errors=["Workflow file not found"])

        try:
            content = self.filesystem.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Could not read workflow {path}: {e}")
            return WorkflowValidation(is_valid=False, errors=[f"Failed to parse workflow: {e}"])

        try:
            workflow = self.parser.parse(content)
        except ConfigParseError as e:
            logger.debug(f"Invalid YAML in {path}: {e}")
            return WorkflowValidation(is_valid=False, errors=[f"Invalid YAML: {e}"])

        if not isinstance(workflow, Mapping):
            kind = "empty document" if workflow is None else type(workflow).__name__
            return WorkflowValidation(
                is_valid=False,
                errors=[f"Failed to parse workflow: expected a mapping, got {kind}"],
            )

        return self._analyze(workflow)

    def _analyze(self, workflow: Mapping[str, Any]) -> WorkflowValidation:
        errors: List[str] = []
        warnings: List[str] = []

        jobs = workflow.get("jobs")
        if not isinstance(jobs, Mapping):
            jobs = {}
        job_names = [str(name) for name in jobs]

        for job in RECOMMENDED_JOBS:
            if job not in job_names:
                warnings.append(f"Missing recommended job: {job}")

        job_dependencies: Dict[str, List[str]] = {}
        security_features: List[str] = []
        security_warnings: List[str] = []
        environments: List[str] = []
        conditional_deployments = False

        for name, job_config in jobs.items():
            if not isinstance(job_config, Mapping):
                job_config = {}
            job_dependencies[str(name)] = normalize_needs(job_config.get("needs"))

            features, job_warnings = self._check_security(job_config)
            security_features.extend(features)
            security_warnings.extend(job_warnings)

            environment = self._environment_name(job_config.get("environment"))
            if environment:
                environments.append(environment)

            condition = job_config.get("if")
            if isinstance(condition, str) and "github.ref" in condition:
                conditional_deployments = True

        return WorkflowValidation(
            is_valid=not errors,
            jobs=job_names,
            triggers=self._triggers(workflow.get("on")),
            branches=self._branches(workflow.get("on")),
            errors=errors,
            warnings=warnings,
            job_dependencies=job_dependencies,
            security_features=_dedupe(security_features),
            security_warnings=_dedupe(security_warnings),
            environments=_dedupe(environments),
            conditional_deployments=conditional_deployments,
        )

    def _triggers(self, on: Any) -> List[str]:
        if on is None:
            return []
        if isinstance(on, Mapping):
            return [str(event) for event in on]
        return [str(event) for event in _as_list(on)]

    def _branches(self, on: Any) -> List[str]:
        if not isinstance(on, Mapping):
            return []

        branches: List[str] = []
        for event in ("push", "pull_request"):
            event_config = on.get(event)
            if isinstance(event_config, Mapping):
                branches.extend(str(b) for b in _as_list(event_config.get("branches")))
        return _dedupe(branches)

    def _environment_name(self, environment: Any) -> Optional[str]:
        # environment: may be a plain name or a mapping with name/url
        if isinstance(environment, Mapping):
            environment = environment.get("name")
        if environment is None or environment == "":
            return None
        return str(environment)

    def _check_security(self, job_config: Mapping[str, Any]):
        features: List[str] = []
        warnings: List[str] = []

        permissions = job_config.get("permissions")
        # An empty mapping still counts; "" and false do not
        if isinstance(permissions, Mapping) or permissions:
            features.append(EXPLICIT_PERMISSIONS)
        else:
            warnings.append(NO_EXPLICIT_PERMISSIONS)

        steps = [s for s in _as_list(job_config.get("steps")) if isinstance(s, Mapping)]

        if any(self._is_security_step(step) for step in steps):
            features.append(SECURITY_SCANNING)

        if any(self._runs_dependency_audit(step) for step in steps):
            features.append(DEPENDENCY_AUDIT)

        for step in steps:
            run = self._text(step, "run")
            if "${{ secrets." in run and ("echo" in run or "print" in run):
                warnings.append(SECRET_EXPOSED)

        return features, warnings

    def _is_security_step(self, step: Mapping[str, Any]) -> bool:
        run = self._text(step, "run")
        return (
            "security" in self._text(step, "name").lower()
            or "security" in self._text(step, "uses")
            or "security" in run
            or "audit" in run
        )

    def _runs_dependency_audit(self, step: Mapping[str, Any]) -> bool:
        run = self._text(step, "run")
        return "npm audit" in run or "yarn audit" in run

    @staticmethod
    def _text(step: Mapping[str, Any], key: str) -> str:
        value = step.get(key)
        return str(value) if value is not None else ""


def validate_workflow_file(
    path: PathLike,
    filesystem: Optional[FileSystem] = None,
    parser: Optional[ConfigParser] = None,
) -> WorkflowValidation:
    """Validate a workflow file and return its structural report.

    Args:
        path: Path to the workflow YAML file
        filesystem: Filesystem to read from (defaults to the local disk)
        parser: Config parser (defaults to PyYAML)

    Returns:
        WorkflowValidation: The report; problems are listed in ``errors``
        and ``warnings`` rather than raised.
    """
    return DefaultWorkflowValidator(filesystem, parser).validate(path)
