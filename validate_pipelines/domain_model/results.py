"""Result records returned by the validators and the job scheduler.

All records are plain dataclasses. ``to_dict()`` renders the camelCase shape
consumers serialize to JSON; optional fields that were never set are left out.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class JobResult:
    """Outcome of a single runner invocation."""

    success: bool
    duration: float
    output: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def coerce(cls, value: Any) -> "JobResult":
        """Accept a JobResult or a mapping with the same keys."""
        if isinstance(value, JobResult):
            return value
        if isinstance(value, Mapping):
            return cls(
                success=bool(value.get("success", False)),
                duration=value.get("duration", 0),
                output=value.get("output"),
                error=value.get("error"),
            )
        raise TypeError(f"Runner returned {type(value).__name__}, expected JobResult or mapping")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"success": self.success, "duration": self.duration}
        if self.output is not None:
            data["output"] = self.output
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class JobValidation:
    """Declared secrets and environment of a job, echoed back verbatim."""

    required_secrets: List[str] = field(default_factory=list)
    environment_variables: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "requiredSecrets": list(self.required_secrets),
            "environmentVariables": dict(self.environment_variables),
        }


@dataclass
class PipelineMetrics:
    total_jobs: int
    successful_jobs: int
    failed_jobs: int
    total_duration: float
    average_job_duration: float
    parallel_efficiency: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalJobs": self.total_jobs,
            "successfulJobs": self.successful_jobs,
            "failedJobs": self.failed_jobs,
            "totalDuration": self.total_duration,
            "averageJobDuration": self.average_job_duration,
            "parallelEfficiency": self.parallel_efficiency,
        }


@dataclass
class PipelineTestResult:
    """Aggregated outcome of one scheduler run.

    Attributes:
        success: True only if every job result succeeded
        jobs: Job name -> result; matrix jobs carry their first variant's result
        total_duration: Wall-clock milliseconds of the whole run
        matrix_results: Job name -> one result per matrix combination
        validation_results: Job name -> declared secrets and environment
        metrics: Counts and durations, when requested
    """

    success: bool
    jobs: Dict[str, JobResult]
    total_duration: float
    matrix_results: Optional[Dict[str, List[JobResult]]] = None
    validation_results: Optional[Dict[str, JobValidation]] = None
    metrics: Optional[PipelineMetrics] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "success": self.success,
            "jobs": {name: result.to_dict() for name, result in self.jobs.items()},
            "totalDuration": self.total_duration,
        }
        if self.matrix_results is not None:
            data["matrixResults"] = {
                name: [result.to_dict() for result in results]
                for name, results in self.matrix_results.items()
            }
        if self.validation_results is not None:
            data["validationResults"] = {
                name: validation.to_dict() for name, validation in self.validation_results.items()
            }
        if self.metrics is not None:
            data["metrics"] = self.metrics.to_dict()
        return data


@dataclass
class WorkflowValidation:
    """Structural report for one workflow file."""

    is_valid: bool
    jobs: List[str] = field(default_factory=list)
    triggers: List[str] = field(default_factory=list)
    branches: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    job_dependencies: Dict[str, List[str]] = field(default_factory=dict)
    security_features: List[str] = field(default_factory=list)
    security_warnings: List[str] = field(default_factory=list)
    environments: List[str] = field(default_factory=list)
    conditional_deployments: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "jobs": list(self.jobs),
            "triggers": list(self.triggers),
            "branches": list(self.branches),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "jobDependencies": {k: list(v) for k, v in self.job_dependencies.items()},
            "securityFeatures": list(self.security_features),
            "securityWarnings": list(self.security_warnings),
            "environments": list(self.environments),
            "conditionalDeployments": self.conditional_deployments,
        }


@dataclass
class EssentialSteps:
    checkout: bool = False
    setup_node: bool = False
    install_dependencies: bool = False
    lint: bool = False
    test: bool = False
    build: bool = False
    security_scan: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "checkout": self.checkout,
            "setupNode": self.setup_node,
            "installDependencies": self.install_dependencies,
            "lint": self.lint,
            "test": self.test,
            "build": self.build,
            "securityScan": self.security_scan,
        }


@dataclass
class StepValidation:
    is_valid: bool
    essential_steps: EssentialSteps
    missing_steps: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    optimizations: List[str] = field(default_factory=list)
    parallel_jobs: Optional[List[str]] = None
    job_dependencies: Optional[Dict[str, List[str]]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "isValid": self.is_valid,
            "essentialSteps": self.essential_steps.to_dict(),
            "missingSteps": list(self.missing_steps),
            "warnings": list(self.warnings),
            "optimizations": list(self.optimizations),
        }
        if self.parallel_jobs is not None:
            data["parallelJobs"] = list(self.parallel_jobs)
        if self.job_dependencies is not None:
            data["jobDependencies"] = {k: list(v) for k, v in self.job_dependencies.items()}
        return data
