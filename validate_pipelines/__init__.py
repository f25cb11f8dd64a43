"""validate-pipelines: CI workflow validation and dependency-ordered job execution.

This package checks GitHub Actions workflow files for structure, recommended
jobs and security heuristics, classifies pipeline steps, and executes a
pipeline config wave by wave through an injected async runner.

Example:
    CLI usage:
        $ validate-pipelines validate                 # Validate all workflows
        $ validate-pipelines validate workflow.yml   # Validate specific file
        $ validate-pipelines run pipeline.yml        # Dry-run a pipeline config

    Library usage:
        from validate_pipelines import run_pipeline_jobs, validate_workflow_file

        report = validate_workflow_file('.github/workflows/ci.yml')
        for warning in report.warnings:
            print(warning)

        result = await run_pipeline_jobs(jobs, runner=my_runner, collect_metrics=True)
"""

from .domain_model import (
    EssentialSteps,
    JobResult,
    JobSpec,
    JobValidation,
    PipelineConfig,
    PipelineMetrics,
    PipelineStep,
    PipelineTestResult,
    StepValidation,
    WorkflowValidation,
    load_pipeline_config,
)
from .pipeline_stages import (
    CircularDependencyError,
    JobScheduler,
    PipelineError,
    compute_metrics,
    expand_matrix,
    run_pipeline_jobs,
    run_pipeline_jobs_sync,
    validate_pipeline_steps,
    validate_workflow_file,
)
from .runners import JobRunner, SimulatedRunner

__all__ = [
    # Operations
    "validate_workflow_file",
    "validate_pipeline_steps",
    "run_pipeline_jobs",
    "run_pipeline_jobs_sync",
    "compute_metrics",
    "expand_matrix",
    # Config model
    "JobSpec",
    "PipelineConfig",
    "PipelineStep",
    "load_pipeline_config",
    # Results
    "EssentialSteps",
    "JobResult",
    "JobValidation",
    "PipelineMetrics",
    "PipelineTestResult",
    "StepValidation",
    "WorkflowValidation",
    # Scheduler
    "JobScheduler",
    "PipelineError",
    "CircularDependencyError",
    "JobRunner",
    "SimulatedRunner",
]
