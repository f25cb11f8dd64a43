"""Pipeline stages: structural validation, step classification and job scheduling.

This module provides the components that check a workflow file, classify its
steps, and execute a pipeline config in dependency order.
"""

from .job_scheduler import (
    CircularDependencyError,
    JobScheduler,
    PipelineError,
    run_pipeline_jobs,
    run_pipeline_jobs_sync,
)
from .matrix import expand_matrix, variant_label
from .metrics import compute_metrics
from .step_classifier import DefaultStepClassifier, StepClassifier, validate_pipeline_steps
from .workflow_validator import DefaultWorkflowValidator, WorkflowValidator, validate_workflow_file

__all__ = [
    "CircularDependencyError",
    "JobScheduler",
    "PipelineError",
    "run_pipeline_jobs",
    "run_pipeline_jobs_sync",
    "expand_matrix",
    "variant_label",
    "compute_metrics",
    "DefaultStepClassifier",
    "StepClassifier",
    "validate_pipeline_steps",
    "DefaultWorkflowValidator",
    "WorkflowValidator",
    "validate_workflow_file",
]
