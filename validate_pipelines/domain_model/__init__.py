from .config import JobSpec, PipelineConfig, PipelineStep, load_pipeline_config, normalize_needs
from .results import (
    EssentialSteps,
    JobResult,
    JobValidation,
    PipelineMetrics,
    PipelineTestResult,
    StepValidation,
    WorkflowValidation,
)

__all__ = [
    "JobSpec",
    "PipelineConfig",
    "PipelineStep",
    "load_pipeline_config",
    "normalize_needs",
    "EssentialSteps",
    "JobResult",
    "JobValidation",
    "PipelineMetrics",
    "PipelineTestResult",
    "StepValidation",
    "WorkflowValidation",
]
