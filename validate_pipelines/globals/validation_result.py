from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from validate_pipelines.domain_model.results import StepValidation, WorkflowValidation


@dataclass
class ValidationResult:
    """
    Everything the CLI reports for one workflow file.

    Attributes:
        file: The validated workflow file
        workflow: Structural report of the file
        steps: Classification of all steps of the workflow, if requested
        errors: Error messages to display
        warnings: Warning messages to display (empty in quiet mode)
    """

    file: Path
    workflow: WorkflowValidation
    steps: Optional[StepValidation] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "file": str(self.file),
            "workflow": self.workflow.to_dict(),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
        if self.steps is not None:
            data["steps"] = self.steps.to_dict()
        return data
