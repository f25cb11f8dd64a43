from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from validate_pipelines.globals.validation_result import ValidationResult


class ResultAggregator(ABC):
    """Collects per-file reports of one CLI run."""

    @abstractmethod
    def add_result(self, result: ValidationResult) -> None:
        pass

    @abstractmethod
    def get_total_errors(self) -> int:
        pass

    @abstractmethod
    def get_total_warnings(self) -> int:
        pass

    @abstractmethod
    def get_incomplete_workflows(self) -> List[Path]:
        """Files whose step classification misses an essential step."""
        pass

    @abstractmethod
    def get_exit_code(self) -> int:
        """0 when clean, 1 when any file has errors, 2 for warnings only."""
        pass

    @abstractmethod
    def get_results(self) -> List[ValidationResult]:
        pass


class StandardResultAggregator(ResultAggregator):
    """In-memory aggregation in the order files were validated.

    Warnings only count towards the exit code when they were reported,
    so a quiet run whose files merely miss essential steps still exits 0.
    """

    def __init__(self) -> None:
        self._results: List[ValidationResult] = []

    def add_result(self, result: ValidationResult) -> None:
        self._results.append(result)

    def get_total_errors(self) -> int:
        return sum(r.error_count for r in self._results)

    def get_total_warnings(self) -> int:
        return sum(r.warning_count for r in self._results)

    def get_incomplete_workflows(self) -> List[Path]:
        return [r.file for r in self._results if r.steps is not None and not r.steps.is_valid]

    def get_exit_code(self) -> int:
        if self.get_total_errors():
            return 1
        return 2 if self.get_total_warnings() else 0

    def get_results(self) -> List[ValidationResult]:
        return list(self._results)
