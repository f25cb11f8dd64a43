"""Unit tests for result aggregation."""

from pathlib import Path

from validate_pipelines.cli_components.result_aggregator import StandardResultAggregator
from validate_pipelines.domain_model.results import (
    EssentialSteps,
    StepValidation,
    WorkflowValidation,
)
from validate_pipelines.globals.validation_result import ValidationResult


def make_result(errors=(), warnings=(), name="test.yml") -> ValidationResult:
    return ValidationResult(
        file=Path(name),
        workflow=WorkflowValidation(is_valid=not errors, errors=list(errors)),
        errors=list(errors),
        warnings=list(warnings),
    )


class TestStandardResultAggregator:
    """Unit tests for StandardResultAggregator."""

    def test_empty_aggregator_initial_state(self):
        """Test that empty aggregator has correct initial state."""
        aggregator = StandardResultAggregator()

        assert aggregator.get_total_errors() == 0
        assert aggregator.get_total_warnings() == 0
        assert aggregator.get_exit_code() == 0
        assert len(aggregator.get_results()) == 0

    def test_add_result_with_errors(self):
        """Test adding a result with errors."""
        aggregator = StandardResultAggregator()

        aggregator.add_result(make_result(errors=["Workflow file not found"]))

        assert aggregator.get_total_errors() == 1
        assert aggregator.get_total_warnings() == 0
        assert aggregator.get_exit_code() == 1
        assert len(aggregator.get_results()) == 1

    def test_add_result_with_warnings(self):
        """Test adding a result with warnings only."""
        aggregator = StandardResultAggregator()

        aggregator.add_result(make_result(warnings=["Missing recommended job: build"]))

        assert aggregator.get_total_errors() == 0
        assert aggregator.get_total_warnings() == 1
        assert aggregator.get_exit_code() == 2

    def test_add_multiple_results(self):
        """Test that counts add up and errors dominate the exit code."""
        aggregator = StandardResultAggregator()

        aggregator.add_result(make_result(warnings=["a", "b"], name="one.yml"))
        aggregator.add_result(make_result(errors=["c"], warnings=["d"], name="two.yml"))
        aggregator.add_result(make_result(name="three.yml"))

        assert aggregator.get_total_errors() == 1
        assert aggregator.get_total_warnings() == 3
        assert aggregator.get_exit_code() == 1
        assert [r.file.name for r in aggregator.get_results()] == ["one.yml", "two.yml", "three.yml"]

    def test_get_results_returns_copy(self):
        aggregator = StandardResultAggregator()
        aggregator.add_result(make_result())

        aggregator.get_results().clear()

        assert len(aggregator.get_results()) == 1

    def test_incomplete_workflows(self):
        """Only files whose classified steps miss a category are listed."""
        aggregator = StandardResultAggregator()
        complete = make_result(name="complete.yml")
        complete.steps = StepValidation(is_valid=True, essential_steps=EssentialSteps())
        incomplete = make_result(name="incomplete.yml")
        incomplete.steps = StepValidation(
            is_valid=False, essential_steps=EssentialSteps(), missing_steps=["lint"]
        )

        aggregator.add_result(complete)
        aggregator.add_result(incomplete)
        aggregator.add_result(make_result(name="unchecked.yml"))

        assert aggregator.get_incomplete_workflows() == [Path("incomplete.yml")]
