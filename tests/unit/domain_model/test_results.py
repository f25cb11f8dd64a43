import json

import pytest

from validate_pipelines.domain_model.results import (
    JobResult,
    JobValidation,
    PipelineMetrics,
    PipelineTestResult,
    WorkflowValidation,
)


class TestJobResult:
    def test_coerce_mapping(self):
        result = JobResult.coerce({"success": True, "duration": 12, "output": "ok"})

        assert result == JobResult(success=True, duration=12, output="ok")

    def test_coerce_passes_job_results_through(self):
        result = JobResult(success=False, duration=1, error="boom")

        assert JobResult.coerce(result) is result

    def test_coerce_rejects_other_types(self):
        with pytest.raises(TypeError):
            JobResult.coerce("ok")

    def test_to_dict_omits_unset_fields(self):
        assert JobResult(success=True, duration=45).to_dict() == {"success": True, "duration": 45}


class TestPipelineTestResult:
    def test_to_dict_minimal(self):
        result = PipelineTestResult(
            success=True, jobs={"lint": JobResult(success=True, duration=30)}, total_duration=31
        )

        assert result.to_dict() == {
            "success": True,
            "jobs": {"lint": {"success": True, "duration": 30}},
            "totalDuration": 31,
        }

    def test_to_dict_full_is_json_serializable(self):
        result = PipelineTestResult(
            success=False,
            jobs={"test": JobResult(success=False, duration=5, error="x")},
            total_duration=9,
            matrix_results={"test": [JobResult(success=False, duration=5, error="x")]},
            validation_results={"test": JobValidation(["TOKEN"], {"CI": "true"})},
            metrics=PipelineMetrics(1, 0, 1, 9, 5, 1.8),
        )

        data = json.loads(json.dumps(result.to_dict()))

        assert data["matrixResults"]["test"][0]["error"] == "x"
        assert data["validationResults"]["test"] == {
            "requiredSecrets": ["TOKEN"],
            "environmentVariables": {"CI": "true"},
        }
        assert data["metrics"]["failedJobs"] == 1


class TestWorkflowValidation:
    def test_defaults_are_empty(self):
        report = WorkflowValidation(is_valid=False, errors=["Workflow file not found"])

        assert report.to_dict() == {
            "isValid": False,
            "jobs": [],
            "triggers": [],
            "branches": [],
            "errors": ["Workflow file not found"],
            "warnings": [],
            "jobDependencies": {},
            "securityFeatures": [],
            "securityWarnings": [],
            "environments": [],
            "conditionalDeployments": False,
        }
