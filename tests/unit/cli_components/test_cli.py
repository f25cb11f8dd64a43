import json
import tempfile
from pathlib import Path
from unittest.mock import Mock, patch

from validate_pipelines.cli import PipelineRunCLI, StandardCLI
from validate_pipelines.domain_model.results import JobResult, WorkflowValidation
from validate_pipelines.globals.cli_config import CLIConfig
from validate_pipelines.globals.validation_result import ValidationResult


class TestStandardCLI:
    def test_run_directory_success(self):
        """Test _run_directory validates every workflow file it finds."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            workflows_dir = temp_path / ".github" / "workflows"
            workflows_dir.mkdir(parents=True)

            workflow1 = workflows_dir / "test1.yml"
            workflow2 = workflows_dir / "test2.yaml"
            workflow1.write_text("name: test1\non: push\njobs:\n  test:\n    runs-on: ubuntu-latest")
            workflow2.write_text("name: test2\non: pull_request\njobs:\n  test: {}")

            config = CLIConfig(workflow_file=None)
            formatter = Mock()
            aggregator = Mock()
            aggregator.get_exit_code.return_value = 0
            aggregator.get_incomplete_workflows.return_value = []
            service = Mock()
            result1 = ValidationResult(workflow1, WorkflowValidation(is_valid=True))
            result2 = ValidationResult(workflow2, WorkflowValidation(is_valid=True))
            service.validate_file.side_effect = [result1, result2]

            cli = StandardCLI(config, formatter, aggregator, service)

            with patch.object(cli, "_find_workflows_directory", return_value=temp_path):
                with patch("builtins.print"):
                    exit_code = cli._run_directory()

        assert exit_code == 0
        assert aggregator.add_result.call_count == 2
        aggregator.add_result.assert_any_call(result1)
        aggregator.add_result.assert_any_call(result2)

    def test_run_directory_without_workflows_dir(self):
        cli = StandardCLI(CLIConfig())

        with patch.object(cli, "_find_workflows_directory", return_value=None):
            with patch("builtins.print") as mock_print:
                exit_code = cli.run()

        assert exit_code == 1
        assert "Could not find .github/workflows directory" in mock_print.call_args[0][0]

    def test_run_directory_without_workflow_files(self, tmp_path):
        (tmp_path / ".github" / "workflows").mkdir(parents=True)
        cli = StandardCLI(CLIConfig())

        with patch.object(cli, "_find_workflows_directory", return_value=tmp_path):
            with patch("builtins.print") as mock_print:
                exit_code = cli.run()

        assert exit_code == 1
        assert "No workflow files" in mock_print.call_args[0][0]

    def test_run_single_file_exit_codes(self, sample_workflow, temp_workflow_file):
        path = temp_workflow_file(sample_workflow)

        with patch("builtins.print"):
            warnings_exit = StandardCLI(CLIConfig(workflow_file=str(path))).run()
            quiet_exit = StandardCLI(CLIConfig(workflow_file=str(path), no_warnings=True)).run()
            missing_exit = StandardCLI(CLIConfig(workflow_file=str(path) + ".missing")).run()

        assert warnings_exit == 2
        assert quiet_exit == 0
        assert missing_exit == 1

    def test_summary_names_workflows_missing_essential_steps(
        self, sample_workflow, temp_workflow_file
    ):
        path = temp_workflow_file(sample_workflow)

        with patch("builtins.print") as mock_print:
            StandardCLI(CLIConfig(workflow_file=str(path))).run()
        printed = "\n".join(str(call.args[0]) for call in mock_print.call_args_list)

        assert f"Missing essential steps in: {path.name}" in printed

    def test_json_output(self, sample_workflow, temp_workflow_file):
        path = temp_workflow_file(sample_workflow)
        cli = StandardCLI(CLIConfig(workflow_file=str(path), json_output=True))

        with patch("builtins.print") as mock_print:
            cli.run()

        data = json.loads(mock_print.call_args[0][0])
        assert data[0]["file"] == str(path)
        assert data[0]["workflow"]["jobs"] == ["test", "build", "deploy"]
        assert "steps" in data[0]


class TestPipelineRunCLI:
    def test_runs_config_file(self, temp_workflow_file):
        path = temp_workflow_file(
            "lint:\n  steps: [npm run lint]\nbuild:\n  needs: lint\n  steps: [npm run build]\n"
        )
        calls = []

        async def runner(label, job):
            calls.append(label)
            return JobResult(success=True, duration=5)

        with patch("builtins.print"):
            exit_code = PipelineRunCLI(path, runner=runner).run()

        assert exit_code == 0
        assert calls == ["lint", "build"]

    def test_failed_job_exit_code(self, temp_workflow_file):
        path = temp_workflow_file('{"lint": {}}', suffix=".json")

        async def runner(label, job):
            raise RuntimeError("eslint crashed")

        with patch("builtins.print") as mock_print:
            exit_code = PipelineRunCLI(path, runner=runner).run()

        assert exit_code == 1
        printed = "\n".join(str(call.args[0]) for call in mock_print.call_args_list)
        assert "eslint crashed" in printed

    def test_circular_dependency_exit_code(self, temp_workflow_file):
        path = temp_workflow_file("a:\n  needs: b\nb:\n  needs: a\n")

        with patch("builtins.print") as mock_print:
            exit_code = PipelineRunCLI(path).run()

        assert exit_code == 1
        assert "Circular dependency detected" in mock_print.call_args[0][0]

    def test_unreadable_config(self, tmp_path):
        with patch("builtins.print") as mock_print:
            exit_code = PipelineRunCLI(tmp_path / "missing.yml").run()

        assert exit_code == 1
        assert "Could not load pipeline config" in mock_print.call_args[0][0]

    def test_json_output_with_metrics(self, temp_workflow_file):
        path = temp_workflow_file(
            "deploy:\n  requiredSecrets: [DEPLOY_KEY]\n  matrix:\n    region: [eu, us]\n"
        )

        with patch("builtins.print") as mock_print:
            exit_code = PipelineRunCLI(
                path, validate_secrets=True, collect_metrics=True, json_output=True
            ).run()

        data = json.loads(mock_print.call_args[0][0])
        assert exit_code == 0
        assert len(data["matrixResults"]["deploy"]) == 2
        assert data["validationResults"]["deploy"]["requiredSecrets"] == ["DEPLOY_KEY"]
        assert data["metrics"]["totalJobs"] == 1
