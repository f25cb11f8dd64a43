import logging
import sys
from pathlib import Path

import typer

from validate_pipelines.cli import CLI, PipelineRunCLI, StandardCLI
from validate_pipelines.globals.cli_config import CLIConfig

app = typer.Typer(help="validate-pipelines: check CI workflow files and dry-run pipeline configs.")


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def validate(
    workflow_file: str = typer.Argument(
        default=None, help="Path to a specific workflow file to validate"
    ),
    quiet: bool = typer.Option(default=False, help="Suppress warnings in output"),
    json_output: bool = typer.Option(False, "--json", help="Print reports as JSON"),
    steps: bool = typer.Option(default=True, help="Also classify the steps of every job"),
    verbose: bool = typer.Option(default=False, help="Enable debug logging"),
):
    """Validate GitHub Actions workflow files.

    Checks structure, recommended jobs, job dependencies and security
    heuristics, and classifies the steps of the workflow.

    Examples:
        Validate all workflows:
            $ validate-pipelines validate

        Validate specific file:
            $ validate-pipelines validate .github/workflows/ci.yml

        Quiet mode (errors only):
            $ validate-pipelines validate --quiet
    """
    _configure_logging(verbose)
    config = CLIConfig(
        workflow_file=workflow_file,
        no_warnings=quiet,
        json_output=json_output,
        check_steps=steps,
        verbose=verbose,
    )

    cli: CLI = StandardCLI(config)
    sys.exit(cli.run())


@app.command()
def run(
    config_file: Path = typer.Argument(..., help="Pipeline config (YAML or JSON job map)"),
    validate_secrets: bool = typer.Option(
        default=False, help="Report declared secrets and environment per job"
    ),
    metrics: bool = typer.Option(default=False, help="Collect pipeline metrics"),
    json_output: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    verbose: bool = typer.Option(default=False, help="Enable debug logging"),
):
    """Dry-run a pipeline config in dependency order with simulated jobs."""
    _configure_logging(verbose)
    cli: CLI = PipelineRunCLI(
        config_file,
        validate_secrets=validate_secrets,
        collect_metrics=metrics,
        json_output=json_output,
    )
    sys.exit(cli.run())


if __name__ == "__main__":
    app()
