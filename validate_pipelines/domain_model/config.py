from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


def normalize_needs(needs_value: Any) -> List[str]:
    """Parse a job's needs field into a list of job names."""
    if needs_value is None:
        return []

    if isinstance(needs_value, str):
        return [needs_value]
    elif isinstance(needs_value, (list, tuple)):
        return [str(need) for need in needs_value]

    return []


@dataclass
class JobSpec:
    """A single job of a pipeline config.

    Attributes:
        name: Unique key of the job inside its PipelineConfig
        steps: Commands the job runs, passed through to the runner untouched
        timeout: Upper bound for the runner call in milliseconds, or None
        needs: Names of jobs that must have a result before this job starts
        environment: Declared environment variables
        required_secrets: Names of secrets the job declares it needs
        matrix: Axis name -> values; the job runs once per combination
    """

    name: str
    steps: List[str] = field(default_factory=list)
    timeout: Optional[int] = None
    needs: List[str] = field(default_factory=list)
    environment: Dict[str, str] = field(default_factory=dict)
    required_secrets: List[str] = field(default_factory=list)
    matrix: Optional[Dict[str, List[Any]]] = None

    @classmethod
    def from_dict(cls, name: str, data: Optional[Mapping[str, Any]]) -> "JobSpec":
        """Build a JobSpec from a parsed YAML/JSON mapping."""
        data = data or {}
        if not isinstance(data, Mapping):
            raise TypeError(f"Job '{name}' must be a mapping, got {type(data).__name__}")

        secrets = data.get("requiredSecrets", data.get("required_secrets"))
        timeout = data.get("timeout")

        environment = data.get("environment") or {}
        if not isinstance(environment, Mapping):
            raise TypeError(
                f"Job '{name}' environment must be a mapping of variables, "
                f"got {type(environment).__name__}"
            )

        return cls(
            name=name,
            steps=[str(step) for step in data.get("steps") or []],
            timeout=int(timeout) if timeout is not None else None,
            needs=normalize_needs(data.get("needs")),
            environment={str(k): str(v) for k, v in environment.items()},
            required_secrets=[str(s) for s in secrets or []],
            matrix=_parse_matrix(name, data.get("matrix")),
        )


def _parse_matrix(name: str, matrix: Any) -> Optional[Dict[str, List[Any]]]:
    if not matrix:
        return None
    if not isinstance(matrix, Mapping):
        raise TypeError(f"Job '{name}' matrix must be a mapping, got {type(matrix).__name__}")

    # A scalar axis is a single value, not a sequence of characters
    return {
        str(axis): list(values) if isinstance(values, (list, tuple)) else [values]
        for axis, values in matrix.items()
    }


# Job name -> spec, in declaration order
PipelineConfig = Dict[str, JobSpec]


def load_pipeline_config(data: Mapping[str, Any]) -> PipelineConfig:
    """Build a PipelineConfig from a mapping of job name to job definition.

    Values that already are JobSpec instances are kept as they are.
    """
    if not isinstance(data, Mapping):
        raise TypeError(f"Pipeline config must be a mapping, got {type(data).__name__}")

    config: PipelineConfig = {}
    for name, job in data.items():
        if isinstance(job, JobSpec):
            config[str(name)] = job
        else:
            config[str(name)] = JobSpec.from_dict(str(name), job)
    return config


@dataclass
class PipelineStep:
    """One entry of a flat step list handed to the step classifier."""

    name: str = ""
    action: Optional[str] = None
    run: Optional[str] = None
    with_: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PipelineStep":
        """Build a step from a mapping; a workflow's ``uses`` counts as ``action``."""
        action = data.get("action", data.get("uses"))
        run = data.get("run")
        with_ = data.get("with")
        return cls(
            name=str(data.get("name") or ""),
            action=str(action) if action is not None else None,
            run=str(run) if run is not None else None,
            with_=dict(with_) if isinstance(with_, Mapping) else {},
        )
