"""Heuristic classification of pipeline steps.

Every check here is plain substring matching on a step's action and run text.
It is a best-effort classifier: ``run: node --version`` counts as a Node.js
setup and ``run: pnpm install`` does not count as installing dependencies.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from validate_pipelines.domain_model.config import JobSpec, PipelineStep, normalize_needs
from validate_pipelines.domain_model.results import EssentialSteps, StepValidation

StepLike = Union[PipelineStep, Mapping[str, Any]]

NODE_CACHES = ("npm", "yarn")

# Literal checks only, no semver comparison
OUTDATED_ACTIONS = {
    "checkout@v3": "actions/checkout@v3 - consider upgrading to v4",
    "setup-node@v2": "actions/setup-node@v2 - consider upgrading to v4",
}


def _contains(text: Optional[str], *needles: str) -> bool:
    return text is not None and any(needle in text for needle in needles)


def _kebab_case(name: str) -> str:
    return name.replace("_", "-")


class StepClassifier(ABC):
    """Interface for step classifiers."""

    @abstractmethod
    def classify(
        self, steps: Sequence[StepLike], jobs: Optional[Mapping[str, Any]] = None
    ) -> StepValidation:
        pass


class DefaultStepClassifier(StepClassifier):
    def classify(
        self, steps: Sequence[StepLike], jobs: Optional[Mapping[str, Any]] = None
    ) -> StepValidation:
        parsed = [self._to_step(step) for step in steps]

        essential = self._essential_steps(parsed)
        missing = [
            _kebab_case(category)
            for category, present in vars(essential).items()
            if not present
        ]

        parallel_jobs: List[str] = []
        job_dependencies: Dict[str, List[str]] = {}
        for name, job in (jobs or {}).items():
            needs = self._needs_of(job)
            if not needs:
                parallel_jobs.append(name)
            job_dependencies[name] = needs

        return StepValidation(
            is_valid=not missing,
            essential_steps=essential,
            missing_steps=missing,
            warnings=self._version_warnings(parsed),
            optimizations=self._optimizations(parsed),
            parallel_jobs=parallel_jobs or None,
            job_dependencies=job_dependencies or None,
        )

    def _essential_steps(self, steps: List[PipelineStep]) -> EssentialSteps:
        return EssentialSteps(
            checkout=any(
                _contains(s.action, "checkout") or _contains(s.run, "checkout") for s in steps
            ),
            setup_node=any(
                _contains(s.action, "setup-node") or _contains(s.run, "node") for s in steps
            ),
            install_dependencies=any(
                _contains(s.run, "npm ci", "yarn install", "npm install") for s in steps
            ),
            lint=any(_contains(s.run, "lint", "eslint") for s in steps),
            test=any(_contains(s.run, "test", "jest", "vitest") for s in steps),
            build=any(_contains(s.run, "build", "compile") for s in steps),
            security_scan=any(
                _contains(s.run, "audit") or _contains(s.action, "security") for s in steps
            ),
        )

    def _version_warnings(self, steps: Iterable[PipelineStep]) -> List[str]:
        warnings = []
        for step in steps:
            if not step.action:
                continue
            for marker, warning in OUTDATED_ACTIONS.items():
                if marker in step.action:
                    warnings.append(warning)
        return warnings

    def _optimizations(self, steps: List[PipelineStep]) -> List[str]:
        optimizations = []
        if any(s.with_.get("cache") in NODE_CACHES for s in steps):
            optimizations.append("NPM cache configured")
        if any(_contains(s.action, "cache") or "cache" in s.name.lower() for s in steps):
            optimizations.append("Custom dependency cache configured")
        return optimizations

    @staticmethod
    def _to_step(step: StepLike) -> PipelineStep:
        if isinstance(step, PipelineStep):
            return step
        return PipelineStep.from_dict(step)

    @staticmethod
    def _needs_of(job: Any) -> List[str]:
        if isinstance(job, JobSpec):
            return list(job.needs)
        if isinstance(job, Mapping):
            return normalize_needs(job.get("needs"))
        return []


def validate_pipeline_steps(
    steps: Sequence[StepLike], jobs: Optional[Mapping[str, Any]] = None
) -> StepValidation:
    """Classify a flat step list, and optionally the job graph of a job map.

    Args:
        steps: Steps with optional ``action``/``uses``, ``run``, ``name`` and
            ``with`` entries
        jobs: Job name -> job config; when given, ``parallel_jobs`` and
            ``job_dependencies`` are filled in

    Returns:
        StepValidation: Essential-step flags, missing steps in kebab-case,
        outdated-action warnings and caching hints.
    """
    return DefaultStepClassifier().classify(steps, jobs)
