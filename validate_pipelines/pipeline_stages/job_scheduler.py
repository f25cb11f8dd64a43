"""Dependency-ordered execution of pipeline jobs.

Jobs run in topological waves: every job whose ``needs`` all have a result is
started at once with ``asyncio.gather``, and the next wave is computed after
the whole wave settled.

Dependency edges only order jobs. A failed or timed-out job still counts as
executed, so its dependents run anyway. Most CI systems skip such dependents
instead; this scheduler deliberately does not.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set

from validate_pipelines.domain_model.config import JobSpec, PipelineConfig, load_pipeline_config
from validate_pipelines.domain_model.results import JobResult, JobValidation, PipelineTestResult
from validate_pipelines.pipeline_stages.matrix import expand_matrix, variant_label
from validate_pipelines.pipeline_stages.metrics import compute_metrics
from validate_pipelines.runners import Runner, SimulatedRunner

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """Base class for faults that abort a whole pipeline run."""


class CircularDependencyError(PipelineError):
    """No queued job can start because its needs never get a result."""

    def __init__(self, pending: List[str]) -> None:
        self.pending = list(pending)
        super().__init__(f"Circular dependency detected in jobs: {', '.join(self.pending)}")


def _elapsed_ms(start: float) -> int:
    return round((time.perf_counter() - start) * 1000)


@dataclass
class RunContext:
    """Mutable state of a single scheduler run.

    Each job writes only its own slot in the result maps.
    """

    jobs: PipelineConfig
    executed: Set[str] = field(default_factory=set)
    job_results: Dict[str, JobResult] = field(default_factory=dict)
    matrix_results: Dict[str, List[JobResult]] = field(default_factory=dict)
    validation_results: Dict[str, JobValidation] = field(default_factory=dict)


class JobScheduler:
    """
    Runs a PipelineConfig wave by wave through an injected runner.

    Args:
        runner: Async callable ``(label, job) -> JobResult``; defaults to a
            SimulatedRunner
        validate_secrets: Echo each job's declared secrets and environment
            into ``validation_results``
        collect_metrics: Attach a PipelineMetrics block to the result
    """

    def __init__(
        self,
        runner: Optional[Runner] = None,
        validate_secrets: bool = False,
        collect_metrics: bool = False,
    ) -> None:
        self.runner: Runner = runner or SimulatedRunner()
        self.validate_secrets = validate_secrets
        self.collect_metrics = collect_metrics

    async def run(self, jobs: Mapping[str, Any]) -> PipelineTestResult:
        """Execute every job and aggregate the results.

        Raises:
            CircularDependencyError: If the remaining jobs can never become
                ready (a needs cycle or a need on an undeclared job).
        """
        start = time.perf_counter()
        context = RunContext(jobs=load_pipeline_config(jobs))
        queue = list(context.jobs)

        wave = 0
        while queue:
            ready = [
                name
                for name in queue
                if all(dep in context.executed for dep in context.jobs[name].needs)
            ]
            if not ready:
                raise CircularDependencyError(queue)

            wave += 1
            logger.debug(f"Wave {wave}: {ready}")
            await asyncio.gather(*(self._execute_job(context, name) for name in ready))

            queue = [name for name in queue if name not in ready]

        total_duration = _elapsed_ms(start)
        # Declaration order, not completion order
        job_results = {name: context.job_results[name] for name in context.jobs}

        result = PipelineTestResult(
            success=all(r.success for r in job_results.values()),
            jobs=job_results,
            total_duration=total_duration,
        )
        if context.matrix_results:
            result.matrix_results = context.matrix_results
        if context.validation_results:
            result.validation_results = context.validation_results
        if self.collect_metrics:
            result.metrics = compute_metrics(job_results, total_duration)
        return result

    async def _execute_job(self, context: RunContext, name: str) -> None:
        job = context.jobs[name]

        if job.matrix:
            variants = await self._run_matrix(name, job)
            context.matrix_results[name] = variants
            # The first variant stands for the whole job
            context.job_results[name] = (
                variants[0]
                if variants
                else JobResult(
                    success=False,
                    duration=0,
                    error=f"Matrix of job {name} expands to no combinations",
                )
            )
        else:
            context.job_results[name] = await self._run_single(name, job)

        if self.validate_secrets:
            context.validation_results[name] = JobValidation(
                required_secrets=list(job.required_secrets),
                environment_variables=dict(job.environment),
            )

        context.executed.add(name)

    async def _run_matrix(self, name: str, job: JobSpec) -> List[JobResult]:
        combinations = expand_matrix(job.matrix or {})
        logger.debug(f"Job {name}: {len(combinations)} matrix variants")
        results = await asyncio.gather(
            *(self._invoke(variant_label(name, combo), job) for combo in combinations)
        )
        return list(results)

    async def _run_single(self, name: str, job: JobSpec) -> JobResult:
        if not job.timeout:
            return await self._invoke(name, job)

        try:
            # wait_for cancels the runner call when the timeout fires
            return await asyncio.wait_for(self._invoke(name, job), timeout=job.timeout / 1000)
        except asyncio.TimeoutError:
            logger.warning(f"Job {name} exceeded its {job.timeout}ms timeout")
            return JobResult(
                success=False,
                duration=job.timeout,
                error=f"Job {name} exceeded its {job.timeout}ms timeout",
            )

    async def _invoke(self, label: str, job: JobSpec) -> JobResult:
        start = time.perf_counter()
        try:
            return JobResult.coerce(await self.runner(label, job))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Job {label} failed: {e}")
            return JobResult(success=False, duration=_elapsed_ms(start), error=str(e))


async def run_pipeline_jobs(
    jobs: Mapping[str, Any],
    runner: Optional[Runner] = None,
    validate_secrets: bool = False,
    collect_metrics: bool = False,
) -> PipelineTestResult:
    """Execute a pipeline config and return the aggregated result.

    Args:
        jobs: Job name -> JobSpec or plain job mapping
        runner: Async callable ``(label, job)`` performing the work
        validate_secrets: Echo declared secrets and environment per job
        collect_metrics: Attach counts, durations and parallel efficiency

    Returns:
        PipelineTestResult: One JobResult per declared job.

    Raises:
        CircularDependencyError: If the needs graph can never be satisfied.
    """
    scheduler = JobScheduler(runner, validate_secrets, collect_metrics)
    return await scheduler.run(jobs)


def run_pipeline_jobs_sync(
    jobs: Mapping[str, Any],
    runner: Optional[Runner] = None,
    validate_secrets: bool = False,
    collect_metrics: bool = False,
) -> PipelineTestResult:
    """Blocking wrapper around run_pipeline_jobs for callers without an event loop."""
    return asyncio.run(run_pipeline_jobs(jobs, runner, validate_secrets, collect_metrics))
