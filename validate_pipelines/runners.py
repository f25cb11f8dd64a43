"""Job runners: the seam between the scheduler and actual job execution.

The scheduler only ever awaits ``runner(label, job)``. Any async callable with
that signature works; ``JobRunner`` is a convenience base class for runners
that want a named ``execute`` method.
"""

import asyncio
import random
import time
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from validate_pipelines.domain_model.config import JobSpec
from validate_pipelines.domain_model.results import JobResult

RunnerOutcome = Union[JobResult, Mapping[str, Any]]
Runner = Callable[[str, JobSpec], Awaitable[RunnerOutcome]]


class JobRunner(ABC):
    """Interface for job runners."""

    @abstractmethod
    async def execute(self, label: str, job: JobSpec) -> RunnerOutcome:
        """Run one job (or one matrix variant of it).

        Args:
            label: Job name, or ``<job>-<combination JSON>`` for matrix variants
            job: The job's spec

        Returns:
            The outcome of the run. Raising is allowed and is recorded by the
            scheduler as a failed job.
        """
        pass

    async def __call__(self, label: str, job: JobSpec) -> RunnerOutcome:
        return await self.execute(label, job)


class SimulatedRunner(JobRunner):
    """Pretends to run a job by sleeping for a random delay.

    Used when no runner is supplied, so a pipeline config can be dry-run
    end to end without executing anything.
    """

    def __init__(self, max_delay_ms: float = 100, seed: Optional[int] = None) -> None:
        self.max_delay_ms = max_delay_ms
        self.random = random.Random(seed)

    async def execute(self, label: str, job: JobSpec) -> JobResult:
        start = time.perf_counter()
        await asyncio.sleep(self.random.random() * self.max_delay_ms / 1000)
        return JobResult(
            success=True,
            duration=round((time.perf_counter() - start) * 1000),
            output=f"{label} completed successfully",
        )
