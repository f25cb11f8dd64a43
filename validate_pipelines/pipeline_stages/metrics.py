from typing import Mapping

from validate_pipelines.domain_model.results import JobResult, PipelineMetrics


def compute_metrics(job_results: Mapping[str, JobResult], total_duration: float) -> PipelineMetrics:
    """Summarize a finished run.

    ``parallel_efficiency`` is ``total_duration / average_job_duration``, a
    coarse indicator of how much concurrency the run achieved. It is 0 when
    there is nothing to average.
    """
    total_jobs = len(job_results)
    successful_jobs = sum(1 for result in job_results.values() if result.success)
    durations = sum(result.duration for result in job_results.values())

    average_job_duration = durations / total_jobs if total_jobs else 0
    parallel_efficiency = total_duration / average_job_duration if average_job_duration > 0 else 0

    return PipelineMetrics(
        total_jobs=total_jobs,
        successful_jobs=successful_jobs,
        failed_jobs=total_jobs - successful_jobs,
        total_duration=total_duration,
        average_job_duration=average_job_duration,
        parallel_efficiency=parallel_efficiency,
    )
