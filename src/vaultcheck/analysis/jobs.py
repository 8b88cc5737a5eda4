"""Job-level views: session enrichment and per-repository totals."""

from collections.abc import Collection, Iterable
from dataclasses import dataclass

from vaultcheck.schemas.records import Job, JobSession
from vaultcheck.sizing.aggregator import GB_PER_TB


@dataclass(frozen=True)
class EnrichedJob:
    """A job paired with its session statistics, if the export has any."""

    job: Job
    session: JobSession | None = None


@dataclass
class RepoStats:
    """Summed job sizes for one repository, in TB."""

    source_tb: float = 0.0
    on_disk_tb: float = 0.0


def enrich_jobs(jobs: Iterable[Job], sessions: Iterable[JobSession]) -> list[EnrichedJob]:
    """
    Attach session statistics to each job by exact job name.

    The session summary should hold one row per job; when a name repeats,
    the last row wins.

    Args:
        jobs: Normalized jobs.
        sessions: Normalized session summaries.

    Returns:
        One EnrichedJob per job, in job order.
    """
    by_name = {session.job_name: session for session in sessions}
    return [EnrichedJob(job=job, session=by_name.get(job.job_name)) for job in jobs]


def aggregate_repo_stats(
    jobs: Iterable[Job], repos: Collection[str] | None = None
) -> dict[str, RepoStats]:
    """
    Sum source and on-disk sizes per target repository.

    Jobs without a size contribute 0 to that total.

    Args:
        jobs: Normalized jobs.
        repos: Optional repository names to restrict the totals to.

    Returns:
        Mapping of repository name to its totals, in first-seen order.
    """
    stats: dict[str, RepoStats] = {}
    for job in jobs:
        if repos is not None and job.repo_name not in repos:
            continue
        entry = stats.setdefault(job.repo_name, RepoStats())
        if job.source_size_gb is not None:
            entry.source_tb += job.source_size_gb / GB_PER_TB
        if job.on_disk_gb is not None:
            entry.on_disk_tb += job.on_disk_gb / GB_PER_TB
    return stats
