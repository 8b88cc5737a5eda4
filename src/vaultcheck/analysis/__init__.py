"""Analysis pipeline and derived views."""

from vaultcheck.analysis.jobs import EnrichedJob, RepoStats, aggregate_repo_stats, enrich_jobs
from vaultcheck.analysis.pipeline import AnalysisResult, analyze_healthcheck

__all__ = [
    "AnalysisResult",
    "EnrichedJob",
    "RepoStats",
    "aggregate_repo_stats",
    "analyze_healthcheck",
    "enrich_jobs",
]
